"""
Text operators for SQLAlchemy.

Pattern operators pass the value through untouched. The substring family
compiles with ``autoescape=True`` so ``%`` and ``_`` in the value match
literally, as they do in memory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, cast

from ...operators import SpecificationOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _ColumnMethod(SQLAlchemyOperator):
    """Calls ``column.<method>(value, **options)``."""

    method: ClassVar[str]
    options: ClassVar[dict[str, Any]] = {}

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        clause = getattr(column, self.method)(value, **self.options)
        return cast("ColumnElement[bool]", clause)


class _Substring(_ColumnMethod):
    options = {"autoescape": True}


class LikeOperator(_ColumnMethod):
    name = SpecificationOperator.LIKE
    method = "like"


class NotLikeOperator(_ColumnMethod):
    name = SpecificationOperator.NOT_LIKE
    method = "not_like"


class ILikeOperator(_ColumnMethod):
    name = SpecificationOperator.ILIKE
    method = "ilike"


class ContainsOperator(_Substring):
    name = SpecificationOperator.CONTAINS
    method = "contains"


class IContainsOperator(_Substring):
    name = SpecificationOperator.ICONTAINS
    method = "icontains"


class StartsWithOperator(_Substring):
    name = SpecificationOperator.STARTSWITH
    method = "startswith"


class IStartsWithOperator(_Substring):
    name = SpecificationOperator.ISTARTSWITH
    method = "istartswith"


class EndsWithOperator(_Substring):
    name = SpecificationOperator.ENDSWITH
    method = "endswith"


class IEndsWithOperator(_Substring):
    name = SpecificationOperator.IENDSWITH
    method = "iendswith"


OPERATORS: tuple[SQLAlchemyOperator, ...] = (
    LikeOperator(),
    NotLikeOperator(),
    ILikeOperator(),
    ContainsOperator(),
    IContainsOperator(),
    StartsWithOperator(),
    IStartsWithOperator(),
    EndsWithOperator(),
    IEndsWithOperator(),
)
