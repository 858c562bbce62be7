"""Comparison operators compiled with Python's operator overloads."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from ...operators import SpecificationOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _Comparison(SQLAlchemyOperator):
    """
    ``column <op> value``.

    SQLAlchemy renders ``== None`` as ``IS NULL`` and ``!= None`` as
    ``IS NOT NULL``, which is what the in-memory operators emulate.
    """

    compare: Callable[[Any, Any], Any]

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", self.compare(column, value))


class EqualOperator(_Comparison):
    name = SpecificationOperator.EQ
    compare = staticmethod(operator.eq)


class NotEqualOperator(_Comparison):
    name = SpecificationOperator.NE
    compare = staticmethod(operator.ne)


class GreaterThanOperator(_Comparison):
    name = SpecificationOperator.GT
    compare = staticmethod(operator.gt)


class LessThanOperator(_Comparison):
    name = SpecificationOperator.LT
    compare = staticmethod(operator.lt)


class GreaterEqualOperator(_Comparison):
    name = SpecificationOperator.GE
    compare = staticmethod(operator.ge)


class LessEqualOperator(_Comparison):
    name = SpecificationOperator.LE
    compare = staticmethod(operator.le)


OPERATORS: tuple[SQLAlchemyOperator, ...] = (
    EqualOperator(),
    NotEqualOperator(),
    GreaterThanOperator(),
    LessThanOperator(),
    GreaterEqualOperator(),
    LessEqualOperator(),
)
