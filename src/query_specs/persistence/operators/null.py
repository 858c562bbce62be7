"""Presence checks for SQLAlchemy. ``is_empty`` means NULL or ``''``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, or_

from ...operators import SpecificationOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class IsNullOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_NULL

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_(None))


class IsNotNullOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_NOT_NULL

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_not(None))


class IsEmptyOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_EMPTY

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return or_(column.is_(None), column == "")


class IsNotEmptyOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_NOT_EMPTY

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return and_(column.is_not(None), column != "")


OPERATORS: tuple[SQLAlchemyOperator, ...] = (
    IsNullOperator(),
    IsNotNullOperator(),
    IsEmptyOperator(),
    IsNotEmptyOperator(),
)
