"""Membership and range operators for SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import not_

from ...operators import SpecificationOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class InOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.in_(list(value)))


class NotInOperator(SQLAlchemyOperator):
    name = SpecificationOperator.NOT_IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_in(list(value)))


class BetweenOperator(SQLAlchemyOperator):
    name = SpecificationOperator.BETWEEN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        low, high = value
        return cast("ColumnElement[bool]", column.between(low, high))


class NotBetweenOperator(BetweenOperator):
    name = SpecificationOperator.NOT_BETWEEN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return not_(super().apply(column, value))


OPERATORS: tuple[SQLAlchemyOperator, ...] = (
    InOperator(),
    NotInOperator(),
    BetweenOperator(),
    NotBetweenOperator(),
)
