"""
Operator strategies for the SQLAlchemy compiler.

The SQL twin of :mod:`query_specs.strategy`: each
:class:`SQLAlchemyOperator` turns a mapped column and a criterion value
into a boolean clause.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..exceptions import UnsupportedExpression

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from ..operators import SpecificationOperator


class SQLAlchemyOperator(ABC):
    """One operator compiled to a ``ColumnElement[bool]``."""

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator: ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """Build the clause for *column* (an instrumented attribute) and *value*."""
        ...


class SQLAlchemyOperatorRegistry:
    """Mutable lookup table of SQL operators; later registrations win."""

    def __init__(self) -> None:
        self._operators: dict[SpecificationOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for operator in operators:
            self.register(operator)

    def unregister(self, name: SpecificationOperator) -> None:
        self._operators.pop(name, None)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def apply(
        self,
        name: SpecificationOperator,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Compile with the operator registered under *name*.

        Raises:
            UnsupportedExpression: nothing is registered under *name*, so
                the criterion has no SQL form.
        """
        operator = self._operators.get(name)
        if operator is None:
            raise UnsupportedExpression(
                str(getattr(name, "value", name)),
                "operator is not registered for SQLAlchemy",
            )
        return operator.apply(column, value)
