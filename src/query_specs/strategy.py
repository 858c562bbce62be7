"""
Operator strategies for in-memory evaluation.

Every leaf operator is a small :class:`MemoryOperator` object.  A
:class:`MemoryOperatorRegistry` maps :class:`SpecificationOperator` values
to those objects; :class:`~query_specs.ast.AttributeSpecification` asks the
registry to compare a resolved field value with the criterion value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import OperatorNotFoundError

if TYPE_CHECKING:
    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """
    One comparison evaluated in Python.

    Results must agree with the SQLAlchemy operator of the same name,
    including SQL ``NULL`` handling: a ``None`` field satisfies only the
    null checks (and ``=`` against ``None``).
    """

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator: ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """Compare the candidate's *field_value* with *condition_value*."""
        ...


class MemoryOperatorRegistry:
    """
    Mutable lookup table of in-memory operators.

    Registering an operator under an existing name replaces it, which is
    how callers override built-in behaviour::

        registry = build_default_registry()
        registry.register(CaseFoldEqualOperator())
    """

    def __init__(self) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}

    def register(self, operator: MemoryOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for operator in operators:
            self.register(operator)

    def unregister(self, name: SpecificationOperator) -> None:
        self._operators.pop(name, None)

    def get(self, name: SpecificationOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def evaluate(
        self,
        name: SpecificationOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Run the operator registered under *name*.

        Raises:
            OperatorNotFoundError: nothing is registered under *name*.
        """
        operator = self._operators.get(name)
        if operator is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                [registered.value for registered in self._operators],
            )
        return operator.evaluate(field_value, condition_value)
