"""Presence checks. The condition value is ignored."""

from __future__ import annotations

from typing import Any

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator


def _is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, list | tuple | set | frozenset | dict) and not value


class IsNullOperator(MemoryOperator):
    name = SpecificationOperator.IS_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is None


class IsNotNullOperator(MemoryOperator):
    name = SpecificationOperator.IS_NOT_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is not None


class IsEmptyOperator(MemoryOperator):
    """True for None, the empty string and empty collections."""

    name = SpecificationOperator.IS_EMPTY

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return _is_empty(field_value)


class IsNotEmptyOperator(MemoryOperator):
    name = SpecificationOperator.IS_NOT_EMPTY

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return not _is_empty(field_value)


OPERATORS: tuple[MemoryOperator, ...] = (
    IsNullOperator(),
    IsNotNullOperator(),
    IsEmptyOperator(),
    IsNotEmptyOperator(),
)
