"""Membership and range operators: in, not_in, between, not_between."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator


class _NullNeverMatches(MemoryOperator):
    """SQL drops rows whose field is NULL, even under ``NOT IN``."""

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return self.test(field_value, condition_value)

    @abstractmethod
    def test(self, field_value: Any, condition_value: Any) -> bool: ...


class InOperator(_NullNeverMatches):
    name = SpecificationOperator.IN

    def test(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in condition_value


class NotInOperator(_NullNeverMatches):
    """``x NOT IN (..., NULL)`` is never true in SQL."""

    name = SpecificationOperator.NOT_IN

    def test(self, field_value: Any, condition_value: Any) -> bool:
        values = list(condition_value)
        return None not in values and field_value not in values


class BetweenOperator(_NullNeverMatches):
    """Inclusive on both bounds; a ``None`` bound never matches."""

    name = SpecificationOperator.BETWEEN

    def test(self, field_value: Any, condition_value: Any) -> bool:
        low, high = condition_value
        if low is None or high is None:
            return False
        return bool(low <= field_value <= high)


class NotBetweenOperator(_NullNeverMatches):
    """True when the value is definitely outside one of the known bounds."""

    name = SpecificationOperator.NOT_BETWEEN

    def test(self, field_value: Any, condition_value: Any) -> bool:
        low, high = condition_value
        below = low is not None and field_value < low
        above = high is not None and field_value > high
        return bool(below or above)


OPERATORS: tuple[MemoryOperator, ...] = (
    InOperator(),
    NotInOperator(),
    BetweenOperator(),
    NotBetweenOperator(),
)
