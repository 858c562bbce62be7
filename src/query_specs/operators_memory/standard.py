"""Comparison operators: =, !=, >, <, >=, <=."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator


class EqualOperator(MemoryOperator):
    """``= None`` matches missing values, mirroring ``IS NULL``."""

    name = SpecificationOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    """``NULL != x`` is never true in SQL; ``!= None`` means ``IS NOT NULL``."""

    name = SpecificationOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if condition_value is None:
            return field_value is not None
        return field_value is not None and bool(field_value != condition_value)


class _OrderingComparison(MemoryOperator):
    compare: Callable[[Any, Any], Any]

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return bool(self.compare(field_value, condition_value))


class GreaterThanOperator(_OrderingComparison):
    name = SpecificationOperator.GT
    compare = staticmethod(operator.gt)


class LessThanOperator(_OrderingComparison):
    name = SpecificationOperator.LT
    compare = staticmethod(operator.lt)


class GreaterEqualOperator(_OrderingComparison):
    name = SpecificationOperator.GE
    compare = staticmethod(operator.ge)


class LessEqualOperator(_OrderingComparison):
    name = SpecificationOperator.LE
    compare = staticmethod(operator.le)


OPERATORS: tuple[MemoryOperator, ...] = (
    EqualOperator(),
    NotEqualOperator(),
    GreaterThanOperator(),
    LessThanOperator(),
    GreaterEqualOperator(),
    LessEqualOperator(),
)
