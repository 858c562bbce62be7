"""
Text operators.

``like``, ``not_like`` and ``ilike`` take SQL patterns (``%`` and ``_``).
The substring family (``contains``, ``startswith``, ``endswith`` and
their case-insensitive ``i*`` twins) matches the value literally.
Values are compared through ``str()``; a ``None`` field never matches.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import Any, ClassVar

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator

_WILDCARDS = {"%": ".*", "_": "."}


def _like_regex(pattern: str, *, ignore_case: bool) -> re.Pattern[str]:
    body = "".join(_WILDCARDS.get(char) or re.escape(char) for char in pattern)
    flags = re.DOTALL | (re.IGNORECASE if ignore_case else 0)
    return re.compile(body, flags)


class _TextOperator(MemoryOperator):
    ignore_case: ClassVar[bool] = False

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        text, needle = str(field_value), str(condition_value)
        if self.ignore_case:
            text, needle = text.lower(), needle.lower()
        return self.match(text, needle)

    @abstractmethod
    def match(self, text: str, needle: str) -> bool: ...


class LikeOperator(MemoryOperator):
    name = SpecificationOperator.LIKE
    ignore_case: ClassVar[bool] = False

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        regex = _like_regex(str(condition_value), ignore_case=self.ignore_case)
        return regex.fullmatch(str(field_value)) is not None


class NotLikeOperator(LikeOperator):
    name = SpecificationOperator.NOT_LIKE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return not super().evaluate(field_value, condition_value)


class ILikeOperator(LikeOperator):
    name = SpecificationOperator.ILIKE
    ignore_case = True


class ContainsOperator(_TextOperator):
    name = SpecificationOperator.CONTAINS

    def match(self, text: str, needle: str) -> bool:
        return needle in text


class IContainsOperator(ContainsOperator):
    name = SpecificationOperator.ICONTAINS
    ignore_case = True


class StartsWithOperator(_TextOperator):
    name = SpecificationOperator.STARTSWITH

    def match(self, text: str, needle: str) -> bool:
        return text.startswith(needle)


class IStartsWithOperator(StartsWithOperator):
    name = SpecificationOperator.ISTARTSWITH
    ignore_case = True


class EndsWithOperator(_TextOperator):
    name = SpecificationOperator.ENDSWITH

    def match(self, text: str, needle: str) -> bool:
        return text.endswith(needle)


class IEndsWithOperator(EndsWithOperator):
    name = SpecificationOperator.IENDSWITH
    ignore_case = True


OPERATORS: tuple[MemoryOperator, ...] = (
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
