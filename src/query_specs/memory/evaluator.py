"""In-memory specification evaluator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from ..utils import resolve_field

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..specification import Ordering, OrderingKey, Specification

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryEvaluator:
    """
    Apply a :class:`Specification` directly to a Python iterable.

    The pipeline matches the SQLAlchemy evaluator stage for stage:

    1. criteria (``is_satisfied_by`` or the predicate callable)
    2. includes: no-op, relations are already in memory
    3. orderings, then the *tiebreaker* attribute ascending; ``None``
       sorts first ascending and last descending (``NULLS FIRST`` /
       ``NULLS LAST``)
    4. projection
    5. ``skip`` / ``take``

    Evaluation is synchronous and never raises ``UnsupportedExpression``.
    """

    def __init__(self, *, tiebreaker: str | None = "id") -> None:
        self.tiebreaker = tiebreaker

    def evaluate(
        self,
        source: Iterable[T],
        spec: Specification[T],
        *,
        criteria_only: bool = False,
    ) -> list[Any]:
        spec.validate_paging()
        items = [item for item in source if spec.is_satisfied_by(item)]
        if criteria_only:
            return items

        items = self._order(items, spec.orderings)

        results: list[Any] = items
        if spec.projection is not None:
            results = [spec.projection(item) for item in items]

        start = spec.offset
        stop = start + spec.take if spec.take is not None else None
        page = results[start:stop]
        logger.debug(
            "In-memory evaluation matched %d item(s), returning %d",
            len(items),
            len(page),
        )
        return page

    def count(self, source: Iterable[T], spec: Specification[T]) -> int:
        return len(self.evaluate(source, spec, criteria_only=True))

    # -- ordering -----------------------------------------------------------

    def _order(self, items: list[T], orderings: tuple[Ordering, ...]) -> list[T]:
        # Stable sorts applied from the least significant key upwards.
        ordered = list(items)
        if self.tiebreaker is not None:
            ordered.sort(key=_null_safe_key(self.tiebreaker))
        for ordering in reversed(orderings):
            ordered.sort(key=_null_safe_key(ordering.key), reverse=ordering.descending)
        return ordered


def _null_safe_key(key: OrderingKey) -> Any:
    def sort_key(item: Any) -> tuple[bool, Any]:
        value = key(item) if callable(key) else resolve_field(item, key)
        # None groups ahead of every value; reverse=True moves it last.
        return (value is not None, value if value is not None else 0)

    return sort_key
