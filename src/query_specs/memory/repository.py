"""InMemorySpecificationRepository: a list-backed fake for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..cancellation import raise_if_cancelled
from ..repository import SpecificationRepository
from .evaluator import InMemoryEvaluator

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterable

    from ..specification import Specification

T = TypeVar("T")


class InMemorySpecificationRepository(SpecificationRepository[T]):
    """In-memory implementation of the specification repository.

    Holds entities in insertion order.  The evaluator is synchronous, so
    the cancellation signal is only checked before evaluation starts.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        evaluator: InMemoryEvaluator | None = None,
    ) -> None:
        self._items: list[T] = list(items)
        self._evaluator = evaluator or InMemoryEvaluator()

    async def _evaluate(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> list[Any]:
        raise_if_cancelled(cancellation)
        return self._evaluator.evaluate(self._items, spec)

    async def _count(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> int:
        raise_if_cancelled(cancellation)
        return self._evaluator.count(self._items, spec)

    # ── Test helpers ─────────────────────────────────────────────

    def seed(self, *items: T) -> None:
        self._items.extend(items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
