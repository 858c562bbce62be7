"""
Repository façade shared by every backend.

Subclasses only provide ``_evaluate`` and ``_count``; the result shaping
(single value, paging metadata, projection checks) lives here so that
both backends behave identically.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import MissingProjection
from .pagination import PagedResult

if TYPE_CHECKING:
    import asyncio

    from .specification import Specification

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SpecificationRepository(ABC, Generic[T]):
    """Read operations driven by a :class:`Specification`."""

    # -- backend hooks ------------------------------------------------------

    @abstractmethod
    async def _evaluate(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> list[Any]:
        """Run the full pipeline and return entities or projected values."""
        ...

    @abstractmethod
    async def _count(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> int:
        """Count rows matching the criteria only."""
        ...

    # -- entity reads -------------------------------------------------------

    async def find(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> list[T]:
        return await self._evaluate(spec.without_projection(), cancellation)

    async def find_one(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> T | None:
        items = await self._evaluate(
            _first_row_window(spec.without_projection()), cancellation
        )
        return items[0] if items else None

    async def count(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> int:
        return await self._count(spec, cancellation)

    async def find_paged(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> PagedResult[T]:
        return await self._paged(spec.without_projection(), cancellation)

    # -- projected reads ----------------------------------------------------

    async def find_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> list[Any]:
        _require_projection(spec, "find_projected")
        return await self._evaluate(spec, cancellation)

    async def find_one_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> Any | None:
        _require_projection(spec, "find_one_projected")
        items = await self._evaluate(_first_row_window(spec), cancellation)
        return items[0] if items else None

    async def find_paged_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> PagedResult[Any]:
        _require_projection(spec, "find_paged_projected")
        return await self._paged(spec, cancellation)

    # -- internals ----------------------------------------------------------

    async def _paged(
        self, spec: Specification[T], cancellation: asyncio.Event | None
    ) -> PagedResult[Any]:
        spec.validate_paging()
        total_count = await self._count(spec, cancellation)
        items = await self._evaluate(spec, cancellation)
        result: PagedResult[Any] = PagedResult.create(
            items, total_count, spec.offset, spec.take
        )
        logger.debug(
            "Paged query: page %d/%d (size %d, total %d)",
            result.page_number,
            result.total_pages,
            result.page_size,
            result.total_count,
        )
        return result


def _first_row_window(spec: Specification[T]) -> Specification[T]:
    """Narrow the window to one row, keeping ``take=0`` empty."""
    if spec.take is not None and spec.take <= 1:
        return spec
    return spec.with_window(spec.skip, 1)


def _require_projection(spec: Specification[Any], operation: str) -> None:
    if not spec.has_projection:
        raise MissingProjection(operation)
