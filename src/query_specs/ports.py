"""Evaluator and repository protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    import asyncio

    from .pagination import PagedResult
    from .specification import Specification

T = TypeVar("T")
S = TypeVar("S", contravariant=True)


@runtime_checkable
class ISpecificationEvaluator(Protocol[S]):
    """
    Synchronous evaluator over an in-process source.

    ``criteria_only=True`` applies only the criteria and ignores includes,
    orderings, projection and paging.
    """

    def evaluate(
        self,
        source: S,
        spec: Specification[Any],
        *,
        criteria_only: bool = False,
    ) -> list[Any]: ...

    def count(self, source: S, spec: Specification[Any]) -> int: ...


@runtime_checkable
class IAsyncSpecificationEvaluator(Protocol[S]):
    """Evaluator whose backend suspends while the query executes."""

    async def evaluate(
        self,
        source: S,
        spec: Specification[Any],
        *,
        criteria_only: bool = False,
        cancellation: asyncio.Event | None = None,
    ) -> list[Any]: ...

    async def count(
        self,
        source: S,
        spec: Specification[Any],
        *,
        cancellation: asyncio.Event | None = None,
    ) -> int: ...


@runtime_checkable
class ISpecificationRepository(Protocol[T]):
    """
    Read-only, specification-driven repository.

    No operation treats "no rows" as an error: sequences come back empty
    and single-value lookups return ``None``.
    """

    async def find(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> list[T]: ...

    async def find_one(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> T | None: ...

    async def count(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> int: ...

    async def find_paged(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> PagedResult[T]: ...

    async def find_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> list[Any]: ...

    async def find_one_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> Any | None: ...

    async def find_paged_projected(
        self, spec: Specification[T], cancellation: asyncio.Event | None = None
    ) -> PagedResult[Any]: ...
