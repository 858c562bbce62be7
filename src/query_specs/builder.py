"""
Fluent builder for query specifications.

Example::

    spec = (
        SpecificationBuilder()
        .where("status", "=", "active")
        .where("age", ">", 18)
        .include("tags")
        .order_by("-created_at")
        .order_by("id")
        .skip(20)
        .take(10)
        .build()
    )

Semantics of repeated calls:

- ``where``, ``include`` and ``order_by`` are cumulative: each call appends
  (includes are a set, so duplicates collapse).
- ``skip``, ``take``, ``page`` and ``select`` replace the previous value
  (last write wins).

``build()`` returns a new immutable :class:`Specification` snapshot every
time it is called.  The builder stays usable afterwards; further calls
never affect snapshots that were already built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .ast import AttributeSpecification
from .projection import as_projection
from .specification import Ordering, SortDirection, Specification

if TYPE_CHECKING:
    from .operators import SpecificationOperator
    from .projection import Projection
    from .specification import Criterion, OrderingKey
    from .strategy import MemoryOperatorRegistry

T = TypeVar("T")


class SpecificationBuilder(Generic[T]):
    """Accumulates query parts privately and finalises them with ``build()``."""

    def __init__(
        self,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self._registry = registry
        self.reset()

    # -- criteria ------------------------------------------------------------

    def where(
        self,
        criterion: Criterion | str,
        op: SpecificationOperator | str | None = None,
        val: Any = None,
    ) -> SpecificationBuilder[T]:
        """
        Append a criterion (AND-combined with the others).

        Either pass a ready criterion (an ``ISpecification`` or a callable
        predicate), or the ``attr, op, val`` triple of an
        :class:`AttributeSpecification`.
        """
        if isinstance(criterion, str):
            if op is None:
                raise ValueError(f"where('{criterion}', ...) requires an operator")
            criterion = AttributeSpecification(
                criterion, op, val, registry=self._registry
            )
        elif op is not None:
            raise ValueError("An operator is only accepted with an attribute name")
        self._criteria.append(criterion)
        return self

    # -- includes ------------------------------------------------------------

    def include(self, relation: str) -> SpecificationBuilder[T]:
        """Eager-load a relation (dotted paths load nested relations)."""
        if not relation:
            raise ValueError("Relation name must not be empty")
        self._includes.add(relation)
        return self

    # -- ordering ------------------------------------------------------------

    def order_by(
        self,
        key: OrderingKey,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> SpecificationBuilder[T]:
        """
        Append an ordering key.

        A string key prefixed with ``-`` is descending, e.g. ``"-created_at"``.
        """
        if isinstance(key, str) and key.startswith("-"):
            self._orderings.append(Ordering.parse(key))
        else:
            self._orderings.append(Ordering(key, SortDirection(direction)))
        return self

    def order_by_descending(self, key: OrderingKey) -> SpecificationBuilder[T]:
        return self.order_by(key, SortDirection.DESC)

    # -- paging --------------------------------------------------------------

    def skip(self, count: int) -> SpecificationBuilder[T]:
        """Set the number of rows to skip.  Validated at evaluation time."""
        self._skip = count
        return self

    def take(self, count: int) -> SpecificationBuilder[T]:
        """Set the maximum number of rows.  Validated at evaluation time."""
        self._take = count
        return self

    def page(self, number: int, size: int) -> SpecificationBuilder[T]:
        """Set the window to the 1-based page *number* of *size* rows."""
        if number < 1:
            raise ValueError(f"Page number must be >= 1, got {number}")
        self._skip = (number - 1) * size
        self._take = size
        return self

    # -- projection / tracking -----------------------------------------------

    def select(self, projection: Projection | Any) -> SpecificationBuilder[T]:
        """Set the projection (callable, pydantic model or field names)."""
        self._projection = as_projection(projection)
        return self

    def no_tracking(self) -> SpecificationBuilder[T]:
        self._tracking_disabled = True
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> Specification[T]:
        """Return an immutable snapshot of the current builder state."""
        return Specification(
            criteria=tuple(self._criteria),
            includes=frozenset(self._includes),
            orderings=tuple(self._orderings),
            skip=self._skip,
            take=self._take,
            projection=self._projection,
            tracking_disabled=self._tracking_disabled,
        )

    def reset(self) -> SpecificationBuilder[T]:
        """Clear all state and return ``self`` for reuse."""
        self._criteria: list[Criterion] = []
        self._includes: set[str] = set()
        self._orderings: list[Ordering] = []
        self._skip: int | None = None
        self._take: int | None = None
        self._projection: Projection | None = None
        self._tracking_disabled = False
        return self
