"""
Immutable query specification.

A :class:`Specification` describes *what* to fetch: filter criteria,
relations to eager-load, ordering, a paging window, an optional projection
and a tracking hint.  It is produced by
:class:`~query_specs.builder.SpecificationBuilder` and evaluated by an
evaluator in a fixed pipeline order::

    filter → include → order → project → page

Specifications carry no identity; they are built per request, may be
shared freely between concurrent callers and are discarded after use.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from .base import ISpecification
from .exceptions import InvalidPaging
from .projection import Projection, describe_projection

T = TypeVar("T")

Criterion = Union[ISpecification[Any], Callable[[Any], bool]]
OrderingKey = Union[str, Callable[[Any], Any]]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Ordering:
    """One ordering key.

    ``key`` is an attribute path (translatable to SQL) or a callable
    (in-memory only).  ``None`` values sort first ascending, last
    descending.
    """

    key: OrderingKey
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    @classmethod
    def parse(cls, expr: str) -> Ordering:
        """Parse ``"name"`` / ``"-created_at"`` shorthand."""
        if expr.startswith("-"):
            return cls(expr[1:], SortDirection.DESC)
        return cls(expr, SortDirection.ASC)

    def to_dict(self) -> dict[str, Any]:
        key = self.key if isinstance(self.key, str) else _callable_name(self.key)
        return {"key": key, "direction": self.direction.value}


@dataclass(frozen=True)
class Specification(Generic[T]):
    """
    Immutable description of a query.

    Attributes:
        criteria: Predicates combined with logical AND.
        includes: Relation paths to load eagerly; order-insensitive.
        orderings: Keys applied in order (primary, secondary, ...).
        skip: Rows to skip after ordering (``None`` = 0).
        take: Maximum rows to return (``None`` = all remaining).
        projection: Transform applied after ordering, before paging.
        tracking_disabled: Results need not stay attached to a session.
    """

    criteria: tuple[Criterion, ...] = ()
    includes: frozenset[str] = field(default_factory=frozenset)
    orderings: tuple[Ordering, ...] = ()
    skip: int | None = None
    take: int | None = None
    projection: Projection | None = None
    tracking_disabled: bool = False

    # -- derived views -------------------------------------------------------

    @property
    def has_projection(self) -> bool:
        return self.projection is not None

    @property
    def is_paged(self) -> bool:
        return self.skip is not None or self.take is not None

    @property
    def offset(self) -> int:
        """Effective number of rows skipped."""
        return self.skip or 0

    def without_paging(self) -> Specification[T]:
        return replace(self, skip=None, take=None)

    def without_projection(self) -> Specification[T]:
        return replace(self, projection=None)

    def with_window(self, skip: int | None, take: int | None) -> Specification[T]:
        return replace(self, skip=skip, take=take)

    # -- checks --------------------------------------------------------------

    def validate_paging(self) -> None:
        """Raise :class:`InvalidPaging` for a negative ``skip`` or ``take``."""
        for name, value in (("skip", self.skip), ("take", self.take)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidPaging(name, value)

    def is_satisfied_by(self, candidate: T) -> bool:
        """True when *candidate* satisfies every criterion."""
        return all(_check(criterion, candidate) for criterion in self.criteria)

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary (for logs and APIs)."""
        result: dict[str, Any] = {
            "criteria": [
                c.to_dict() if isinstance(c, ISpecification) else _callable_name(c)
                for c in self.criteria
            ],
        }
        if self.includes:
            result["includes"] = sorted(self.includes)
        if self.orderings:
            result["order_by"] = [o.to_dict() for o in self.orderings]
        if self.skip is not None:
            result["skip"] = self.skip
        if self.take is not None:
            result["take"] = self.take
        if self.projection is not None:
            result["projection"] = describe_projection(self.projection)
        if self.tracking_disabled:
            result["tracking_disabled"] = True
        return result


def _check(criterion: Criterion, candidate: Any) -> bool:
    if isinstance(criterion, ISpecification):
        return bool(criterion.is_satisfied_by(candidate))
    return bool(criterion(candidate))


def _callable_name(func: Any) -> str:
    return f"<{getattr(func, '__qualname__', type(func).__name__)}>"
