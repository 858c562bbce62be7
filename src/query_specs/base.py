"""
Criterion primitives and their boolean composition.

A criterion is anything with ``is_satisfied_by`` (used by the in-memory
evaluator) and ``to_dict`` (the tree the SQLAlchemy compiler reads).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol, Generic[T]):
    """A translatable filter criterion."""

    def is_satisfied_by(self, candidate: T) -> bool: ...

    def to_dict(self) -> dict[str, Any]: ...


class BaseSpecification(ABC, Generic[T]):
    """
    Adds ``&``, ``|`` and ``~`` to a criterion.

    Composition happens before a criterion reaches the builder; a
    :class:`~query_specs.specification.Specification` itself only
    AND-combines the criteria it holds.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)


class _CompositeSpecification(BaseSpecification[T]):
    op: str

    def __init__(self, *specifications: ISpecification[T]) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        conditions = [child.to_dict() for child in self.specifications]
        return {"op": self.op, "conditions": conditions}

    def __repr__(self) -> str:
        inner = ", ".join(repr(child) for child in self.specifications)
        return f"{type(self).__name__}({inner})"


class AndSpecification(_CompositeSpecification[T]):
    """Satisfied when every child is (vacuously true with no children)."""

    op = "and"

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(child.is_satisfied_by(candidate) for child in self.specifications)


class OrSpecification(_CompositeSpecification[T]):
    """Satisfied when at least one child is."""

    op = "or"

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(child.is_satisfied_by(candidate) for child in self.specifications)


class NotSpecification(_CompositeSpecification[T]):
    op = "not"

    def __init__(self, specification: ISpecification[T]) -> None:
        super().__init__(specification)

    @property
    def specification(self) -> ISpecification[T]:
        return self.specifications[0]

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)
