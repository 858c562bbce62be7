"""
Projection shapes.

A projection turns an entity into a derived value after filtering and
ordering.  Three shapes are accepted by the builder and normalised by
:func:`as_projection`:

- a sequence of attribute names → :class:`FieldProjection` (``dict`` rows,
  translated to a column select by the SQLAlchemy evaluator)
- a pydantic model class → :class:`ModelProjection`
  (``Model.model_validate(entity, from_attributes=True)``)
- any other callable ``entity -> value``
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .utils import get_value

Projection = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldProjection:
    """Project an entity onto a ``dict`` of selected attributes."""

    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("FieldProjection requires at least one field")

    def __call__(self, entity: Any) -> dict[str, Any]:
        return {name: get_value(entity, name) for name in self.fields}

    def describe(self) -> str:
        return f"fields({', '.join(self.fields)})"


@dataclass(frozen=True)
class ModelProjection:
    """Project an entity into a pydantic model read from its attributes."""

    model: type[BaseModel]

    def __call__(self, entity: Any) -> BaseModel:
        return self.model.model_validate(entity, from_attributes=True)

    def describe(self) -> str:
        return f"model({self.model.__name__})"


def as_projection(projection: Any) -> Projection:
    """Normalise a builder argument into a projection callable."""
    if isinstance(projection, FieldProjection | ModelProjection):
        return projection
    if isinstance(projection, type) and issubclass(projection, BaseModel):
        return ModelProjection(projection)
    if isinstance(projection, str):
        return FieldProjection((projection,))
    if isinstance(projection, Sequence):
        return FieldProjection(tuple(projection))
    if callable(projection):
        return projection
    raise TypeError(
        "projection must be a callable, a pydantic model class or a "
        f"sequence of field names, got {type(projection).__name__}"
    )


def describe_projection(projection: Projection) -> str:
    describe = getattr(projection, "describe", None)
    if describe is not None:
        return str(describe())
    return getattr(projection, "__qualname__", type(projection).__name__)
