"""Attribute-path resolution shared by criteria, orderings and projections."""

from __future__ import annotations

from typing import Any

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def get_value(obj: Any, name: str) -> Any:
    """Read one attribute (or mapping key) from *obj*, ``None`` when absent."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def resolve_path(obj: Any, attr_path: str) -> list[Any]:
    """
    Resolve a dot-separated attribute path to every leaf value it reaches.

    ``address.city`` follows a to-one relation; ``tags.name`` fans out over
    a collection and returns one entry per related item.  A missing
    intermediate object contributes no values, so a predicate over
    ``owner.name`` is never satisfied when ``owner`` is ``None``.  This
    matches ``EXISTS`` semantics of the SQLAlchemy ``has()`` / ``any()``
    translation.

    A single-segment path always yields exactly one value (possibly
    ``None``).
    """
    parts = attr_path.split(".")
    current: list[Any] = [obj]
    last = len(parts) - 1
    for index, part in enumerate(parts):
        resolved: list[Any] = []
        for item in current:
            value = get_value(item, part)
            if index == last:
                resolved.append(value)
            elif value is None:
                continue
            elif isinstance(value, _COLLECTION_TYPES):
                resolved.extend(value)
            else:
                resolved.append(value)
        current = resolved
    return current


def resolve_field(obj: Any, attr_path: str) -> Any:
    """Resolve *attr_path* to a single value (the first reached, or ``None``)."""
    values = resolve_path(obj, attr_path)
    return values[0] if values else None
