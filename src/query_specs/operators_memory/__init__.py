"""
Built-in in-memory operators.

Each module exposes its strategies as an ``OPERATORS`` tuple;
:func:`build_default_registry` registers all of them::

    registry = build_default_registry()
    registry.evaluate(SpecificationOperator.ILIKE, "Todo 01", "todo%")
"""

from __future__ import annotations

from ..strategy import MemoryOperatorRegistry
from . import null, standard, string
from . import set as set_ops


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry holding every built-in operator.

    Each call returns a fresh registry, so callers may register or
    unregister operators without touching ``DEFAULT_MEMORY_REGISTRY``.
    """
    registry = MemoryOperatorRegistry()
    for module in (standard, set_ops, string, null):
        registry.register_all(*module.OPERATORS)
    return registry


DEFAULT_MEMORY_REGISTRY: MemoryOperatorRegistry = build_default_registry()

__all__ = [
    "DEFAULT_MEMORY_REGISTRY",
    "build_default_registry",
]
