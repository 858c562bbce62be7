"""
Built-in SQLAlchemy operators.

Mirrors :mod:`query_specs.operators_memory` operator for operator, so a
criterion compiles to SQL with the same meaning it has in memory.
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from . import null, standard, string
from . import set as set_ops


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a fresh registry holding every built-in SQLAlchemy operator."""
    registry = SQLAlchemyOperatorRegistry()
    for module in (standard, set_ops, string, null):
        registry.register_all(*module.OPERATORS)
    return registry


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
]
