"""
Specification evaluation on SQLAlchemy.

Public API:
    - ``SQLAlchemyEvaluator``: builds and runs ``Select`` statements
    - ``SQLAlchemySpecificationRepository``: repository façade over an
      ``AsyncSession``
    - ``build_sqla_filter(model, data)``: compile a criterion dict to a
      ``ColumnElement[bool]``
    - ``DEFAULT_SQLA_REGISTRY``: the default operator registry
    - ``SQLAlchemyOperator`` / ``SQLAlchemyOperatorRegistry``: extension
      points for custom operators
    - ``setup_sqlite_engine(engine)``: case-sensitive ``LIKE`` on SQLite
"""

from .compiler import (
    build_sqla_filter,
    compile_criterion,
    compile_field_projection,
    compile_include,
    compile_ordering,
)
from .evaluator import SQLAlchemyEvaluator
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .repository import SQLAlchemySpecificationRepository
from .sqlite import setup_sqlite_engine
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "SQLAlchemyEvaluator",
    "SQLAlchemySpecificationRepository",
    "build_sqla_filter",
    "compile_criterion",
    "compile_ordering",
    "compile_include",
    "compile_field_projection",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "setup_sqlite_engine",
]
