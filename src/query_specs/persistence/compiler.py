"""
Translate specification parts into SQLAlchemy constructs.

Criteria arrive as the ``to_dict()`` tree.  ``build_sqla_filter`` folds its
logical nodes into ``and_``/``or_``/``not_`` and hands each leaf to a
``SQLAlchemyOperatorRegistry``.

Orderings, includes and field projections are translated by the
``compile_*`` helpers.  Anything that has no SQL form (bare callables,
unknown attributes, paths through non-relationships) raises
:class:`~query_specs.exceptions.UnsupportedExpression`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import ColumnElement, and_, false, func, inspect, not_, or_
from sqlalchemy.orm import selectinload

from ..base import ISpecification
from ..exceptions import FieldNotFoundError, UnsupportedExpression
from ..operators import SpecificationOperator
from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from ..projection import FieldProjection
    from ..specification import Criterion, Ordering
    from .strategy import SQLAlchemyOperatorRegistry

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Compile a criterion tree (the output of ``to_dict()``) for *model*.

    Leaf operators are looked up in *registry*, or in
    ``DEFAULT_SQLA_REGISTRY`` when none is given.  Unknown attributes raise
    :class:`FieldNotFoundError`; anything else without a SQL form raises
    :class:`UnsupportedExpression`.
    """
    return _compile_node(model, data, registry or DEFAULT_SQLA_REGISTRY)


def compile_criterion(
    model: type[Any],
    criterion: Criterion,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """Compile one specification criterion; bare callables are rejected."""
    if not isinstance(criterion, ISpecification):
        raise UnsupportedExpression(
            criterion, "predicate callables only run in memory"
        )
    return build_sqla_filter(model, criterion.to_dict(), registry=registry)


def compile_ordering(model: type[Any], ordering: Ordering) -> Any:
    """Compile an ordering to ``ASC NULLS FIRST`` / ``DESC NULLS LAST``."""
    key = ordering.key
    if not isinstance(key, str):
        raise UnsupportedExpression(key, "ordering callables only run in memory")
    if "." in key:
        raise UnsupportedExpression(
            key, "ordering by a related attribute requires an explicit join"
        )
    column = _column(model, key, full_path=key)
    if ordering.descending:
        return column.desc().nulls_last()
    return column.asc().nulls_first()


def compile_include(model: type[Any], path: str) -> _AbstractLoad:
    """Compile a (dotted) relation path to a chained ``selectinload``."""
    loader: Any = None
    current = model
    for name in path.split("."):
        attr = _relationship(current, name, full_path=path)
        loader = selectinload(attr) if loader is None else loader.selectinload(attr)
        current = attr.property.mapper.class_
    return cast("_AbstractLoad", loader)


def compile_field_projection(
    model: type[Any], projection: FieldProjection
) -> list[Any]:
    """Labelled columns for a field projection (``row._mapping`` → dict)."""
    columns = []
    for name in projection.fields:
        if "." in name:
            raise UnsupportedExpression(
                name, "field projections select columns of the root model only"
            )
        columns.append(_column(model, name, full_path=name).label(name))
    return columns


# ---------------------------------------------------------------------------
# AST walk
# ---------------------------------------------------------------------------


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()
    try:
        op = SpecificationOperator(op_str)
    except ValueError as exc:
        raise UnsupportedExpression(op_str, "unknown operator") from exc

    if not op.is_logical:
        return _compile_leaf(model, data, registry, op)

    children = [
        _compile_node(model, child, registry) for child in data.get("conditions", [])
    ]
    if op is SpecificationOperator.OR:
        return or_(*children)
    if op is SpecificationOperator.AND:
        return and_(*children)
    if not children:
        raise UnsupportedExpression("not", "NOT requires one condition")
    inner = children[0] if len(children) == 1 else and_(*children)
    # NULL counts as false before negation, as it does in memory
    return not_(func.coalesce(inner, false()))


def _compile_leaf(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    op: SpecificationOperator,
) -> ColumnElement[bool]:
    """
    Compile ``{"attr": ..., "op": ..., "val": ...}``.

    Each dotted segment before the last must be a relationship; the
    condition is wrapped in ``any()`` for collections and ``has()`` for
    scalar relations, innermost first.
    """
    path: str | None = data.get("attr")
    if not path:
        raise UnsupportedExpression(str(data), "leaf condition is missing 'attr'")

    *relations, field = path.split(".")
    hops = []
    current = model
    for name in relations:
        rel = _relationship(current, name, full_path=path)
        hops.append(rel)
        current = rel.property.mapper.class_

    column = _column(current, field, full_path=path)
    clause = registry.apply(op, column, data.get("val"))
    for rel in reversed(hops):
        wrap = rel.any if rel.property.uselist else rel.has
        clause = cast("ColumnElement[bool]", wrap(clause))
    return clause


# ---------------------------------------------------------------------------
# Attribute lookup
# ---------------------------------------------------------------------------


def _mapper(model: type[Any]) -> Mapper[Any]:
    return cast("Mapper[Any]", inspect(model))


def _field_names(mapper: Mapper[Any]) -> list[str]:
    return [k for k in mapper.all_orm_descriptors.keys() if not k.startswith("_")]


def _column(model: type[Any], name: str, *, full_path: str) -> Any:
    """Return a queryable, non-relationship attribute of *model*."""
    mapper = _mapper(model)
    if name.startswith("_") or name not in mapper.all_orm_descriptors.keys():
        raise FieldNotFoundError(
            name, model.__name__, _field_names(mapper), full_path=full_path
        )
    if name in mapper.relationships.keys():
        raise UnsupportedExpression(
            full_path,
            f"'{name}' is a relationship on '{model.__name__}'; "
            "compare one of its attributes instead",
        )
    return getattr(model, name)


def _relationship(model: type[Any], name: str, *, full_path: str) -> Any:
    """Return a relationship attribute of *model*."""
    mapper = _mapper(model)
    if name in mapper.relationships.keys():
        return getattr(model, name)
    if name in mapper.all_orm_descriptors.keys():
        raise UnsupportedExpression(
            full_path,
            f"cannot traverse '{name}' on '{model.__name__}': "
            "it is not a relationship",
        )
    raise FieldNotFoundError(
        name, model.__name__, _field_names(mapper), full_path=full_path
    )
