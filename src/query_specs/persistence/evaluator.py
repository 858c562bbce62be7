"""SQLAlchemy (async ORM) specification evaluator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import Select, func, inspect, select

from ..cancellation import run_cancellable
from ..projection import FieldProjection
from .compiler import (
    compile_criterion,
    compile_field_projection,
    compile_include,
    compile_ordering,
)

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncSession

    from ..specification import Specification
    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLAlchemyEvaluator(Generic[T]):
    """
    Translate a :class:`Specification` into a ``Select`` and run it.

    ``build_query`` is lazy: it only produces the statement, in the same
    stage order as the in-memory evaluator (criteria → ``selectinload``
    includes → ``ORDER BY`` → column projection → ``OFFSET`` / ``LIMIT``).
    ``evaluate`` and ``count`` execute it on an ``AsyncSession`` and honour
    an optional ``asyncio.Event`` cancellation signal.

    Args:
        model: Mapped ORM class queried by this evaluator.
        registry: Operator registry; defaults to ``DEFAULT_SQLA_REGISTRY``.
        tiebreaker: Column appended ascending to every ordering so rows
            with equal keys come back in a stable order.  ``None`` disables
            it; a name the model does not map is ignored.
    """

    def __init__(
        self,
        model: type[T],
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
        tiebreaker: str | None = "id",
    ) -> None:
        self.model = model
        self._registry = registry
        self.tiebreaker = tiebreaker

    # -- query construction -------------------------------------------------

    def build_query(
        self,
        spec: Specification[T],
        *,
        criteria_only: bool = False,
    ) -> Select[Any]:
        """Build the statement for *spec* without executing it."""
        spec.validate_paging()
        field_projection = (
            spec.projection
            if isinstance(spec.projection, FieldProjection) and not criteria_only
            else None
        )

        stmt: Select[Any]
        if field_projection is not None:
            stmt = select(*compile_field_projection(self.model, field_projection))
        else:
            stmt = select(self.model)

        for criterion in spec.criteria:
            stmt = stmt.where(
                compile_criterion(self.model, criterion, registry=self._registry)
            )
        if criteria_only:
            return stmt

        if field_projection is None:
            for path in sorted(spec.includes):
                stmt = stmt.options(compile_include(self.model, path))

        order_clauses = [compile_ordering(self.model, o) for o in spec.orderings]
        tiebreak = self._tiebreak_column()
        if tiebreak is not None:
            order_clauses.append(tiebreak.asc().nulls_first())
        if order_clauses:
            stmt = stmt.order_by(*order_clauses)

        if spec.skip:
            stmt = stmt.offset(spec.skip)
        if spec.take is not None:
            stmt = stmt.limit(spec.take)
        return stmt

    def build_count_query(self, spec: Specification[T]) -> Select[Any]:
        """``SELECT count(*)`` over the criteria-only statement."""
        inner = self.build_query(spec, criteria_only=True).subquery()
        return select(func.count()).select_from(inner)

    # -- execution ----------------------------------------------------------

    async def evaluate(
        self,
        source: AsyncSession,
        spec: Specification[T],
        *,
        criteria_only: bool = False,
        cancellation: asyncio.Event | None = None,
    ) -> list[Any]:
        stmt = self.build_query(spec, criteria_only=criteria_only)
        logger.debug(
            "Evaluating specification on %s: %s", self.model.__name__, spec.to_dict()
        )

        if isinstance(spec.projection, FieldProjection) and not criteria_only:
            rows = await run_cancellable(source.execute(stmt), cancellation)
            return [dict(row._mapping) for row in rows]

        scalars = await run_cancellable(source.scalars(stmt), cancellation)
        entities = list(scalars.all())

        if spec.tracking_disabled:
            for entity in entities:
                if entity in source:
                    source.expunge(entity)

        if spec.projection is not None and not criteria_only:
            return [spec.projection(entity) for entity in entities]
        return entities

    async def count(
        self,
        source: AsyncSession,
        spec: Specification[T],
        *,
        cancellation: asyncio.Event | None = None,
    ) -> int:
        stmt = self.build_count_query(spec)
        value = await run_cancellable(source.scalar(stmt), cancellation)
        return int(value or 0)

    # -- internals ----------------------------------------------------------

    def _tiebreak_column(self) -> Any | None:
        if self.tiebreaker is None:
            return None
        mapper = inspect(self.model)
        if self.tiebreaker not in mapper.column_attrs.keys():
            logger.debug(
                "Tiebreaker %r is not mapped on %s; skipping",
                self.tiebreaker,
                self.model.__name__,
            )
            return None
        return getattr(self.model, self.tiebreaker)
