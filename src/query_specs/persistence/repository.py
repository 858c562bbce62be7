from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from ..exceptions import SessionManagementError
from ..repository import SpecificationRepository
from .evaluator import SQLAlchemyEvaluator

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncSession

    from ..specification import Specification
    from .strategy import SQLAlchemyOperatorRegistry

    AsyncSessionFactory = Callable[[], AsyncSession]

T = TypeVar("T")


class SQLAlchemySpecificationRepository(SpecificationRepository[T]):
    """
    Specification repository backed by an SQLAlchemy ``AsyncSession``.

    Supports two session patterns:

    1. **Caller-managed session**::

           repo = SQLAlchemySpecificationRepository(TodoRecord, session=session)

       The session (and its transaction) belongs to the caller.

    2. **Self-managed sessions**::

           factory = async_sessionmaker(engine, expire_on_commit=False)
           repo = SQLAlchemySpecificationRepository(
               TodoRecord, session_factory=factory
           )

       Each read opens and closes its own session.

    Exactly one of ``session`` or ``session_factory`` must be provided.
    """

    def __init__(
        self,
        model: type[T],
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
        *,
        evaluator: SQLAlchemyEvaluator[T] | None = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'. "
                "Use either caller-managed (session) or self-managed "
                "(session_factory) pattern."
            )
        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'."
            )
        self.model = model
        self._session = session
        self._session_factory = session_factory
        self._evaluator = evaluator or SQLAlchemyEvaluator(model, registry=registry)

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[AsyncSession]:
        if self._session_factory is None:
            if self._session is None:
                raise SessionManagementError("Repository has no session source.")
            yield self._session
            return
        async with self._session_factory() as session:
            yield session

    async def _evaluate(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> list[Any]:
        async with self._session_scope() as session:
            return await self._evaluator.evaluate(
                session, spec, cancellation=cancellation
            )

    async def _count(
        self,
        spec: Specification[T],
        cancellation: asyncio.Event | None,
    ) -> int:
        async with self._session_scope() as session:
            return await self._evaluator.count(session, spec, cancellation=cancellation)
