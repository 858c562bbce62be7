"""Shared fixtures: operator registry, both Todo repositories, SQLite session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from todo_models import Base, Todo, TodoRecord, build_records, build_todos

from query_specs.memory import InMemorySpecificationRepository
from query_specs.operators_memory import build_default_registry
from query_specs.persistence import (
    SQLAlchemySpecificationRepository,
    setup_sqlite_engine,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.fixture
def registry():
    """Default in-memory operator registry for building specs."""
    return build_default_registry()


@pytest.fixture
def todos() -> list[Todo]:
    return build_todos()


@pytest.fixture
def memory_repo(todos: list[Todo]) -> InMemorySpecificationRepository[Todo]:
    return InMemorySpecificationRepository(todos)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    setup_sqlite_engine(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as sess:
        sess.add_all(build_records())
        await sess.commit()


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession], seeded: None
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as sess:
        yield sess


@pytest.fixture
def sql_repo(session: AsyncSession) -> SQLAlchemySpecificationRepository[Any]:
    return SQLAlchemySpecificationRepository(TodoRecord, session=session)
