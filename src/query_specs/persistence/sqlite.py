"""
SQLite connection setup.

SQLite's ``LIKE`` ignores ASCII case by default, so ``like``, ``contains``,
``startswith`` and ``endswith`` would match more rows there than in memory
or on PostgreSQL.  Call :func:`setup_sqlite_engine` once per engine::

    engine = create_async_engine("sqlite+aiosqlite:///app.db")
    setup_sqlite_engine(engine)

The ``i*`` operators and ``ilike`` compile to ``lower(...) LIKE lower(...)``
on SQLite and stay case-insensitive.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


def setup_sqlite_engine(engine: Engine | AsyncEngine) -> None:
    """Make ``LIKE`` case-sensitive on every new connection of *engine*.

    Accepts an async engine too; the listener goes on its ``sync_engine``.
    """
    listen_engine = getattr(engine, "sync_engine", engine)
    if listen_engine.dialect.name != "sqlite":
        logger.debug(
            "Skipping SQLite setup for %s engine", listen_engine.dialect.name
        )
        return

    @event.listens_for(listen_engine, "connect")
    def _case_sensitive_like(dbapi_conn: Any, _connection_record: Any) -> None:
        cursor = dbapi_conn.cursor()
        try:
            cursor.execute("PRAGMA case_sensitive_like = ON")
        finally:
            cursor.close()
