# =============================================================================
# lib/database.py - Pooled Database Access
# =============================================================================
# Owns the process-wide SQLAlchemy async engine (and its connection pool).
#
# Lifecycle:
#   - app startup:   await database.connect(settings.DATABASE_URL, ...)
#   - per request:   async with database.connection() as conn: ...
#   - app shutdown:  await database.disconnect()
#
# Connections are checked out for the duration of one request and always
# returned to the pool, including when the handler raises.
# =============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import Table, event, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from lib.tables import metadata

logger = logging.getLogger(__name__)


class DatabaseNotInitializedError(RuntimeError):
    """Raised when a connection is requested before startup ran connect()."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY constraints unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Holder for the pooled async engine.

    One instance lives for the lifetime of the process. It is created
    empty at import time and bound to an engine by connect() during
    application startup.
    """

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotInitializedError(
                "Database engine is not initialized; call connect() at startup"
            )
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        create_tables: bool = False,
        echo: bool = False,
    ) -> None:
        """
        Create the engine and its connection pool.

        Args:
            url: SQLAlchemy async URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)
            pool_size: Pooled connections kept open (ignored for SQLite)
            max_overflow: Extra connections above pool_size (ignored for SQLite)
            create_tables: Issue CREATE TABLE for missing tables
            echo: Log every SQL statement
        """
        if self._engine is not None:
            logger.warning("Database already connected; ignoring second connect()")
            return

        engine_kwargs: dict[str, Any] = {"echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
            )

        self._engine = create_async_engine(url, **engine_kwargs)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info(f"Database engine created ({self._engine.dialect.name})")

        if create_tables:
            async with self._engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
            logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Drain the pool and drop the engine."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """
        Check out a pooled connection.

        Work that was not committed by the caller is rolled back when the
        connection goes back to the pool.
        """
        async with self.engine.connect() as conn:
            yield conn

    async def ping(self) -> bool:
        """Run SELECT 1; used by the readiness check."""
        async with self.connection() as conn:
            await conn.execute(text("SELECT 1"))
        return True


def insert_ignoring_conflicts(conn: AsyncConnection, table: Table, *index_elements: str):
    """
    Build INSERT ... ON CONFLICT (index_elements) DO NOTHING for the
    connection's dialect.
    """
    if conn.dialect.name == "sqlite":
        stmt = sqlite.insert(table)
    else:
        stmt = postgresql.insert(table)
    return stmt.on_conflict_do_nothing(index_elements=list(index_elements))


# Process-wide instance; bound in the application lifespan
database = Database()
