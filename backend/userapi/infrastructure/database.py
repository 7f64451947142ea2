"""Database Session Manager - bounded async connection pool with rollback and health checks.

Invariants:
    - Pool is fixed-size (no overflow); acquisition waits at most pool_timeout seconds
    - Every session auto-rolls-back on exception and is always closed
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle,
      routes receive sessions through the get_db dependency
    - expire_on_commit=False: prevents lazy-load issues in async context
    - engine_kwargs() separated from engine creation so it is testable without connecting
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from userapi.db.base import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    if not database_url.startswith("sqlite"):
        return False
    path = database_url.split("://", 1)[-1]
    return ":memory:" in path or path in ("", "/")


def engine_kwargs(
    database_url: str, pool_size: int = 10, pool_timeout: float = 3.0,
) -> dict:
    """Return deterministic create_async_engine kwargs for a DB URL."""
    kwargs: dict = {"pool_pre_ping": True}
    if _is_memory_sqlite(database_url):
        # single static connection, pool sizing does not apply
        return kwargs
    kwargs["pool_size"] = pool_size
    kwargs["max_overflow"] = 0
    kwargs["pool_timeout"] = pool_timeout
    kwargs["pool_recycle"] = 3600
    return kwargs


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, pool_timeout: float = 3.0,
    ):
        self.engine = create_async_engine(
            database_url,
            **engine_kwargs(database_url, pool_size, pool_timeout),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables (CREATE TABLE IF NOT EXISTS semantics)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
