"""Archive database connection management.

DBManager handles:
- Engine and session factory creation
- Table creation at start-up
- Transaction scoping per repository call
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./folio.db"


class DBManager:
    """Owns the async engine for the archive database.

    SQLite (aiosqlite) is the default backend; PostgreSQL is reached through
    asyncpg by pointing DATABASE_URL at a ``postgresql+asyncpg://`` URL.
    """

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool | None = None,
    ):
        """Initialize DB manager.

        Args:
            database_url: SQLAlchemy URL (default from DATABASE_URL)
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections (ignored for SQLite)
            echo: Log emitted SQL (default from DB_ECHO)
        """
        self.database_url: str = database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
        if echo is None:
            echo = os.getenv("DB_ECHO", "false").lower() == "true"

        engine_options: dict[str, object] = {"echo": echo}
        if make_url(self.database_url).get_backend_name() != "sqlite":
            engine_options.update(pool_size=pool_size, max_overflow=max_overflow, pool_pre_ping=True)

        self._engine: AsyncEngine = create_async_engine(self.database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_tables(self) -> None:
        """Create all archive tables that do not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Archive tables ready")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a session wrapped in a transaction.

        Commits when the block exits cleanly, rolls back and re-raises otherwise.

        Yields:
            AsyncSession for the archive database
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self._engine.dispose()
