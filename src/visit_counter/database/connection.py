"""Async database engine and session management for the visit store."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import Settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine and session factory for one SQLite store file.

    Instances are created per application, so two apps in one process
    never share a store by accident.
    """

    def __init__(self, database_url: str, timeout: float = 5.0, echo: bool = False):
        self.database_url = database_url
        self.timeout = timeout
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        # Set by create_tables, cleared by drop_tables and close
        self.tables_ready = False
        self.tables_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseManager":
        return cls(
            settings.get_database_url(),
            timeout=settings.store_timeout,
            echo=settings.debug,
        )

    @property
    def is_memory(self) -> bool:
        return self.database_url.endswith(":memory:")

    def initialize(self):
        """Create the engine. Safe to call more than once."""
        if self.engine is not None:
            return

        # sqlite3's busy timeout bounds how long a writer waits for the lock
        connect_args = {"timeout": self.timeout}
        engine_kwargs = {}
        if self.is_memory:
            # A private in-memory database only exists on its own connection
            connect_args["check_same_thread"] = False
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_async_engine(
            self.database_url,
            echo=self.echo,
            connect_args=connect_args,
            **engine_kwargs,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.debug("Database engine created for %s", self.database_url)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, rolling back if the block raises."""
        if self.session_factory is None:
            self.initialize()
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def close(self):
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            self.tables_ready = False


def get_db_manager(request: Request) -> DatabaseManager:
    """FastAPI dependency returning the app's database manager."""
    return request.app.state.db
