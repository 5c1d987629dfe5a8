"""
Catalogue API - Database Session Management
============================================

What:  Injected async store client (`Database`), ORM base class and the
       per-request session dependency.
How:   `Database` wraps an async engine with its connection pool and a session
       factory. The application factory builds one instance and binds it to
       `app.state.database`; route handlers receive sessions through
       `get_db_session`, which commits on success and rolls back on error.
Who:   Used by the application factory, route handlers (via Depends), Alembic
       and the test-suite (which injects an in-memory SQLite instance).

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow: from settings (default 10 + 10)
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalogue_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by Alembic and `Database.create_all`.
    """
    pass


class Database:
    """
    Explicitly constructed store client.

    Owns the engine (and therefore the connection pool) and the session
    factory. Nothing in the package reaches for a module-level engine: every
    consumer gets this object injected, which lets tests swap in a different
    backend without patching.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_options)
        # expire_on_commit=False: returned ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "Database":
        """Build the store client with pool options taken from settings."""
        options: dict = {"echo": app_settings.log_level == "DEBUG"}
        if not app_settings.is_sqlite:
            # SQLite drivers do not share a server-side pool
            options.update(
                pool_size=app_settings.db_pool_size,
                max_overflow=app_settings.db_max_overflow,
                pool_pre_ping=app_settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(app_settings.database_url, **options)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Scoped session: the connection returns to the pool when the block exits.

        Example:
            async with database.session() as db:
                await category_service.list_categories(db)
        """
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` (dev and tests)."""
        # Models must be imported so their tables are registered
        from catalogue_api.models import Category, Product  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Run SELECT 1; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the store client bound to the application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the application's `Database`
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back, then re-raises for the global handlers
        5. Always: closes the session (connection returns to the pool)

    Services commit their own writes, so the commit here is normally a no-op;
    it only guards against a handler that flushed without committing.
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
