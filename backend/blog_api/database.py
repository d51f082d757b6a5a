"""
Blog API — Database Handle and Session Management
===================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns one engine (one connection pool) and hands out
       a session per request. The app factory receives the handle explicitly
       and stores it on `app.state`; nothing here is created at import time.
Who:   Constructed by the app lifespan (or by tests), used by route handlers
       through the `get_db_session` dependency.
When:  connect() at process start, dispose() at process stop.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings for server databases.
    SQLite has no pool sizing; tests pass their own engine options
    (StaticPool) so an in-memory database survives across sessions.
"""

import logging
from typing import Any, AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Database.create_tables().
    """
    pass


class Database:
    """
    Explicitly constructed store handle.

    Owns the engine and the session factory. One instance is shared by all
    concurrent requests; each request gets its own AsyncSession.

    Example:
        db = Database("sqlite+aiosqlite://", poolclass=StaticPool)
        await db.connect(create_tables=True)
        async with db.session() as session:
            ...
        await db.dispose()
    """

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_options)
        # Why expire_on_commit=False: records are serialized after the
        # repository commits; expiring them would force a reload per attribute
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the handle from application settings."""
        options: dict = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(settings.sqlalchemy_url, **options)

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def connect(self, create_tables: bool = False) -> None:
        """
        Verify connectivity and optionally create missing tables.

        Raises whatever the driver raises when the database is unreachable;
        the lifespan lets it propagate so startup fails loudly.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        if create_tables:
            await self.create_tables()
        logger.info("Connected to database: %s", self.engine.url.render_as_string())

    async def create_tables(self) -> None:
        # Model modules must be imported so their tables are registered
        import blog_api.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database handle
        2. Yields it to the route handler
        3. On error: rolls back whatever the handler left uncommitted
        4. Always: closes the session (returns connection to pool)

    Writes are committed by the repository inside each operation. Code after
    the yield runs once the response has been sent, so a commit here could
    fail without the client ever seeing it.
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
        except Exception:
            # Why broad Exception: any failure in the handler leaves the
            # transaction in an unknown state
            await session.rollback()
            raise
        finally:
            # Why finally: the connection goes back to the pool even if
            # the rollback itself fails
            await session.close()
