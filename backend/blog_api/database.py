"""
Blog API: Database Handle and Session Management
================================================

What:  The `Database` storage handle (async engine + session factory) and the
       FastAPI dependency that hands one session to each request.
How:   The application factory constructs a `Database`, attaches it to
       `app.state.database`, calls `connect()` on startup and `dispose()` on
       shutdown. Route handlers receive sessions through `get_db_session`.
Who:   main.py (lifecycle), routes (dependency), tests (per-test SQLite file).
When:  One handle per application; one session per request.

Connection Pooling:
    Server databases (PostgreSQL via asyncpg) get a QueuePool sized from
    settings: pool_size persistent connections, max_overflow extra ones for
    bursts, pre-ping to discard stale connections, hourly recycling.
    SQLite files get SQLAlchemy's default pool for aiosqlite.
"""

import logging
from typing import Any, AsyncGenerator, Dict

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

    Shares one metadata object between the models, `Database.create_schema`
    and Alembic's autogenerate.
    """
    pass


class Database:
    """
    Explicitly constructed storage handle.

    Usage:
        database = Database(settings)
        await database.connect()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.create_schema_on_connect = settings.create_schema_on_startup
        self.engine: AsyncEngine = create_async_engine(
            self.url, **self._engine_options(settings)
        )
        # expire_on_commit=False: attributes stay readable after commit, so
        # services can serialize rows without another round-trip
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _engine_options(settings: Settings) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            # SQL echo is only useful while developing
            "echo": settings.log_level == "DEBUG",
        }
        if settings.is_sqlite:
            return options
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
        return options

    def session(self) -> AsyncSession:
        """Returns a new session; use it as an async context manager."""
        return self.session_factory()

    async def connect(self) -> None:
        """
        Verifies connectivity at startup and optionally creates the schema.

        A failed connection is logged and re-raised so the server refuses to
        start rather than answering every request with a 500.
        """
        try:
            await self.ping()
        except Exception as e:
            logger.error("Error connecting to the database: %s", str(e))
            raise
        if self.create_schema_on_connect:
            await self.create_schema()
        logger.info("Database connected: %s", self.engine.url.render_as_string(hide_password=True))

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Creates any missing tables registered on `Base.metadata`."""
        # Import registers the models on Base.metadata
        from blog_api.models import blog  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Closes all pooled connections. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session on the application's `Database` handle
        2. Yields it to the route handler (the service commits its own writes)
        3. On error: rolls back anything left uncommitted
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        async def get_blog(blog_id: str, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()
