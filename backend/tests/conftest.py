"""
Blog API: Test Configuration (conftest.py)
==========================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB needed)
    ├── sample_blog_data: Field values for a stored blog
    ├── database: Database handle on a fresh SQLite file with the schema created
    └── test_client: HTTPX AsyncClient wired to an app that uses `database`
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Must run before blog_api is imported: the default settings and the
# module-level app in blog_api.main are built from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.config import Settings
from blog_api.database import Database
from blog_api.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_blog(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = blog
            result = await blog_service.get_blog(mock_db_session, str(blog.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_blog_data():
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "title": "Hello world",
        "content": "The first post on this blog.",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'blogs.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database handle on an empty, freshly created schema."""
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(test_settings, database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the schema is created by the
    `database` fixture instead of Database.connect().

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
