"""
Blog API — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the test suite.
How:   Every test that touches the store gets a fresh in-memory SQLite
       database (aiosqlite + StaticPool), injected into a new app instance.
       No external database is needed.

Fixtures:
    ├── database: Database handle with the blogs table created
    ├── db_session: AsyncSession on that database
    ├── test_app: FastAPI app bound to the test database
    ├── test_client: HTTPX AsyncClient for endpoint tests
    └── mock_db_session: Mock AsyncSession for failure injection
"""

import os

# Override settings BEFORE any blog_api imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from blog_api.database import Database
from blog_api.main import create_app


@pytest_asyncio.fixture
async def database():
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.connect(create_tables=True)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def test_app(database):
    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/blogs")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """Mock AsyncSession; configure execute/get/flush per test."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def blog_payload():
    return {"title": "Original", "content": "Original Content"}
