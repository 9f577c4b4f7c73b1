"""
Bookshelf Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        in-memory SQLite (aiosqlite) with the catalog schema
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── call:             runs one service method in its own committed session,
    │                     the way one HTTP request would
    ├── mock_db_session:  AsyncMock session for error-path tests
    ├── sample_book_dto:  the "Go" book by Rob published by OReilly
    └── test_client:      HTTPX AsyncClient wired to the app and db_engine
"""

import os

# Override settings for testing BEFORE any bookshelf imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CASCADE_AUTHOR_REMOVAL"] = "false"

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db_session, get_read_session
from bookshelf.models import catalog  # noqa: F401
from bookshelf.schemas.catalog import AuthorDto, BookDto


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database. Foreign keys are enforced like on PostgreSQL.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def call(session_factory):
    """
    Runs `method(session, *args, **kwargs)` in a fresh session and commits.

    Usage:
        assert await call(service.add_book, sample_book_dto) is True
    """
    async def _call(method, *args, **kwargs):
        async with session_factory() as session:
            result = await method(session, *args, **kwargs)
            await session.commit()
            return result

    return _call


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
        await service.find_book_by_isbn(mock_db_session, "123")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_book_dto():
    return BookDto(
        isbn="123",
        title="Go",
        authors={AuthorDto(name="Rob", birth_date=date(1956, 1, 1))},
        publisher="OReilly",
    )


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    Both session dependencies are overridden to use the test database while
    keeping their commit / rollback behavior.
    """
    from bookshelf.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_read_session():
        async with session_factory() as session:
            try:
                yield session
            finally:
                await session.rollback()

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_read_session] = override_read_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
