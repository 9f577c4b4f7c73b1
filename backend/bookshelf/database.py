"""
Bookshelf Backend - Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependencies.
How:   Creates an async engine with connection pooling and provides two session
       dependencies: a read-write one that commits on success and rolls back on
       error, and a read-only one that never commits.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction boundaries:
    get_db_session     add/remove/update operations (one request = one transaction)
    get_read_session   lookups and relationship queries (always rolled back)
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookshelf.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **settings.engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: entities stay readable after the request commits,
# mapping to DTOs never triggers a lazy reload outside the session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Session Dependencies ──────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a read-write database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.post("/book")
        async def add_book(book: BookDto, db: AsyncSession = Depends(get_db_session)):
            return await book_service.add_book(db=db, book_dto=book)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for read-only operations.

    The transaction is always rolled back, so nothing a read handler touches
    can be persisted by accident.
    """
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all connections in the pool (called on application shutdown)."""
    await engine.dispose()
