"""
Insert-if-absent helper shared by the book, author and publisher repositories.

Find-or-create as SELECT-then-INSERT races when two requests create the same
book, author or publisher at once. On PostgreSQL and SQLite the insert is instead
issued as INSERT ... ON CONFLICT DO NOTHING against the primary key, so the
second writer silently keeps the first writer's row.
"""

from typing import Any, Callable, Dict

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_ON_CONFLICT_INSERTS: Dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def supports_insert_if_absent(db: AsyncSession) -> bool:
    return db.get_bind().dialect.name in _ON_CONFLICT_INSERTS


async def insert_if_absent(db: AsyncSession, model: Any, key: str, **values: Any) -> bool:
    """
    Insert a row for `model` unless one with the same `key` already exists.

    An existing row is left untouched. Callers must check
    supports_insert_if_absent() first.

    Returns:
        True if this call inserted the row, False if it already existed.
    """
    insert = _ON_CONFLICT_INSERTS[db.get_bind().dialect.name]
    statement = (
        insert(model.__table__)
        .values(**values)
        .on_conflict_do_nothing(index_elements=[key])
    )
    result = await db.execute(statement)
    return bool(result.rowcount)
