"""
Bookshelf Backend - Publisher Repository
==========================================

What:  Data access for the `publishers` table, plus the
       publishers-by-author derived query.
"""

from typing import List, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.models.catalog import Author, Book, Publisher
from bookshelf.repositories.upsert import insert_if_absent, supports_insert_if_absent


class PublisherRepository:
    """Find, find-or-create and delete publishers by name."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, publisher_name: str) -> Optional[Publisher]:
        return await self.db.get(Publisher, publisher_name)

    async def get_or_create(self, publisher_name: str) -> Publisher:
        """Return the publisher called `publisher_name`, creating it when missing."""
        if supports_insert_if_absent(self.db):
            await insert_if_absent(
                self.db, Publisher, "publisher_name", publisher_name=publisher_name
            )
            return await self.db.get(Publisher, publisher_name)

        publisher = await self.get(publisher_name)
        if publisher is None:
            publisher = Publisher(publisher_name=publisher_name)
            self.db.add(publisher)
            await self.db.flush()
        return publisher

    async def find_names_by_author(self, author_name: str) -> List[str]:
        """
        Distinct names of the publishers of books written by `author_name`.

        SQL:
            SELECT DISTINCT p.publisher_name FROM publishers p
            JOIN books b ON b.publisher_name = p.publisher_name
            JOIN book_authors ba ON ba.book_isbn = b.isbn
            WHERE ba.author_name = :author_name
        """
        result = await self.db.execute(
            select(Publisher.publisher_name)
            .join(Publisher.books)
            .join(Book.authors)
            .where(Author.name == author_name)
            .distinct()
            .order_by(Publisher.publisher_name)
        )
        return list(result.scalars().all())

    async def has_books(self, publisher_name: str) -> bool:
        return bool(
            await self.db.scalar(
                select(exists().where(Book.publisher_name == publisher_name))
            )
        )

    async def delete(self, publisher: Publisher) -> None:
        await self.db.delete(publisher)
        await self.db.flush()
