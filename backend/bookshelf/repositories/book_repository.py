"""
Bookshelf Backend - Book Repository
=====================================

What:  Data access for the `books` table and its derived queries.
How:   Every query that returns books eagerly loads Book.authors and
       Book.publisher with selectinload, so DTO mapping never triggers
       lazy I/O on an async session. populate_existing refreshes books
       already sitting in the session's identity map.
Who:   Used by BookService for every book operation.

Query plans:
    get(isbn)                   primary key lookup + 2 selectin loads
    add_if_absent(isbn, ...)    INSERT ... ON CONFLICT (isbn) DO NOTHING + book_authors rows
    find_by_author_name(name)   books ⋈ book_authors WHERE author_name = :name
    find_by_publisher_name(n)   books WHERE publisher_name = :n (indexed)
"""

from typing import Iterable, List, Optional

from sqlalchemy import exists, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.models.catalog import Author, Book, Publisher, book_authors
from bookshelf.repositories.upsert import insert_if_absent, supports_insert_if_absent

# Loader options applied to every query returning Book rows
_BOOK_GRAPH = (
    selectinload(Book.authors),
    selectinload(Book.publisher),
)


class BookRepository:
    """CRUD and relationship queries for books."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, isbn: str) -> bool:
        return bool(await self.db.scalar(select(exists().where(Book.isbn == isbn))))

    async def get(self, isbn: str) -> Optional[Book]:
        result = await self.db.execute(
            select(Book)
            .where(Book.isbn == isbn)
            .options(*_BOOK_GRAPH)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add_if_absent(
        self,
        isbn: str,
        title: str,
        authors: Iterable[Author],
        publisher: Publisher,
    ) -> bool:
        """
        Store a new book linked to `authors` and `publisher`.

        On PostgreSQL and SQLite the book row is written with INSERT ... ON
        CONFLICT DO NOTHING, so a concurrent add of the same ISBN loses
        cleanly instead of failing on the primary key. The author links are
        only written by the request that inserted the row.

        Returns:
            True if the book was stored, False if the ISBN was already taken.
        """
        if not supports_insert_if_absent(self.db):
            await self.save(Book(isbn=isbn, title=title, authors=set(authors), publisher=publisher))
            return True

        inserted = await insert_if_absent(
            self.db,
            Book,
            "isbn",
            isbn=isbn,
            title=title,
            publisher_name=publisher.publisher_name,
        )
        if not inserted:
            return False

        links = [{"book_isbn": isbn, "author_name": author.name} for author in authors]
        if links:
            await self.db.execute(insert(book_authors), links)
        return True

    async def save(self, book: Book) -> Book:
        """Add (or re-add) the book to the session and flush it to the database."""
        self.db.add(book)
        await self.db.flush()
        return book

    async def delete(self, book: Book) -> None:
        """Delete the book row; its book_authors links go with it."""
        await self.db.delete(book)
        await self.db.flush()

    async def find_by_author_name(self, author_name: str) -> List[Book]:
        result = await self.db.execute(
            select(Book)
            .join(Book.authors)
            .where(Author.name == author_name)
            .options(*_BOOK_GRAPH)
            .order_by(Book.isbn)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().unique().all())

    async def find_by_publisher_name(self, publisher_name: str) -> List[Book]:
        result = await self.db.execute(
            select(Book)
            .where(Book.publisher_name == publisher_name)
            .options(*_BOOK_GRAPH)
            .order_by(Book.isbn)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
