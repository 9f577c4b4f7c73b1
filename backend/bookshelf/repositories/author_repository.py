"""
Bookshelf Backend - Author Repository
=======================================

What:  Data access for the `authors` table.
Who:   Used by BookService when adding books and removing authors.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.models.catalog import Author, Book
from bookshelf.repositories.upsert import insert_if_absent, supports_insert_if_absent

logger = logging.getLogger(__name__)


class AuthorRepository:
    """Find, find-or-create and delete authors by name."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, name: str, with_books: bool = False) -> Optional[Author]:
        """
        Fetch an author by name, or None.

        with_books=True also loads Author.books together with each book's
        authors and publisher, which is what the removal cascade inspects.
        That graph loops back to the author itself, so it is loaded without
        populate_existing: refreshing the author a second time through
        Book.authors would reset the Author.books collection just loaded.
        """
        query = select(Author).where(Author.name == name)
        if with_books:
            query = query.options(
                selectinload(Author.books).selectinload(Book.authors),
                selectinload(Author.books).selectinload(Book.publisher),
            )
        else:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_or_create(self, candidate: Author) -> Author:
        """
        Return the stored author named like `candidate`, storing `candidate`
        when no such author exists.

        An existing author keeps its stored birth date; the candidate's birth
        date is only used for a newly created row.
        """
        if supports_insert_if_absent(self.db):
            await insert_if_absent(
                self.db,
                Author,
                "name",
                name=candidate.name,
                birth_date=candidate.birth_date,
            )
            return await self.db.get(Author, candidate.name)

        author = await self.get(candidate.name)
        if author is None:
            author = candidate
            self.db.add(author)
            await self.db.flush()
            logger.debug("Created author %s", author.name)
        return author

    async def delete(self, author: Author) -> None:
        """Delete the author row; its book_authors links go with it."""
        await self.db.delete(author)
        await self.db.flush()
