"""
Bookshelf Backend - Book Service (Catalog Business Logic)
===========================================================

What:  Orchestrates the repositories and the mapping layer to implement the
       catalog use cases: add/find/remove/update a book, books by author or
       publisher, authors of a book, publishers of an author, remove an author.
How:   Each method receives the request's AsyncSession, builds the repositories
       it needs around it, and returns DTOs. Nothing is committed here; the
       session dependency commits (or rolls back) when the request ends.
Who:   Called by route handlers.

Error Handling Strategy:
    - Missing book/author/publisher → NotFoundError (404 at the API boundary)
    - Duplicate ISBN on add_book    → returns False (not an error)
    - SQLAlchemyError               → wrapped in DatabaseError (details logged only)

Author removal policy:
    cascade_author_removal=False (default): only the author row and its
    book links are deleted; books and publishers stay.
    cascade_author_removal=True: books whose only author is the removed one
    are deleted too, then their publishers if left without books.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import settings
from bookshelf.exceptions import DatabaseError, NotFoundError
from bookshelf.models.catalog import Author, Publisher
from bookshelf.repositories import AuthorRepository, BookRepository, PublisherRepository
from bookshelf.schemas.catalog import AuthorDto, BookDto
from bookshelf.services.mapping import (
    author_from_dto,
    author_to_dto,
    authors_to_dtos,
    book_to_dto,
    books_to_dtos,
)

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise SQLAlchemy failures inside `operation` as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error in %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            message="Could not complete the catalog operation. Please try again.",
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e


class BookService:
    """
    Business logic layer for the book catalog.

    Stateless apart from the author removal policy chosen at construction.
    """

    def __init__(self, cascade_author_removal: bool = False):
        self.cascade_author_removal = cascade_author_removal

    # ── Books ─────────────────────────────────────────────────────────────

    async def add_book(self, db: AsyncSession, book_dto: BookDto) -> bool:
        """
        Add a book, creating its authors and publisher on demand.

        Workflow Steps:
            1. Return False if the ISBN is already catalogued
            2. Find-or-create every listed author by name
            3. Find-or-create the publisher by name
            4. Insert the book linked to the resolved authors and publisher,
               unless a concurrent request stored the same ISBN first

        Existing authors and publishers are reused as stored; their
        attributes are never overwritten by the incoming DTO.

        Returns:
            True if the book was added, False if the ISBN already existed.
        """
        with _database_errors("add_book", isbn=book_dto.isbn):
            books = BookRepository(db)
            if await books.exists(book_dto.isbn):
                logger.info("Book %s already exists; not added", book_dto.isbn)
                return False

            author_repository = AuthorRepository(db)
            authors: Set[Author] = set()
            for author_dto in book_dto.authors:
                authors.add(await author_repository.get_or_create(author_from_dto(author_dto)))

            publisher = await PublisherRepository(db).get_or_create(book_dto.publisher)

            if not await books.add_if_absent(
                isbn=book_dto.isbn,
                title=book_dto.title,
                authors=authors,
                publisher=publisher,
            ):
                logger.info("Book %s was added concurrently; not added", book_dto.isbn)
                return False

            logger.info(
                "Book %s added (%d authors, publisher=%s)",
                book_dto.isbn,
                len(authors),
                publisher.publisher_name,
            )
            return True

    async def find_book_by_isbn(self, db: AsyncSession, isbn: str) -> BookDto:
        """
        Raises:
            NotFoundError: No book with this ISBN (→ 404)
        """
        with _database_errors("find_book_by_isbn", isbn=isbn):
            book = await BookRepository(db).get(isbn)
            if book is None:
                raise NotFoundError(resource="book", resource_id=isbn)
            return book_to_dto(book)

    async def remove_book(self, db: AsyncSession, isbn: str) -> BookDto:
        """
        Delete a book and return it as it was before deletion.

        Its authors and publisher are kept.

        Raises:
            NotFoundError: No book with this ISBN
        """
        with _database_errors("remove_book", isbn=isbn):
            books = BookRepository(db)
            book = await books.get(isbn)
            if book is None:
                raise NotFoundError(resource="book", resource_id=isbn)

            removed = book_to_dto(book)
            await books.delete(book)
            logger.info("Book %s removed", isbn)
            return removed

    async def update_book(self, db: AsyncSession, isbn: str, title: str) -> BookDto:
        """
        Change a book's title. Authors and publisher are left untouched.

        Raises:
            NotFoundError: No book with this ISBN
        """
        with _database_errors("update_book", isbn=isbn):
            books = BookRepository(db)
            book = await books.get(isbn)
            if book is None:
                raise NotFoundError(resource="book", resource_id=isbn)

            book.title = title
            await books.save(book)
            logger.info("Book %s retitled", isbn)
            return book_to_dto(book)

    # ── Relationship Queries ──────────────────────────────────────────────

    async def find_books_by_author(self, db: AsyncSession, author_name: str) -> List[BookDto]:
        """
        Books whose author set contains `author_name`, ordered by ISBN.

        Raises:
            NotFoundError: No author with this name. A known author without
                books yields an empty list instead.
        """
        with _database_errors("find_books_by_author", author_name=author_name):
            if await AuthorRepository(db).get(author_name) is None:
                raise NotFoundError(resource="author", resource_id=author_name)
            return books_to_dtos(await BookRepository(db).find_by_author_name(author_name))

    async def find_books_by_publisher(
        self, db: AsyncSession, publisher_name: str
    ) -> List[BookDto]:
        """
        Books published by `publisher_name`, ordered by ISBN.

        Raises:
            NotFoundError: No publisher with this name
        """
        with _database_errors("find_books_by_publisher", publisher_name=publisher_name):
            if await PublisherRepository(db).get(publisher_name) is None:
                raise NotFoundError(resource="publisher", resource_id=publisher_name)
            return books_to_dtos(
                await BookRepository(db).find_by_publisher_name(publisher_name)
            )

    async def find_authors_by_book(self, db: AsyncSession, isbn: str) -> List[AuthorDto]:
        """
        Authors of the book, ordered by name.

        Raises:
            NotFoundError: No book with this ISBN
        """
        with _database_errors("find_authors_by_book", isbn=isbn):
            book = await BookRepository(db).get(isbn)
            if book is None:
                raise NotFoundError(resource="book", resource_id=isbn)
            return authors_to_dtos(book.authors)

    async def find_publishers_by_author(self, db: AsyncSession, author_name: str) -> List[str]:
        """Distinct publisher names of the author's books; empty for unknown authors."""
        with _database_errors("find_publishers_by_author", author_name=author_name):
            return await PublisherRepository(db).find_names_by_author(author_name)

    # ── Authors ───────────────────────────────────────────────────────────

    async def remove_author(self, db: AsyncSession, author_name: str) -> AuthorDto:
        """
        Delete an author and return it as it was before deletion.

        Books the author wrote stay in the catalog without this author,
        unless the service was built with cascade_author_removal=True (see
        _remove_sole_authored_books).

        Raises:
            NotFoundError: No author with this name
        """
        with _database_errors("remove_author", author_name=author_name):
            author_repository = AuthorRepository(db)
            author = await author_repository.get(
                author_name, with_books=self.cascade_author_removal
            )
            if author is None:
                raise NotFoundError(resource="author", resource_id=author_name)

            removed = author_to_dto(author)
            orphan_candidates: Set[Publisher] = set()
            if self.cascade_author_removal:
                orphan_candidates = await self._remove_sole_authored_books(db, author)

            await author_repository.delete(author)
            logger.info("Author %s removed", author_name)

            if orphan_candidates:
                await self._remove_publishers_without_books(db, orphan_candidates)
            return removed

    async def _remove_sole_authored_books(
        self, db: AsyncSession, author: Author
    ) -> Set[Publisher]:
        """
        Delete the books `author` wrote alone; co-authored books are kept.

        Each book is unlinked from the author before it is deleted, so the
        author's own deletion does not try to remove the same link twice.

        Returns:
            Publishers of the deleted books (candidates for orphan cleanup).
        """
        books = BookRepository(db)
        publishers: Set[Publisher] = set()
        for book in sorted(author.books, key=lambda b: b.isbn):
            if book.authors != {author}:
                continue
            publishers.add(book.publisher)
            author.books.discard(book)
            await books.delete(book)
            logger.info("Book %s removed with its only author %s", book.isbn, author.name)
        return publishers

    async def _remove_publishers_without_books(
        self, db: AsyncSession, publishers: Set[Publisher]
    ) -> None:
        publisher_repository = PublisherRepository(db)
        for publisher in sorted(publishers, key=lambda p: p.publisher_name):
            if await publisher_repository.has_books(publisher.publisher_name):
                continue
            await publisher_repository.delete(publisher)
            logger.info("Publisher %s removed: no books left", publisher.publisher_name)


# ── Singleton Instance ────────────────────────────────────────────────────
book_service = BookService(cascade_author_removal=settings.cascade_author_removal)
