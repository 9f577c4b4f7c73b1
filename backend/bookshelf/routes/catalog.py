"""
Bookshelf Backend - Catalog Route Handlers
============================================

What:  HTTP endpoints for books, authors and publishers.
How:   Each handler delegates to BookService. Mutating endpoints use the
       read-write session (committed at the end of the request); queries
       use the read-only session.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db_session, get_read_session
from bookshelf.schemas.catalog import AuthorDto, BookDto
from bookshelf.schemas.common import ErrorResponse
from bookshelf.services.book_service import book_service

router = APIRouter(prefix="/api", tags=["Catalog"])

_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}


@router.post(
    "/book",
    response_model=bool,
    summary="Add a book",
    description=(
        "Adds a book with its authors and publisher. Authors and the publisher are "
        "created when they do not exist yet and reused as stored otherwise. "
        "Returns false when a book with the same ISBN already exists."
    ),
)
async def add_book(
    book: BookDto,
    db: AsyncSession = Depends(get_db_session),
) -> bool:
    return await book_service.add_book(db=db, book_dto=book)


@router.get(
    "/book/{isbn}",
    response_model=BookDto,
    responses=_NOT_FOUND,
    summary="Get a book by ISBN",
)
async def find_book(
    isbn: str,
    db: AsyncSession = Depends(get_read_session),
) -> BookDto:
    return await book_service.find_book_by_isbn(db=db, isbn=isbn)


@router.delete(
    "/book/{isbn}",
    response_model=BookDto,
    responses=_NOT_FOUND,
    summary="Remove a book",
    description="Deletes the book and returns it as it was. Authors and publisher are kept.",
)
async def remove_book(
    isbn: str,
    db: AsyncSession = Depends(get_db_session),
) -> BookDto:
    return await book_service.remove_book(db=db, isbn=isbn)


@router.put(
    "/book/{isbn}/title/{title}",
    response_model=BookDto,
    responses=_NOT_FOUND,
    summary="Change a book's title",
)
async def update_book(
    isbn: str,
    title: str,
    db: AsyncSession = Depends(get_db_session),
) -> BookDto:
    return await book_service.update_book(db=db, isbn=isbn, title=title)


@router.get(
    "/books/author/{author}",
    response_model=List[BookDto],
    responses=_NOT_FOUND,
    summary="List the books of an author",
)
async def find_books_by_author(
    author: str,
    db: AsyncSession = Depends(get_read_session),
) -> List[BookDto]:
    return await book_service.find_books_by_author(db=db, author_name=author)


@router.get(
    "/books/publisher/{publisher}",
    response_model=List[BookDto],
    responses=_NOT_FOUND,
    summary="List the books of a publisher",
)
async def find_books_by_publisher(
    publisher: str,
    db: AsyncSession = Depends(get_read_session),
) -> List[BookDto]:
    return await book_service.find_books_by_publisher(db=db, publisher_name=publisher)


@router.get(
    "/authors/book/{isbn}",
    response_model=List[AuthorDto],
    responses=_NOT_FOUND,
    summary="List the authors of a book",
)
async def find_authors_by_book(
    isbn: str,
    db: AsyncSession = Depends(get_read_session),
) -> List[AuthorDto]:
    return await book_service.find_authors_by_book(db=db, isbn=isbn)


@router.get(
    "/publishers/author/{author}",
    response_model=List[str],
    summary="List the publishers an author has been published by",
)
async def find_publishers_by_author(
    author: str,
    db: AsyncSession = Depends(get_read_session),
) -> List[str]:
    return await book_service.find_publishers_by_author(db=db, author_name=author)


@router.delete(
    "/author/{author}",
    response_model=AuthorDto,
    responses=_NOT_FOUND,
    summary="Remove an author",
    description=(
        "Deletes the author and returns it as it was. Books keep existing without "
        "this author unless CASCADE_AUTHOR_REMOVAL is enabled."
    ),
)
async def remove_author(
    author: str,
    db: AsyncSession = Depends(get_db_session),
) -> AuthorDto:
    return await book_service.remove_author(db=db, author_name=author)
