"""
Bookshelf Backend - Entity ↔ Transfer Object Mapping
======================================================

What:  Explicit conversion functions between ORM entities and DTOs.
How:   Plain functions, one per direction and entity. Book mapping reads the
       publisher name straight from Book.publisher, so the DTO never needs
       patching after conversion.
Who:   Called by BookService at the service/DTO boundary.

Entities passed to the *_to_dto functions must have their relationships
loaded (the repositories take care of that).
"""

from typing import Iterable, List

from bookshelf.models.catalog import Author, Book
from bookshelf.schemas.catalog import AuthorDto, BookDto


def author_to_dto(author: Author) -> AuthorDto:
    return AuthorDto(name=author.name, birth_date=author.birth_date)


def author_from_dto(dto: AuthorDto) -> Author:
    """New transient Author carrying the DTO's name and birth date."""
    return Author(name=dto.name, birth_date=dto.birth_date)


def book_to_dto(book: Book) -> BookDto:
    return BookDto(
        isbn=book.isbn,
        title=book.title,
        authors={author_to_dto(author) for author in book.authors},
        publisher=book.publisher.publisher_name,
    )


def books_to_dtos(books: Iterable[Book]) -> List[BookDto]:
    """Map books in the order given."""
    return [book_to_dto(book) for book in books]


def authors_to_dtos(authors: Iterable[Author]) -> List[AuthorDto]:
    """Map authors sorted by name, so set-backed collections list deterministically."""
    return [author_to_dto(author) for author in sorted(authors, key=lambda a: a.name)]
