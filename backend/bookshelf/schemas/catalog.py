"""
Bookshelf Backend - Catalog Transfer Objects
==============================================

What:  Pydantic models exchanged between the service layer and API clients.
How:   FastAPI validates request bodies against them and serializes responses
       (by alias, so `birth_date` travels as `birthDate`).

Shapes:
    BookDto   {isbn, title, authors: set[AuthorDto], publisher: str}
    AuthorDto {name, birthDate}

AuthorDto is frozen so it is hashable and can live in a set; a book never
lists the same (name, birthDate) pair twice.
"""

from datetime import date
from typing import Optional, Set

from pydantic import BaseModel, Field


class AuthorDto(BaseModel):
    """An author as seen by API clients."""

    name: str = Field(description="Author name (unique identifier)")
    birth_date: Optional[date] = Field(
        default=None,
        alias="birthDate",
        description="Author birth date (ISO 8601)",
    )

    model_config = {"frozen": True, "populate_by_name": True}


class BookDto(BaseModel):
    """
    A book with its authors and the name of its publisher.

    Used both as the add_book request body and as the response of every
    book-returning operation.
    """

    isbn: str = Field(description="ISBN (unique identifier)")
    title: str = Field(description="Book title")
    authors: Set[AuthorDto] = Field(
        default_factory=set,
        description="Authors of the book, created on demand when adding",
    )
    publisher: str = Field(description="Publisher name, created on demand when adding")

    model_config = {"populate_by_name": True}
