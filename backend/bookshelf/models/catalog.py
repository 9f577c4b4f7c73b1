"""
Bookshelf Backend - Catalog SQLAlchemy Models
===============================================

What:  ORM models for the `books`, `authors` and `publishers` tables and the
       `book_authors` association table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by the repositories for CRUD operations and by Alembic for schema management.

Relationships:
    Book ──< book_authors >── Author      many-to-many (Book.authors / Author.books)
    Book >───────────────── Publisher     many-to-one  (Book.publisher / Publisher.books)

All keys are natural string identifiers: ISBN, author name, publisher name.
Collections are Python sets. None of the relationships cascade deletes from
the ORM side: removing an author or a book only removes its association rows.
"""

from datetime import date
from typing import Optional, Set

from sqlalchemy import Column, Date, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base


# ── Association Table ─────────────────────────────────────────────────────
# Composite primary key: a book lists each author at most once.
book_authors = Table(
    "book_authors",
    Base.metadata,
    Column(
        "book_isbn",
        String(255),
        ForeignKey("books.isbn", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "author_name",
        String(255),
        ForeignKey("authors.name", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Publisher(Base):
    """A publishing house, identified by its name."""

    __tablename__ = "publishers"

    publisher_name: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Publisher name, the natural key",
    )

    # Publishers are only ever deleted once they have no books left
    books: Mapped[Set["Book"]] = relationship(
        back_populates="publisher",
        passive_deletes=True,
    )

    def __init__(self, publisher_name: str):
        self.publisher_name = publisher_name

    def __repr__(self) -> str:
        return f"<Publisher(publisher_name='{self.publisher_name}')>"


class Author(Base):
    """
    A book author, identified by name.

    Lifecycle:
        1. Created implicitly the first time a book names this author
        2. Reused (never modified) by later books naming the same author
        3. Deleted explicitly through remove_author
    """

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Author name, the natural key",
    )

    birth_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        default=None,
    )

    books: Mapped[Set["Book"]] = relationship(
        secondary=book_authors,
        back_populates="authors",
    )

    def __init__(self, name: str, birth_date: Optional[date] = None):
        self.name = name
        self.birth_date = birth_date

    def __repr__(self) -> str:
        return f"<Author(name='{self.name}', birth_date='{self.birth_date}')>"


class Book(Base):
    """
    A catalogued book.

    Lifecycle:
        1. Created by add_book together with any missing authors/publisher
        2. Title may be changed by update_book (relationships never change)
        3. Deleted by remove_book

    Query Patterns:
        - Single book by ISBN: primary key lookup
        - Books by author: book_authors join on author_name
        - Books by publisher: index on publisher_name
    """

    __tablename__ = "books"

    isbn: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="ISBN, globally unique book identifier",
    )

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    publisher_name: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("publishers.publisher_name"),
        nullable=False,
        index=True,
    )

    authors: Mapped[Set[Author]] = relationship(
        secondary=book_authors,
        back_populates="books",
    )

    publisher: Mapped[Publisher] = relationship(back_populates="books")

    def __init__(
        self,
        isbn: str,
        title: str,
        authors: Optional[Set[Author]] = None,
        publisher: Optional[Publisher] = None,
    ):
        self.isbn = isbn
        self.title = title
        self.authors = set(authors or ())
        if publisher is not None:
            self.publisher = publisher

    def __repr__(self) -> str:
        return f"<Book(isbn='{self.isbn}', title='{self.title}')>"
