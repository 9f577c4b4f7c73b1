"""
Bookshelf Backend - Mapping and Transfer Object Tests
=======================================================

What:  Tests for the entity ↔ DTO conversion functions and the DTO wire format.
How:   Uses transient ORM objects (no session, no database).
"""

from datetime import date

from bookshelf.models.catalog import Author, Book, Publisher
from bookshelf.schemas.catalog import AuthorDto, BookDto
from bookshelf.services.mapping import (
    author_from_dto,
    author_to_dto,
    authors_to_dtos,
    book_to_dto,
    books_to_dtos,
)


def build_book():
    rob = Author(name="Rob", birth_date=date(1956, 1, 1))
    ken = Author(name="Ken", birth_date=None)
    return Book(isbn="123", title="Go", authors={rob, ken}, publisher=Publisher("OReilly"))


class TestEntityToDto:

    def test_author_to_dto(self):
        dto = author_to_dto(Author(name="Rob", birth_date=date(1956, 1, 1)))
        assert dto == AuthorDto(name="Rob", birth_date=date(1956, 1, 1))

    def test_book_to_dto_carries_publisher_name(self):
        dto = book_to_dto(build_book())

        assert dto.isbn == "123"
        assert dto.title == "Go"
        assert dto.publisher == "OReilly"
        assert dto.authors == {
            AuthorDto(name="Rob", birth_date=date(1956, 1, 1)),
            AuthorDto(name="Ken"),
        }

    def test_books_to_dtos_keeps_order(self):
        second = Book(isbn="001", title="First ISBN", publisher=Publisher("Other"))
        dtos = books_to_dtos([build_book(), second])
        assert [d.isbn for d in dtos] == ["123", "001"]

    def test_authors_to_dtos_sorted_by_name(self):
        dtos = authors_to_dtos(build_book().authors)
        assert [d.name for d in dtos] == ["Ken", "Rob"]

    def test_book_backrefs_are_populated(self):
        book = build_book()
        assert all(book in author.books for author in book.authors)
        assert book in book.publisher.books


class TestDtoToEntity:

    def test_author_from_dto(self):
        author = author_from_dto(AuthorDto(name="Rob", birth_date=date(1956, 1, 1)))
        assert isinstance(author, Author)
        assert author.name == "Rob"
        assert author.birth_date == date(1956, 1, 1)


class TestTransferObjects:

    def test_author_dto_uses_birth_date_alias(self):
        dto = AuthorDto.model_validate({"name": "Rob", "birthDate": "1956-01-01"})

        assert dto.birth_date == date(1956, 1, 1)
        assert dto.model_dump(by_alias=True, mode="json") == {
            "name": "Rob",
            "birthDate": "1956-01-01",
        }

    def test_author_dto_is_hashable(self):
        a = AuthorDto(name="Rob", birth_date=date(1956, 1, 1))
        b = AuthorDto.model_validate({"name": "Rob", "birthDate": "1956-01-01"})
        assert {a, b} == {a}

    def test_book_dto_from_json_deduplicates_authors(self):
        dto = BookDto.model_validate({
            "isbn": "123",
            "title": "Go",
            "authors": [
                {"name": "Rob", "birthDate": "1956-01-01"},
                {"name": "Rob", "birthDate": "1956-01-01"},
            ],
            "publisher": "OReilly",
        })
        assert len(dto.authors) == 1

    def test_book_dto_authors_default_empty(self):
        dto = BookDto(isbn="1", title="T", publisher="P")
        assert dto.authors == set()
