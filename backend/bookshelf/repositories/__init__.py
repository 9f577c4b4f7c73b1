# Repositories package init
"""
Bookshelf Backend - Data Access Layer
=======================================

What:  One repository per entity wrapping the SQLAlchemy queries the services need.
How:   Each repository is constructed around the request's AsyncSession and
       never commits; the session dependency owns the transaction.

Repository Inventory:
    - BookRepository:      get/exists/save/delete by ISBN, books by author or publisher
    - AuthorRepository:    get (optionally with books)/get_or_create/delete by name
    - PublisherRepository: get/get_or_create/delete, distinct publishers by author
"""

from bookshelf.repositories.author_repository import AuthorRepository
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.repositories.publisher_repository import PublisherRepository

__all__ = ["AuthorRepository", "BookRepository", "PublisherRepository"]
