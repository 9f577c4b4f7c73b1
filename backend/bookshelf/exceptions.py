"""
Bookshelf Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the catalog service.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    BookshelfError (base)       → 500 Internal Server Error
    ├── NotFoundError           → 404 Not Found
    └── DatabaseError           → 500 Internal Server Error

Adding a book whose ISBN already exists is NOT an error: add_book returns
False instead.
"""

from typing import Any, Dict, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BookshelfError):
    """
    Raised when a book, author or publisher lookup by identifier finds nothing.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer turns
    that None into this exception and the API boundary turns it into a 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(BookshelfError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    SQLAlchemy error type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
