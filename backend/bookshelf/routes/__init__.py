# Routes package init
"""
Bookshelf Backend - API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - catalog.py: POST   /api/book                          (add a book)
                  GET    /api/book/{isbn}                   (book by ISBN)
                  DELETE /api/book/{isbn}                   (remove a book)
                  PUT    /api/book/{isbn}/title/{title}     (retitle a book)
                  GET    /api/books/author/{author}         (books of an author)
                  GET    /api/books/publisher/{publisher}   (books of a publisher)
                  GET    /api/authors/book/{isbn}           (authors of a book)
                  GET    /api/publishers/author/{author}    (publishers of an author)
                  DELETE /api/author/{author}               (remove an author)
    - health.py:  GET    /health                            (service health check)

Routes are thin: they pick the session dependency (read-write or read-only),
call BookService and return its DTOs. Errors are formatted by the global
exception handlers in main.py.
"""
