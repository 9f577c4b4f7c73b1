# Services package init
"""
Bookshelf Backend - Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and repositories (persistence).
How:   Services take the request's AsyncSession plus plain arguments or DTOs,
       apply the catalog rules, and return DTOs. Routes get them as singletons.

Service Inventory:
    - BookService: catalog use cases (books, authors, publishers)
    - mapping: entity <-> DTO conversion helpers
"""
