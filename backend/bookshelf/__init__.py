"""
Bookshelf Backend - Application Package
=========================================

A catalog service for books, authors and publishers.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (BookService + mapping)│  ← Orchestration, DTO conversion
    ├─────────────────────────────────────┤
    │            Repositories             │  ← SQLAlchemy queries per entity
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic DTOs
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
