# Middleware package init
"""
Bookshelf Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID first: every later log line can carry the correlation ID
    - Logging: records method, path, status and duration once the response exists
"""
