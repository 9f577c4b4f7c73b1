"""
Bookshelf Backend - HTTP API Tests
====================================

What:  End-to-end tests of the catalog endpoints through the FastAPI app.
How:   HTTPX AsyncClient over ASGITransport; both session dependencies are
       pointed at the in-memory test database (see conftest.test_client).
"""

import pytest

GO_BOOK = {
    "isbn": "123",
    "title": "Go",
    "authors": [{"name": "Rob", "birthDate": "1956-01-01"}],
    "publisher": "OReilly",
}


class TestBookEndpoints:

    @pytest.mark.asyncio
    async def test_add_and_get_book(self, test_client):
        response = await test_client.post("/api/book", json=GO_BOOK)
        assert response.status_code == 200
        assert response.json() is True

        response = await test_client.get("/api/book/123")
        assert response.status_code == 200
        assert response.json() == GO_BOOK

    @pytest.mark.asyncio
    async def test_add_duplicate_returns_false(self, test_client):
        await test_client.post("/api/book", json=GO_BOOK)

        response = await test_client.post("/api/book", json={**GO_BOOK, "title": "Other"})

        assert response.status_code == 200
        assert response.json() is False
        assert (await test_client.get("/api/book/123")).json()["title"] == "Go"

    @pytest.mark.asyncio
    async def test_add_book_rejects_malformed_body(self, test_client):
        response = await test_client.post("/api/book", json={"isbn": "1"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_unknown_book_is_404(self, test_client):
        response = await test_client.get("/api/book/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "book with ID 'nope' was not found"
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_update_title(self, test_client):
        await test_client.post("/api/book", json=GO_BOOK)

        response = await test_client.put("/api/book/123/title/Go in Action")

        assert response.status_code == 200
        assert response.json() == {**GO_BOOK, "title": "Go in Action"}
        assert (await test_client.get("/api/book/123")).json()["title"] == "Go in Action"

    @pytest.mark.asyncio
    async def test_remove_book(self, test_client):
        await test_client.post("/api/book", json=GO_BOOK)

        response = await test_client.delete("/api/book/123")

        assert response.status_code == 200
        assert response.json() == GO_BOOK
        assert (await test_client.get("/api/book/123")).status_code == 404
        assert (await test_client.delete("/api/book/123")).status_code == 404


class TestRelationshipEndpoints:

    @pytest.mark.asyncio
    async def test_queries(self, test_client):
        await test_client.post("/api/book", json=GO_BOOK)
        await test_client.post("/api/book", json={
            "isbn": "456",
            "title": "Plan 9",
            "authors": [
                {"name": "Rob", "birthDate": "1956-01-01"},
                {"name": "Ken", "birthDate": "1943-02-04"},
            ],
            "publisher": "Bell Labs",
        })

        books = (await test_client.get("/api/books/author/Rob")).json()
        assert [b["isbn"] for b in books] == ["123", "456"]

        books = (await test_client.get("/api/books/publisher/Bell Labs")).json()
        assert [b["isbn"] for b in books] == ["456"]

        authors = (await test_client.get("/api/authors/book/456")).json()
        assert authors == [
            {"name": "Ken", "birthDate": "1943-02-04"},
            {"name": "Rob", "birthDate": "1956-01-01"},
        ]

        publishers = (await test_client.get("/api/publishers/author/Rob")).json()
        assert publishers == ["Bell Labs", "OReilly"]

    @pytest.mark.asyncio
    async def test_unknown_targets_are_404(self, test_client):
        assert (await test_client.get("/api/books/author/Nobody")).status_code == 404
        assert (await test_client.get("/api/books/publisher/Nobody")).status_code == 404
        assert (await test_client.get("/api/authors/book/nope")).status_code == 404

    @pytest.mark.asyncio
    async def test_publishers_of_unknown_author_is_empty(self, test_client):
        response = await test_client.get("/api/publishers/author/Nobody")
        assert response.status_code == 200
        assert response.json() == []


class TestAuthorEndpoints:

    @pytest.mark.asyncio
    async def test_remove_author_keeps_book(self, test_client):
        await test_client.post("/api/book", json=GO_BOOK)

        response = await test_client.delete("/api/author/Rob")

        assert response.status_code == 200
        assert response.json() == {"name": "Rob", "birthDate": "1956-01-01"}
        assert (await test_client.get("/api/authors/book/123")).json() == []
        assert (await test_client.get("/api/book/123")).status_code == 200

    @pytest.mark.asyncio
    async def test_remove_unknown_author_is_404(self, test_client):
        response = await test_client.delete("/api/author/Nobody")
        assert response.status_code == 404
        assert response.json()["details"] == {"resource": "author", "resource_id": "Nobody"}


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/book/nope", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json()["request_id"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/publishers/author/Nobody")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["database"] == "connected"
        assert body["status"] == "healthy"
