# =============================================================================
# tests/test_bookstore_api.py - Bookstore Endpoint Tests
# =============================================================================

import pytest

from snippets.database.entities import Author, Book
from snippets.models.bookstore import BookResponse


class TestRoot:

    def test_greeting(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "Hello BookStore!"


class TestCustomerEndpoints:

    def test_create_customer(self, client):
        response = client.post(
            "/customers", json={"name": "Ada Lovelace", "email": "ada@example.com"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body == {"id": 3, "name": "Ada Lovelace", "email": "ada@example.com"}
        assert response.headers["location"] == "/customers/3"

    def test_created_customer_is_readable(self, client):
        client.post("/customers", json={"name": "Ada", "email": "ada@example.com"})

        response = client.get("/customers/3")
        assert response.status_code == 200
        assert response.json()["name"] == "Ada"

    def test_invalid_body_rejected(self, client):
        response = client.post("/customers", json={"name": "", "email": "not-an-email"})
        assert response.status_code == 422

    def test_get_customer(self, client):
        response = client.get("/customers/1")
        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "name": "John Doe",
            "email": "john.doe@example.com",
        }

    def test_missing_customer_is_404(self, client):
        response = client.get("/customers/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_non_integer_id_is_422(self, client):
        assert client.get("/customers/abc").status_code == 422


class TestBookEndpoints:

    def test_books_with_authors(self, client):
        response = client.get("/books")

        assert response.status_code == 200
        books = response.json()["books"]
        assert len(books) == 3

        design_patterns = next(b for b in books if b["isbn"] == "978-0201633610")
        assert design_patterns["price"] == pytest.approx(59.99)
        assert len(design_patterns["authors"]) == 4
        assert design_patterns["authors"][0] == {"id": 3, "name": "Erich Gamma"}

    def test_missing_price_stays_null(self):
        response = BookResponse.from_entity(Book("978-1", "Untitled", authors=[Author(1, "X")]))

        assert response.price is None
        assert response.model_dump()["price"] is None


class TestOrderEndpoints:

    def test_orders(self, client):
        response = client.get("/orders")

        assert response.status_code == 200
        orders = response.json()["orders"]
        assert [o["id"] for o in orders] == [1, 2]

        second = orders[1]
        assert second["order_date"] == "2024-08-16"
        assert second["customer"] == {
            "id": 2,
            "name": "Jane Smith",
            "email": "jane.smith@example.com",
        }
        assert second["books"] == [
            {"isbn": "978-0985580155", "title": "C# Player's Guide"},
            {"isbn": "978-0201633610", "title": "Design Patterns: Elements of Reusable Object-Oriented Software"},
        ]


class TestSalesStatisticsEndpoint:

    def test_statistics(self, client):
        response = client.get("/sales-statistics")

        assert response.status_code == 200
        body = response.json()
        assert body["total_orders"] == 2
        assert body["total_sales"] == pytest.approx(138.94)
        assert body["top_selling_books"][0] == {
            "title": "Thinking, Fast and Slow",
            "total_sold": 2,
        }


class TestHealthEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_checks_database(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["database"] == "ok"
