# =============================================================================
# tests/test_repository.py - Bookstore Repository Tests
# =============================================================================
# Runs the bookstore SQL against a scratch SQLite database seeded with the
# sample catalogue.
# =============================================================================

import pytest

from snippets.core.exceptions import DatabaseError
from snippets.database import BookstoreRepository, QueryExecutor, drop_bookstore, init_bookstore
from snippets.database.executor import split_statements


DESIGN_PATTERNS = "978-0201633610"
THINKING = "978-0374275631"
PLAYERS_GUIDE = "978-0985580155"


@pytest.fixture
def repo(db):
    return BookstoreRepository(db)


class TestCustomers:

    def test_create_assigns_next_id(self, repo):
        customer = repo.create_customer("Ada Lovelace", "ada@example.com")

        assert customer.id == 3
        assert repo.get_customer(3) == customer

    def test_get_seeded_customer(self, repo):
        customer = repo.get_customer(1)
        assert customer.name == "John Doe"
        assert customer.email == "john.doe@example.com"

    def test_get_missing_customer(self, repo):
        assert repo.get_customer(999) is None


class TestBooks:

    def test_one_entry_per_isbn(self, repo):
        books = repo.list_books()
        assert [b.isbn for b in books] == [PLAYERS_GUIDE, THINKING, DESIGN_PATTERNS]

    def test_authors_collected(self, repo):
        books = {b.isbn: b for b in repo.list_books()}

        assert [a.name for a in books[DESIGN_PATTERNS].authors] == [
            "Erich Gamma",
            "Richard Helm",
            "Ralph Johnson",
            "John Vlissides",
        ]
        assert [a.name for a in books[THINKING].authors] == ["Daniel Kahneman"]

    def test_book_without_authors_has_empty_list(self, db, repo):
        QueryExecutor(db).execute_script(
            ["INSERT INTO Books (Isbn, Title, Price) VALUES ('978-0000000000', 'Anonymous', 1.5)"]
        )

        books = {b.isbn: b for b in repo.list_books()}
        assert books["978-0000000000"].authors == []
        assert books["978-0000000000"].price == 1.5


class TestOrders:

    def test_orders_with_customer_and_books(self, repo):
        orders = repo.list_orders()

        assert [o.id for o in orders] == [1, 2]
        assert orders[0].customer.name == "John Doe"
        assert [b.isbn for b in orders[0].books] == [THINKING]
        assert orders[1].customer.name == "Jane Smith"
        assert [b.isbn for b in orders[1].books] == [PLAYERS_GUIDE, DESIGN_PATTERNS]

    def test_order_without_lines(self, db, repo):
        QueryExecutor(db).execute_script(
            ["INSERT INTO Orders (CustomerId, OrderDate) VALUES (1, '2024-09-01')"]
        )

        orders = {o.id: o for o in repo.list_orders()}
        assert orders[3].books == []
        assert orders[3].customer.id == 1


class TestSalesStatistics:

    def test_seeded_statistics(self, repo):
        stats = repo.get_sales_statistics()

        assert stats.total_orders == 2
        assert stats.total_sales == pytest.approx(22.00 * 2 + 34.95 + 59.99)
        assert stats.top_selling_books[0].title == "Thinking, Fast and Slow"
        assert stats.top_selling_books[0].total_sold == 2
        assert len(stats.top_selling_books) == 3

    def test_top_limit(self, repo):
        assert len(repo.get_sales_statistics(top=1).top_selling_books) == 1

    def test_empty_database(self, db):
        init_bookstore(db, seed=False)

        stats = BookstoreRepository(db).get_sales_statistics()
        assert stats.total_orders == 0
        assert stats.total_sales == 0
        assert stats.top_selling_books == []


class TestExecutor:

    def test_missing_table_raises_database_error(self, db):
        drop_bookstore(db)

        with pytest.raises(DatabaseError):
            BookstoreRepository(db).list_books()

    def test_split_statements_drops_comments(self):
        script = """
        -- comment
        DROP TABLE IF EXISTS A;
        CREATE TABLE A (Id INTEGER);
        """
        assert split_statements(script) == [
            "DROP TABLE IF EXISTS A",
            "CREATE TABLE A (Id INTEGER)",
        ]

    def test_split_statements_keeps_semicolons_in_literals(self):
        script = "INSERT INTO A VALUES ('x;y', 'it''s; fine'); SELECT 1;"

        assert split_statements(script) == [
            "INSERT INTO A VALUES ('x;y', 'it''s; fine')",
            "SELECT 1",
        ]

    def test_literal_script_runs(self, db):
        executor = QueryExecutor(db)
        executor.execute_script([
            "CREATE TABLE Notes (Body TEXT)",
            *split_statements("INSERT INTO Notes VALUES ('a;b'); INSERT INTO Notes VALUES ('c');"),
        ])

        assert executor.fetch_all("SELECT Body FROM Notes ORDER BY rowid") == [("a;b",), ("c",)]

    def test_init_is_repeatable(self, db):
        init_bookstore(db)
        assert len(BookstoreRepository(db).list_books()) == 3
