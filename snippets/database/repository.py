"""
Bookstore Repository - Hand-written SQL for the bookstore endpoints.

Each method runs one or more statements through QueryExecutor and maps
the rows onto entities. Join queries are folded with the helpers in
database.mapping, so the SELECT column order here must match the split
widths declared there.
"""
from typing import List, Optional

from snippets.core.logging_config import LoggerMixin
from snippets.database.connection import DatabaseConnection
from snippets.database.entities import Book, Customer, Order, SalesStatistics, TopSellingBook
from snippets.database.executor import QueryExecutor
from snippets.database.mapping import map_books, map_orders


INSERT_CUSTOMER_SQL = """
INSERT INTO Customers (Name, Email)
VALUES (:name, :email)
RETURNING Id
"""

SELECT_CUSTOMER_SQL = """
SELECT Id, Name, Email
FROM Customers
WHERE Id = :id
"""

# Columns: book (3) | author (2)
SELECT_BOOKS_SQL = """
SELECT
    b.Isbn, b.Title, b.Price,
    a.Id, a.Name
FROM Books b
    LEFT JOIN BookAuthors ba ON b.Isbn = ba.BookIsbn
    LEFT JOIN Authors a ON ba.AuthorId = a.Id
ORDER BY b.rowid, a.Id
"""

# Columns: order (2) | customer (3) | book (2)
SELECT_ORDERS_SQL = """
SELECT
    o.Id, o.OrderDate,
    c.Id, c.Name, c.Email,
    b.Isbn, b.Title
FROM Orders o
    JOIN Customers c ON o.CustomerId = c.Id
    LEFT JOIN OrderBooks ob ON o.Id = ob.OrderId
    LEFT JOIN Books b ON ob.BookIsbn = b.Isbn
ORDER BY o.Id, ob.rowid
"""

TOTAL_ORDERS_SQL = """
SELECT COUNT(*) AS TotalOrders
FROM Orders
"""

TOTAL_SALES_SQL = """
SELECT SUM(b.Price * ob.Quantity) AS TotalSales
FROM Orders o
    JOIN OrderBooks ob ON o.Id = ob.OrderId
    JOIN Books b ON ob.BookIsbn = b.Isbn
"""

TOP_SELLING_BOOKS_SQL = """
SELECT b.Title, SUM(ob.Quantity) AS TotalSold
FROM Books b
    JOIN OrderBooks ob ON b.Isbn = ob.BookIsbn
GROUP BY b.Title
ORDER BY TotalSold DESC
LIMIT :limit
"""


class BookstoreRepository(LoggerMixin):
    """
    Data access for customers, books, orders and sales statistics.

    Example:
        >>> repo = BookstoreRepository()
        >>> books = repo.list_books()
        >>> [book.title for book in books]
    """

    def __init__(self, db_connection: Optional[DatabaseConnection] = None):
        self.executor = QueryExecutor(db_connection)

    def create_customer(self, name: str, email: str) -> Optional[Customer]:
        """Insert a customer. Returns None if the database returned no id."""
        customer_id = self.executor.scalar(INSERT_CUSTOMER_SQL, {"name": name, "email": email})
        if customer_id is None:
            self.logger.warning("Customer insert returned no id")
            return None

        self.logger.info(f"Created customer {customer_id}")
        return Customer(id=customer_id, name=name, email=email)

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        row = self.executor.fetch_one(SELECT_CUSTOMER_SQL, {"id": customer_id})
        return Customer.from_row(row) if row is not None else None

    def list_books(self) -> List[Book]:
        """Every book with its authors, one entry per ISBN."""
        books = map_books(self.executor.fetch_all(SELECT_BOOKS_SQL))
        return list(books.values())

    def list_orders(self) -> List[Order]:
        """Every order with its customer and ordered books."""
        orders = map_orders(self.executor.fetch_all(SELECT_ORDERS_SQL))
        return list(orders.values())

    def get_sales_statistics(self, top: int = 5) -> SalesStatistics:
        """
        Order count, revenue and best sellers, read in a single session.

        Args:
            top: Number of best-selling titles to return
        """
        with self.executor.db.get_session() as session:
            total_orders = self.executor.scalar(TOTAL_ORDERS_SQL, session=session)
            total_sales = self.executor.scalar(TOTAL_SALES_SQL, session=session)
            top_rows = self.executor.fetch_all(
                TOP_SELLING_BOOKS_SQL, {"limit": top}, session=session
            )

        return SalesStatistics(
            total_orders=int(total_orders or 0),
            # SUM over no rows is NULL
            total_sales=round(float(total_sales or 0), 2),
            top_selling_books=[
                TopSellingBook(title=title, total_sold=int(total_sold))
                for title, total_sold in top_rows
            ],
        )
