"""
Database Initialization - Recreate and seed the bookstore tables.

The schema is rebuilt from scratch: dependent tables are dropped first,
then every table is created and filled with a small sample catalogue.
"""
from typing import Optional

from snippets.core.logging_config import get_logger
from snippets.database.connection import DatabaseConnection
from snippets.database.executor import QueryExecutor, split_statements

logger = get_logger(__name__)


DROP_TABLES_SQL = """
-- Dependent tables first so foreign keys never dangle
DROP TABLE IF EXISTS OrderBooks;
DROP TABLE IF EXISTS Orders;
DROP TABLE IF EXISTS Inventory;
DROP TABLE IF EXISTS BookAuthors;

DROP TABLE IF EXISTS Customers;
DROP TABLE IF EXISTS Books;
DROP TABLE IF EXISTS Authors;
"""

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS Books (
    Isbn TEXT PRIMARY KEY,
    Title TEXT NOT NULL,
    Price REAL NOT NULL
);

CREATE TABLE IF NOT EXISTS Authors (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS BookAuthors (
    BookIsbn TEXT NOT NULL,
    AuthorId INTEGER NOT NULL,
    FOREIGN KEY (BookIsbn) REFERENCES Books(Isbn) ON DELETE CASCADE,
    FOREIGN KEY (AuthorId) REFERENCES Authors(Id) ON DELETE CASCADE,
    PRIMARY KEY (BookIsbn, AuthorId)
);

CREATE TABLE IF NOT EXISTS Inventory (
    BookIsbn TEXT PRIMARY KEY,
    Quantity INTEGER NOT NULL,
    FOREIGN KEY (BookIsbn) REFERENCES Books(Isbn) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS Customers (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL,
    Email TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS Orders (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    CustomerId INTEGER NOT NULL,
    OrderDate TEXT NOT NULL,
    FOREIGN KEY (CustomerId) REFERENCES Customers(Id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS OrderBooks (
    OrderId INTEGER NOT NULL,
    BookIsbn TEXT NOT NULL,
    Quantity INTEGER NOT NULL,
    FOREIGN KEY (OrderId) REFERENCES Orders(Id) ON DELETE CASCADE,
    FOREIGN KEY (BookIsbn) REFERENCES Books(Isbn) ON DELETE CASCADE,
    PRIMARY KEY (OrderId, BookIsbn)
);
"""

SEED_DATA_SQL = """
INSERT INTO Books (Isbn, Title, Price) VALUES ('978-0985580155', 'C# Player''s Guide', 34.95);
INSERT INTO Books (Isbn, Title, Price) VALUES ('978-0374275631', 'Thinking, Fast and Slow', 22.00);
INSERT INTO Books (Isbn, Title, Price) VALUES ('978-0201633610', 'Design Patterns: Elements of Reusable Object-Oriented Software', 59.99);

INSERT INTO Authors (Name) VALUES ('R.B. Whitaker');
INSERT INTO Authors (Name) VALUES ('Daniel Kahneman');
INSERT INTO Authors (Name) VALUES ('Erich Gamma');
INSERT INTO Authors (Name) VALUES ('Richard Helm');
INSERT INTO Authors (Name) VALUES ('Ralph Johnson');
INSERT INTO Authors (Name) VALUES ('John Vlissides');

INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0985580155', (SELECT Id FROM Authors WHERE Name = 'R.B. Whitaker'));
INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0374275631', (SELECT Id FROM Authors WHERE Name = 'Daniel Kahneman'));
INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0201633610', (SELECT Id FROM Authors WHERE Name = 'Erich Gamma'));
INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0201633610', (SELECT Id FROM Authors WHERE Name = 'Richard Helm'));
INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0201633610', (SELECT Id FROM Authors WHERE Name = 'Ralph Johnson'));
INSERT INTO BookAuthors (BookIsbn, AuthorId) VALUES ('978-0201633610', (SELECT Id FROM Authors WHERE Name = 'John Vlissides'));

INSERT INTO Inventory (BookIsbn, Quantity) VALUES ('978-0985580155', 5);
INSERT INTO Inventory (BookIsbn, Quantity) VALUES ('978-0374275631', 10);
INSERT INTO Inventory (BookIsbn, Quantity) VALUES ('978-0201633610', 3);

INSERT INTO Customers (Name, Email) VALUES ('John Doe', 'john.doe@example.com');
INSERT INTO Customers (Name, Email) VALUES ('Jane Smith', 'jane.smith@example.com');

INSERT INTO Orders (CustomerId, OrderDate) VALUES (1, '2024-08-16');
INSERT INTO Orders (CustomerId, OrderDate) VALUES (2, '2024-08-16');

INSERT INTO OrderBooks (OrderId, BookIsbn, Quantity) VALUES (1, '978-0374275631', 2);
INSERT INTO OrderBooks (OrderId, BookIsbn, Quantity) VALUES (2, '978-0985580155', 1);
INSERT INTO OrderBooks (OrderId, BookIsbn, Quantity) VALUES (2, '978-0201633610', 1);
"""


def init_bookstore(db: Optional[DatabaseConnection] = None, seed: bool = True) -> int:
    """
    Drop, recreate and (optionally) seed the bookstore tables.

    Args:
        db: Connection to initialize. Defaults to the shared connection.
        seed: Insert the sample catalogue after creating the tables

    Returns:
        Number of statements executed
    """
    executor = QueryExecutor(db)
    script = DROP_TABLES_SQL + CREATE_TABLES_SQL + (SEED_DATA_SQL if seed else "")

    try:
        count = executor.execute_script(split_statements(script))
    except Exception as e:
        logger.error(f"Failed to initialize bookstore tables: {e}")
        raise

    logger.info(f"Bookstore tables initialized (seed={seed})")
    return count


def drop_bookstore(db: Optional[DatabaseConnection] = None) -> int:
    """Drop every bookstore table (use with caution!)."""
    count = QueryExecutor(db).execute_script(split_statements(DROP_TABLES_SQL))
    logger.warning("Bookstore tables dropped")
    return count


if __name__ == "__main__":
    # Allow running directly to rebuild the database
    print("Initializing bookstore tables...")
    init_bookstore()
    print("Done!")
