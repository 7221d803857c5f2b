"""
Database module - Bookstore data access layer.

This module handles:
- Database connection management
- Schema creation and seeding
- Timed query execution
- Folding joined rows into entity trees
- Bookstore queries
"""
from snippets.database.connection import DatabaseConnection, get_database, close_database
from snippets.database.entities import (
    Author,
    Book,
    Customer,
    Order,
    SalesStatistics,
    TopSellingBook,
)
from snippets.database.executor import QueryExecutor
from snippets.database.init_db import init_bookstore, drop_bookstore
from snippets.database.mapping import map_books, map_orders, reconstruct, split_row
from snippets.database.repository import BookstoreRepository

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "close_database",
    # Entities
    "Author",
    "Book",
    "Customer",
    "Order",
    "SalesStatistics",
    "TopSellingBook",
    # Executor
    "QueryExecutor",
    # Init
    "init_bookstore",
    "drop_bookstore",
    # Mapping
    "map_books",
    "map_orders",
    "reconstruct",
    "split_row",
    # Repository
    "BookstoreRepository",
]
