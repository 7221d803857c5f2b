"""
Bookstore entities - plain records built fresh from query rows.

Each ``from_row`` takes one segment of a flat result row, in the
column order used by the bookstore queries (identity column first).
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional, Sequence


def _to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass
class Author:
    """An author. Columns: id, name."""
    id: int
    name: str

    @classmethod
    def from_row(cls, fields: Sequence[Any]) -> "Author":
        return cls(id=fields[0], name=fields[1])


@dataclass
class Book:
    """
    A book, keyed by ISBN.

    Columns: isbn, title[, price]. The orders query does not select the
    price, so it may be None there.
    """
    isbn: str
    title: str
    price: Optional[float] = None
    authors: List[Author] = field(default_factory=list)

    @classmethod
    def from_row(cls, fields: Sequence[Any]) -> "Book":
        price = fields[2] if len(fields) > 2 else None
        return cls(
            isbn=fields[0],
            title=fields[1],
            price=float(price) if price is not None else None,
        )


@dataclass
class Customer:
    """A customer. Columns: id, name, email."""
    id: int
    name: str
    email: str

    @classmethod
    def from_row(cls, fields: Sequence[Any]) -> "Customer":
        return cls(id=fields[0], name=fields[1], email=fields[2])


@dataclass
class Order:
    """An order with its customer and one entry per ordered book line."""
    id: int
    order_date: Optional[date]
    customer: Optional[Customer] = None
    books: List[Book] = field(default_factory=list)

    @classmethod
    def from_row(cls, fields: Sequence[Any]) -> "Order":
        return cls(id=fields[0], order_date=_to_date(fields[1]))


@dataclass
class TopSellingBook:
    title: str
    total_sold: int


@dataclass
class SalesStatistics:
    """Aggregates returned by the sales statistics queries."""
    total_orders: int
    total_sales: float
    top_selling_books: List[TopSellingBook] = field(default_factory=list)
