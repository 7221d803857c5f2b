"""
Request and Response models for the Bookstore API.

These Pydantic models define the contract between client and server
and convert the database entities into response bodies.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from snippets.database.entities import Author, Book, Customer, Order, SalesStatistics


class CustomerCreate(BaseModel):
    """Request body for POST /customers."""
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Customer full name",
        examples=["John Doe"]
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=320,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Contact email address",
        examples=["john.doe@example.com"]
    )


class CustomerResponse(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerResponse":
        return cls(id=customer.id, name=customer.name, email=customer.email)


class AuthorResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_entity(cls, author: Author) -> "AuthorResponse":
        return cls(id=author.id, name=author.name)


class BookResponse(BaseModel):
    """A book with every author found by the join."""
    isbn: str
    title: str
    price: Optional[float] = None
    authors: List[AuthorResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, book: Book) -> "BookResponse":
        return cls(
            isbn=book.isbn,
            title=book.title,
            price=book.price,
            authors=[AuthorResponse.from_entity(a) for a in book.authors],
        )


class BookListResponse(BaseModel):
    books: List[BookResponse]


class OrderedBookResponse(BaseModel):
    """Book line of an order, projected to ISBN and title."""
    isbn: str
    title: str


class OrderResponse(BaseModel):
    """An order with its customer and one entry per ordered book line."""
    id: int
    order_date: Optional[date] = None
    customer: Optional[CustomerResponse] = None
    books: List[OrderedBookResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            order_date=order.order_date,
            customer=CustomerResponse.from_entity(order.customer) if order.customer else None,
            books=[OrderedBookResponse(isbn=b.isbn, title=b.title) for b in order.books],
        )


class OrderListResponse(BaseModel):
    orders: List[OrderResponse]


class TopSellingBookResponse(BaseModel):
    title: str
    total_sold: int


class SalesStatisticsResponse(BaseModel):
    """Response model for GET /sales-statistics."""
    total_orders: int
    total_sales: float
    top_selling_books: List[TopSellingBookResponse]

    @classmethod
    def from_entity(cls, stats: SalesStatistics) -> "SalesStatisticsResponse":
        return cls(
            total_orders=stats.total_orders,
            total_sales=stats.total_sales,
            top_selling_books=[
                TopSellingBookResponse(title=b.title, total_sold=b.total_sold)
                for b in stats.top_selling_books
            ],
        )
