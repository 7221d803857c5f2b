"""
Bookstore Routes - Customers, books, orders and sales statistics.

Endpoints:
- POST /customers: Create a customer
- GET /customers/{id}: Fetch one customer
- GET /books: Books with their authors
- GET /orders: Orders with customer and ordered books
- GET /sales-statistics: Order count, revenue and best sellers
"""
from fastapi import APIRouter, Depends, Path, Response

from snippets.core.exceptions import NotFoundError, ValidationError
from snippets.core.logging_config import get_logger
from snippets.database import BookstoreRepository
from snippets.models.bookstore import (
    BookListResponse,
    BookResponse,
    CustomerCreate,
    CustomerResponse,
    OrderListResponse,
    OrderResponse,
    SalesStatisticsResponse,
)
from snippets.models.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Bookstore"])


def get_repository() -> BookstoreRepository:
    """Repository bound to the shared database connection."""
    return BookstoreRepository()


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=201,
    summary="Create a customer",
    responses={400: {"model": ErrorResponse}},
)
def create_customer(
    payload: CustomerCreate,
    response: Response,
    repo: BookstoreRepository = Depends(get_repository),
) -> CustomerResponse:
    """Insert a customer and point the Location header at it."""
    customer = repo.create_customer(payload.name, payload.email)
    if customer is None:
        raise ValidationError("Customer could not be created")

    response.headers["Location"] = f"/customers/{customer.id}"
    return CustomerResponse.from_entity(customer)


@router.get(
    "/customers/{customer_id}",
    response_model=CustomerResponse,
    summary="Get a customer by id",
    responses={404: {"model": ErrorResponse}},
)
def get_customer(
    customer_id: int = Path(..., description="Customer identifier"),
    repo: BookstoreRepository = Depends(get_repository),
) -> CustomerResponse:
    customer = repo.get_customer(customer_id)
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    return CustomerResponse.from_entity(customer)


@router.get(
    "/books",
    response_model=BookListResponse,
    summary="List books with their authors",
)
def list_books(repo: BookstoreRepository = Depends(get_repository)) -> BookListResponse:
    books = repo.list_books()
    logger.debug(f"Listing {len(books)} books")
    return BookListResponse(books=[BookResponse.from_entity(b) for b in books])


@router.get(
    "/orders",
    response_model=OrderListResponse,
    summary="List orders with customer and books",
)
def list_orders(repo: BookstoreRepository = Depends(get_repository)) -> OrderListResponse:
    orders = repo.list_orders()
    logger.debug(f"Listing {len(orders)} orders")
    return OrderListResponse(orders=[OrderResponse.from_entity(o) for o in orders])


@router.get(
    "/sales-statistics",
    response_model=SalesStatisticsResponse,
    summary="Sales statistics",
    description="Total orders, total sales and the five best-selling titles.",
)
def sales_statistics(
    repo: BookstoreRepository = Depends(get_repository),
) -> SalesStatisticsResponse:
    return SalesStatisticsResponse.from_entity(repo.get_sales_statistics())
