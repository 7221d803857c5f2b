"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from snippets.models.bookstore import (
    BookListResponse,
    BookResponse,
    CustomerCreate,
    CustomerResponse,
    OrderListResponse,
    OrderResponse,
    SalesStatisticsResponse,
)
from snippets.models.common import (
    ErrorResponse,
    FeatureListResponse,
    HealthResponse,
    ProblemDetails,
)

__all__ = [
    "BookListResponse",
    "BookResponse",
    "CustomerCreate",
    "CustomerResponse",
    "OrderListResponse",
    "OrderResponse",
    "SalesStatisticsResponse",
    "ErrorResponse",
    "FeatureListResponse",
    "HealthResponse",
    "ProblemDetails",
]
