"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- bookstore.py   : Customers, books, orders, sales statistics
- features.py    : Feature-flag gated endpoints
- diagnostics.py : Deliberate failure for the global exception handler
- health.py      : Health check endpoints
"""
from snippets.api.routes.bookstore import router as bookstore_router
from snippets.api.routes.diagnostics import router as diagnostics_router
from snippets.api.routes.features import router as features_router
from snippets.api.routes.health import router as health_router

__all__ = [
    "bookstore_router",
    "diagnostics_router",
    "features_router",
    "health_router",
]
