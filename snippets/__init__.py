"""
Bookstore snippets application package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, feature flags and cross-cutting utilities
- database/  : Connection, schema setup, SQL and row-to-entity mapping
- models/    : Pydantic models for request/response schemas
"""

__version__ = "0.1.0"
