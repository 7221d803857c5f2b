"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- Anything outside this hierarchy is a server failure (see api.main)
"""
from typing import Optional


# RFC 7231 section reference used as the problem "type" for server failures
SERVER_FAILURE_TYPE = "https://datatracker.ietf.org/doc/html/rfc7231#section-6.6.1"


class SnippetsException(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(SnippetsException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class NotFoundError(SnippetsException):
    """Raised when a requested resource does not exist."""
    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, identifier):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            details=f"{resource.lower()}_id={identifier}"
        )
        self.resource = resource
        self.identifier = identifier


class FeatureDisabledError(SnippetsException):
    """Raised when an endpoint is gated by a disabled feature flag."""
    status_code = 404
    error_code = "feature_disabled"

    def __init__(self, feature: str):
        super().__init__(
            message="Not Found",
            details=f"feature={feature}"
        )
        self.feature = feature


class DatabaseError(SnippetsException):
    """Raised when database operations fail."""
    status_code = 503
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)
