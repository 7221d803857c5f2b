"""
Shared response models: health, errors and feature listings.
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response model for application exceptions."""
    error: str
    message: str
    details: Optional[str] = None


class ProblemDetails(BaseModel):
    """RFC 7807 body returned for unhandled server failures."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    title: str
    status: int
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    detail: Optional[str] = None


class FeatureListResponse(BaseModel):
    features: Dict[str, bool]
