"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Kubernetes liveness/readiness probes
3. Quick system status verification
"""
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from snippets import __version__
from snippets.core.logging_config import get_logger
from snippets.database import get_database
from snippets.models.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK while the service process is responsive."
)
async def health_check() -> HealthResponse:
    """
    Perform a basic health check.

    Does not touch the database; see /health/ready for that.
    """
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="Returns 200 when the bookstore database answers, 503 otherwise.",
    responses={503: {"model": HealthResponse}},
)
def readiness_check():
    """Verify the service can reach its database."""
    logger.debug("Readiness check requested")

    healthy = get_database().check_connection()
    body = HealthResponse(
        status="ready" if healthy else "unavailable",
        version=__version__,
        timestamp=datetime.utcnow(),
        database="ok" if healthy else "unreachable",
    )
    if not healthy:
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body
