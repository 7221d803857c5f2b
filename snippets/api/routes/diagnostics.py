"""
Diagnostic Routes - Exercise the global exception handler.
"""
from fastapi import APIRouter

from snippets.core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Diagnostics"])


@router.get(
    "/error",
    summary="Raise an unhandled exception",
    description="Always fails; the response is the server failure problem body.",
)
async def raise_error():
    logger.debug("Raising deliberate exception")
    raise RuntimeError("Hello Global Exception")
