"""
Request Middleware - Request ids, server failures and request logging.

Each request gets an id (taken from the incoming X-Request-ID header or
freshly generated) that is:
- bound to every log record emitted while the request is served
- returned to the client in the X-Request-ID response header
- used as the traceId of server failure responses

Middleware, innermost first:
- ServerFailureMiddleware: turns unhandled exceptions into a 500
  problem response, so outer middleware still sees a response
- SecurityHeadersMiddleware: standard security headers
- RequestLoggingMiddleware: one completion event per request,
      HTTP GET /books responded 200 in 3.1416 ms
  with method, path, status_code, elapsed_ms and client_ip attached
  as structured fields
"""
import time
import uuid
from typing import Callable, Optional

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from snippets.core.config import get_settings
from snippets.core.exceptions import SERVER_FAILURE_TYPE
from snippets.core.logging_config import bind_request_id, get_logger, reset_request_id
from snippets.models.common import ProblemDetails

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MESSAGE_TEMPLATE = "HTTP {method} {path} responded {status_code} in {elapsed_ms:.4f} ms"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

_QUIET_PATHS = ("/health", "/health/ready")


def new_request_id() -> str:
    return uuid.uuid4().hex


def resolve_request_id(request: Request) -> str:
    """
    Return the id of ``request``, assigning one if nothing has yet.

    Order: id already on request.state, then the X-Request-ID header,
    then a fresh id. The result is stored on request.state.
    """
    request_id: Optional[str] = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request.state.request_id = request_id
    return request_id


def server_failure_response(request: Request, exc: Exception) -> JSONResponse:
    """
    Log ``exc`` and build the RFC 7807 body for an unhandled failure.

    The exception text is only included in development mode.
    """
    request_id = resolve_request_id(request)
    token = bind_request_id(request_id)
    try:
        logger.error("Unhandled exception occurred", exc_info=exc)
    finally:
        reset_request_id(token)

    problem = ProblemDetails(
        type=SERVER_FAILURE_TYPE,
        title="Server failure",
        status=500,
        trace_id=request_id,
        detail=str(exc) if get_settings().is_development() else None,
    )
    return JSONResponse(
        status_code=500,
        content=problem.model_dump(by_alias=True, exclude_none=True),
        media_type="application/problem+json",
        headers={REQUEST_ID_HEADER: request_id},
    )


class ServerFailureMiddleware(BaseHTTPMiddleware):
    """Convert exceptions raised by routes into server failure responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return server_failure_response(request, e)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging every request on completion.

    Also exposes the request id on ``request.state.request_id`` so
    exception handlers can report it.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log its outcome."""
        start_time = time.perf_counter()

        request_id = resolve_request_id(request)
        token = bind_request_id(request_id)

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                # Only reached when ServerFailureMiddleware is not installed
                self._log_request(
                    method=method,
                    path=path,
                    status_code=500,
                    elapsed_ms=(time.perf_counter() - start_time) * 1000,
                    client_ip=client_ip,
                    exc_info=e,
                )
                raise

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            self._log_request(
                method=method,
                path=path,
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
                client_ip=client_ip,
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms / 1000:.3f}s"
            return response
        finally:
            reset_request_id(token)

    def _log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        elapsed_ms: float,
        client_ip: str,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """Log request details at a level matching the status code."""
        if status_code >= 500:
            log_fn = logger.error
        elif path in _QUIET_PATHS:
            log_fn = logger.debug
        elif status_code >= 400:
            log_fn = logger.warning
        else:
            log_fn = logger.info

        log_fn(
            MESSAGE_TEMPLATE.format(
                method=method, path=path, status_code=status_code, elapsed_ms=elapsed_ms
            ),
            exc_info=exc_info,
            extra={
                "method": method,
                "path": path,
                "status_code": status_code,
                "elapsed_ms": round(elapsed_ms, 4),
                "client_ip": client_ip,
            },
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy: strict-origin-when-cross-origin
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response
