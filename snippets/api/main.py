"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (server failures, request logging, security headers)
4. Exception handlers (application exceptions and server failures)
5. Startup/shutdown events (bookstore database lifecycle)

Run with: uvicorn snippets.api.main:app --reload
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from snippets import __version__
from snippets.core.config import get_settings
from snippets.core.logging_config import get_logger, setup_logging
from snippets.core.exceptions import (
    DatabaseError,
    SnippetsException,
)
from snippets.core.audit import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    ServerFailureMiddleware,
    server_failure_response,
)
from snippets.core.feature_flags import get_feature_manager
from snippets.api.routes import bookstore_router, diagnostics_router, features_router, health_router


# Initialize logging before anything else
settings = get_settings()
setup_logging(
    settings.log_level,
    log_dir=settings.log_dir,
    log_format=settings.log_format,
    level_overrides=settings.log_level_overrides,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: rebuild and seed the bookstore database, load feature flags
    - Shutdown: dispose database connections
    """
    from snippets.database import close_database, get_database, init_bookstore

    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    features = get_feature_manager()
    logger.info(f"Enabled features: {', '.join(features.enabled_features()) or 'none'}")

    if settings.init_db_on_startup:
        init_bookstore(get_database())

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")
    close_database()


# Create FastAPI application
app = FastAPI(
    title="Bookstore Snippets API",
    description="""
    Small web-service features served from one application.

    ## Features

    - **Bookstore**: customers, books with authors, orders, sales statistics
    - **Feature flags**: endpoints gated by configurable flags
    - **Global exception handling**: uniform server failure responses
    - **Request logging**: one structured log event per request
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (last added runs first)
# ============================================================

app.add_middleware(ServerFailureMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_request_logging:
    app.add_middleware(RequestLoggingMiddleware)
    logger.info("Request logging middleware enabled")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.warning("CORS configured for development (all origins allowed)")


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(SnippetsException)
async def snippets_exception_handler(request: Request, exc: SnippetsException):
    """Handle all application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Database failures that escaped the executor."""
    logger.error(f"Database error: {exc}")
    error = DatabaseError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Route failures are normally answered by ServerFailureMiddleware; this
    covers anything raised outside it. Returns an RFC 7807 problem body
    carrying the request id as traceId.
    """
    return server_failure_response(request, exc)


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(bookstore_router)
app.include_router(features_router)
app.include_router(diagnostics_router)


@app.get("/", include_in_schema=False, response_class=PlainTextResponse)
async def root() -> str:
    return "Hello BookStore!"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "snippets.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
