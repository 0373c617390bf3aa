"""Flowershop catalog API application.

Creates the FastAPI application and wires logging, middleware, routers
and the exception handlers that render the standard error envelope.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flowershop.api.health import router as health_router
from flowershop.api.middleware import setup_middleware
from flowershop.api.products import router as products_router
from flowershop.domain.exceptions import ErrorCode, PersistenceError
from flowershop.infrastructure.config import settings
from flowershop.infrastructure.observability import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging(settings.log_level, json_logs=settings.log_json)
    logger.info(
        "Starting Flowershop catalog API",
        version=settings.api_version,
        debug=settings.debug,
        catalog_backend=settings.catalog_backend,
    )

    yield

    logger.info("Shutting down Flowershop catalog API")


app = FastAPI(
    title="Flowershop Catalog API",
    description="Store-scoped catalog of flowers, bouquets, baskets and packages",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def error_envelope(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        return error_envelope(
            request,
            exc.status_code,
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
            detail.get("details", []),
        )
    return error_envelope(request, exc.status_code, "ERROR", str(detail))


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Report storage failures as 503; the request may be retried."""
    logger.error(
        "Catalog storage unavailable",
        path=request.url.path,
        method=request.method,
        operation=exc.details.get("operation"),
        error=exc.message,
    )
    return error_envelope(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        ErrorCode.PERSISTENCE_ERROR.value,
        "Catalog storage is unavailable",
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_envelope(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
