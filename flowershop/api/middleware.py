"""HTTP middleware for the catalog API.

Provides:
- Request ID correlation and request logging
- API key authentication for catalog routes
- A last-resort handler for unhandled errors
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from flowershop.infrastructure.config import settings

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request state, the log context and the response."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code if response is not None else 500,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# API Key Authentication Middleware
# ============================================================================


PUBLIC_PATHS = {
    "/health",
    "/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
}


def unauthorized(error_code: str, message: str) -> JSONResponse:
    """Build a 401 response in the standard error envelope."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error_code": error_code, "message": message, "details": []},
        headers={"WWW-Authenticate": "Bearer"},
    )


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Require ``Authorization: Bearer <api_key>`` on every non-public path."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Reject requests without a valid API key.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response from the handler, or a 401 error.
        """
        path = request.url.path.rstrip("/")
        if path in PUBLIC_PATHS or path.startswith(("/docs", "/redoc")):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            logger.warning("Missing authorization header", path=path, method=request.method)
            return unauthorized("UNAUTHORIZED", "Missing Authorization header")

        scheme, _, api_key = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not api_key:
            logger.warning("Invalid authorization format", path=path, method=request.method)
            return unauthorized(
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <api_key>'",
            )

        if api_key != settings.flowershop_api_key:
            logger.warning("Invalid API key", path=path, method=request.method)
            return unauthorized("INVALID_API_KEY", "Invalid API key")

        request.state.authenticated = True
        return await call_next(request)


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escape every handler into a 500 envelope."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": getattr(request.state, "request_id", None),
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Register the catalog middleware.

    Starlette runs the last added middleware first: request IDs are
    assigned before authentication, and the error handler sits closest
    to the routes.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(ApiKeyMiddleware)
    app.add_middleware(RequestIdMiddleware)
