"""Liveness and readiness checks for the catalog API.

``/health`` only says the process is up. ``/ready`` also checks that the
configured catalog storage answers, so a load balancer can hold traffic
back while PostgreSQL is unreachable.
"""

from typing import Literal

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from flowershop.infrastructure.config import settings

router = APIRouter()
logger = structlog.get_logger()


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    service: str = "flowershop-api"
    version: str


class ReadinessResponse(BaseModel):
    status: Literal["ready", "unavailable"]
    catalog_backend: str


async def check_storage() -> bool:
    """Return whether the catalog storage accepts queries.

    The in-memory catalog lives in the process and is always available.
    """
    if settings.catalog_backend == "memory":
        return True

    from flowershop.infrastructure.database import engine

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Catalog storage check failed", error=str(e))
        return False
    return True


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(version=settings.api_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Report whether requests can be served.

    Answers 503 while the storage check fails.
    """
    if await check_storage():
        return ReadinessResponse(status="ready", catalog_backend=settings.catalog_backend)

    body = ReadinessResponse(status="unavailable", catalog_backend=settings.catalog_backend)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
