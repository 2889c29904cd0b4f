"""
Health check router.

Provides liveness and readiness probes.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import settings
from ..dependencies import get_search_engine
from ..services.search_engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str = settings.SERVICE_NAME
    version: str = __version__


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    engine: dict
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint - returns 200 if service is running",
)
async def health_check():
    """
    Basic health check.

    Always returns 200 OK if the service is running.
    """
    return HealthResponse(status="healthy", timestamp=_now())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Check if the catalog store is reachable",
)
async def readiness_check(engine: SearchEngine = Depends(get_search_engine)):
    """
    Readiness check.

    Returns 200 if the catalog store answers, 503 otherwise.
    """
    store_ok = await engine.store.ping()
    checks = {"catalog_store": "healthy" if store_ok else "unavailable"}

    response = ReadinessResponse(
        ready=store_ok, checks=checks, engine=engine.get_stats(), timestamp=_now()
    )

    if not store_ok:
        logger.warning("Readiness check failed: catalog store unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=response.model_dump()
        )

    return response
