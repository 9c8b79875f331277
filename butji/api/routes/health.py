"""
Health check endpoint.
"""

import time

import structlog
from fastapi import APIRouter, Depends

from butji import __version__
from butji.api.dependencies import get_database
from butji.api.models import ComponentHealth, HealthResponse
from butji.storage.database import Database

router = APIRouter()
logger = structlog.get_logger(__name__)


async def _check_database(db: Database) -> ComponentHealth:
    """Check database connectivity and measure latency."""
    start = time.perf_counter()
    try:
        healthy = await db.health_check()
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="healthy" if healthy else "unhealthy",
            latency_ms=round(latency_ms, 2),
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="unhealthy",
            latency_ms=round(latency_ms, 2),
            details={"error": str(e)},
        )


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health(db: Database = Depends(get_database)) -> HealthResponse:
    components = {"database": await _check_database(db)}
    overall = (
        "healthy"
        if all(c.status == "healthy" for c in components.values())
        else "degraded"
    )
    if overall != "healthy":
        logger.warning("Health check degraded", components=list(components))
    return HealthResponse(status=overall, version=__version__, components=components)
