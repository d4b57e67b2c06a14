"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from newsapi.core.config import settings
from newsapi.core.exceptions import DatabaseUnavailableError
from newsapi.core.logging import get_logger
from newsapi.database.connection import ensure_schema, ping_database
from newsapi.schemas.common import HealthResponse


router = APIRouter(prefix="/health")

logger = get_logger("health")


async def db_healthcheck() -> bool:
    """Check PostgreSQL database health."""
    return await ping_database()


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the API and its database.",
)
async def health_check() -> HealthResponse:
    checks = {"database": await db_healthcheck()}
    status = "healthy" if all(checks.values()) else "unhealthy"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc),
        checks=checks,
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the API is ready to accept traffic.",
)
async def readiness_check() -> dict:
    """
    Readiness probe for compose/Kubernetes healthchecks.

    Returns 200 once the database answers and the schema exists, 503 otherwise.
    """
    if not await db_healthcheck():
        raise DatabaseUnavailableError(message="Database not ready")
    try:
        await ensure_schema()
    except Exception as e:
        logger.warning(f"Schema bootstrap failed: {e}")
        raise DatabaseUnavailableError(message="Database schema not ready") from e
    return {"status": "ready"}


@router.get(
    "/live",
    summary="Liveness check",
    description="Check if the API process is alive.",
)
async def liveness_check() -> dict:
    return {"status": "alive"}
