# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    user_service: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Pings the user service's auth health endpoint.
    """
    checks = ChecksResponse(user_service="unknown")

    try:
        async with httpx.AsyncClient(timeout=settings.HEALTH_CHECK_TIMEOUT) as client:
            response = await client.get(
                f"{settings.supabase_base_url}/auth/v1/health",
                headers={"apikey": settings.SUPABASE_ANON_KEY},
            )
            response.raise_for_status()
        checks.user_service = "healthy"
    except httpx.HTTPError as e:
        logger.warning(f"User service readiness check failed: {e}")
        checks.user_service = f"unhealthy: {str(e)[:50]}"

    return ReadinessResponse(
        status="ready" if checks.user_service == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
