# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.config import Settings, get_settings

router = APIRouter()

API_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


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
    """Individual readiness checks."""
    config: str
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(config: Annotated[Settings, Depends(get_settings)]):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=config.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(config: Annotated[Settings, Depends(get_settings)]):
    """
    Readiness check endpoint.

    Checks that the Supabase secrets are configured and that the
    properties bucket is reachable with the service_role key.
    """
    from core.services.storage_service import StorageService
    from lib.supabase_client import SupabaseClient

    checks = ChecksResponse(config="unknown", storage="unknown")

    if config.has_storage_credentials:
        checks.config = "healthy"
        try:
            StorageService(SupabaseClient.create_admin_client(config)).check_bucket()
            checks.storage = "healthy"
        except Exception as e:
            checks.storage = f"unhealthy: {str(e)[:50]}"
    else:
        checks.config = "missing Supabase secrets"
        checks.storage = "skipped"

    all_healthy = checks.config == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
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
