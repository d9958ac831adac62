"""
Health check router.

Liveness for load balancers plus a readiness probe that reports whether
the database is configured.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_settings, get_supabase_client
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint for liftbook-api.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/ready")
def ready(settings: Settings = Depends(get_settings)):
    """Readiness: the API can only serve data with Supabase configured."""
    database = get_supabase_client() is not None
    if not database:
        logger.warning("Readiness check: Supabase credentials not configured")
    return {
        "status": "ok" if database else "degraded",
        "database": database,
        "environment": settings.environment,
    }
