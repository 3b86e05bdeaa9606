"""
Health and Monitoring Router.

Public, unauthenticated endpoints for liveness checks. They touch no upstream
service, so they stay fast and answer even when Mojang is unreachable.

Endpoints Provided:
- `/healthcheck`: Confirms the service is running.
- `/monitoring/ping`: Simple connectivity test.
"""

from fastapi import APIRouter
from datetime import datetime, timezone
from typing import Dict, Any

from core.logging_config import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "Player Skin API"
SERVICE_VERSION = "1.0.0"

health_router = APIRouter(tags=["Health & Monitoring"])

monitoring_router = APIRouter(prefix="/monitoring", tags=["Health & Monitoring"])


@health_router.get("/healthcheck")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint

    Returns:
        Dict with status, timestamp, and version info
    """
    logger.debug("Health check requested")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION,
        "service": SERVICE_NAME,
    }


@monitoring_router.get("/ping")
async def ping() -> Dict[str, str]:
    """Simple ping endpoint for connectivity testing"""
    logger.debug("Ping requested")
    return {
        "message": "pong",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION,
    }
