# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — banner, health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from worship_api.core.config import settings
from worship_api.core.dependencies import get_store

router = APIRouter(tags=["System"])


@router.get("/")
def root():
    return {
        "message": "Worship API - worship group management",
        "version": settings.SERVICE_VERSION,
        "documentation": "/docs",
    }


@router.get("/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "records": get_store().counts(),
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe — ready once the members are loaded."""
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "members_loaded": get_store().members.count() > 0,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
