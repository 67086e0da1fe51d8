# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from presenter_rotation.core.config import settings
from presenter_rotation.core.dependencies import get_team_store
from presenter_rotation.repositories.base import TeamStore

router = APIRouter(tags=["System"])


@router.get("/health")
@router.get("/api/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(store: TeamStore = Depends(get_team_store)):
    """Readiness probe — verifies the store can serve traffic."""
    if not store.ping():
        raise HTTPException(status_code=503, detail="Team store unavailable")
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "store": settings.STORE_BACKEND,
        "teams_count": store.count_teams(),
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
