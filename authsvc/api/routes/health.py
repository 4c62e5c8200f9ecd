"""
Liveness, readiness and metrics endpoints.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from authsvc.api.dependencies import get_user_store
from authsvc.core.metrics import metrics_endpoint
from authsvc.infrastructure.redis_client import UserStore

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Liveness check for Docker and load balancers. Does not touch Redis."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": round(time.monotonic() - request.app.state.started_at, 3),
    }


@router.get("/health/ready")
async def readiness_check(store: UserStore = Depends(get_user_store)):
    """Readiness check: 503 until Redis answers a PING."""
    if await store.ping():
        return {"status": "ready"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable"},
    )


@router.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_endpoint()
