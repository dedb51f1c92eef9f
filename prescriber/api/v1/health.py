"""
Health check and monitoring endpoints.
"""

import time
from datetime import datetime

from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from prescriber.config import get_settings
from prescriber.db.reference_store import current_reference_store
from prescriber.schemas.common import HealthResponse

router = APIRouter()

# Track startup time
_startup_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Check service health and reference store connectivity.

    No authentication required for health checks.
    """
    settings = get_settings()
    store = current_reference_store()

    connected = store is not None and await store.health_check()
    store_status = store.get_stats() if store is not None else {"status": "disconnected"}
    store_status["connected"] = connected

    return HealthResponse(
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        status="healthy" if connected else "degraded",
        timestamp=datetime.utcnow(),
        reference_store=store_status,
        uptime_seconds=time.time() - _startup_time
    )


@router.get("/metrics")
async def prometheus_metrics():
    """
    Expose Prometheus metrics.

    No authentication for metrics endpoint.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
