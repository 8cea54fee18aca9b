"""Observability API endpoints.

Provides Prometheus metrics and a storage health check.
"""

import time

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from dependencies import get_storage
from domain.storage.errors import StorageError
from models import Tenant
from storage import Storage

from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the record store",
)
async def health_check(storage: Storage = Depends(get_storage)):
    """Run one cheap read against the record store.

    Returns 200 when the store answers, 503 otherwise.
    """
    start = time.perf_counter()
    try:
        async with storage.record_store.transaction() as tx:
            await tx.records(Tenant).count()
    except StorageError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "backend": storage.backend_name, "message": str(e)},
        )

    return {
        "status": "healthy",
        "backend": storage.backend_name,
        "latency_ms": round((time.perf_counter() - start) * 1000, 2),
    }
