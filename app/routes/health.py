"""
Travel Sample API — Health Check Route
========================================

What:  Health endpoint for container probes and load balancers.
How:   Pings the Couchbase cluster through the shared store.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from app import __version__
from app.database import CouchbaseStore, get_store
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: CouchbaseStore = Depends(get_store),
) -> HealthResponse:
    result = await store.ping()
    if result.ok:
        status, store_status = "healthy", "connected"
    else:
        status, store_status = "unhealthy", "disconnected"
        response.status_code = 503
        logger.warning("Health check: store unreachable: %s", result.error)

    return HealthResponse(
        status=status,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
