"""
Restaurants API — Health Check Route
=====================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Pings MongoDB through the restaurant store's database handle.

Status levels:
    - healthy:   MongoDB answered the ping
    - unhealthy: MongoDB is unreachable (requests will fail with 500)
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_restaurant_store
from app.schemas.restaurant import HealthResponse
from app.services.restaurant_store import RestaurantStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: RestaurantStore = Depends(get_restaurant_store),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.database.command("ping")
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
