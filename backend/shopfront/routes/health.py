"""
Shopfront Backend: Health Check Route
=====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the store and reports the outcome.
Who:   Called by container health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Database reachable
    - unhealthy: Database unreachable (still HTTP 200; monitors read the body)
"""

import logging
import time

from fastapi import APIRouter, Request
from sqlalchemy import text

from shopfront import __version__
from shopfront.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the backend service and its database.",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
