"""
StackIt Backend: Health Check Route
====================================

What:  Health endpoint for container and load balancer health checks.
How:   Reports the active repository backend. With the database backend the
       check also runs `SELECT 1`; an unreachable database marks the service
       degraded (HTTP 200) so the check output explains the failure.

Status levels:
    healthy:   repository reachable
    degraded:  database backend selected but not reachable
"""

import logging
import time

from fastapi import APIRouter

from stackit import __version__
from stackit.config import settings
from stackit.database import check_connection
from stackit.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "not_configured"
    overall = "healthy"

    if settings.uses_database:
        if await check_connection():
            db_status = "connected"
        else:
            db_status = "disconnected"
            overall = "degraded"
            logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        repository=settings.repository_backend,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
