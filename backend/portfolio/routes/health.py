"""
Portfolio API — Health Check Route
===================================

What:  GET /health for container and load-balancer probes.
How:   Runs `SELECT 1` on a request-scoped session and reports uptime.

Status levels:
    - healthy:   database reachable
    - unhealthy: database query failed
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio import __version__
from portfolio.database import get_db_session
from portfolio.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(db: AsyncSession = Depends(get_db_session)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.execute(text("SELECT 1"))
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
