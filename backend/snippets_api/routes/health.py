"""
Snippets API — Health Check Route
==================================

What:  Liveness/readiness probe for the snippet store.
How:   A `SELECT 1` round trip on a pooled connection. The endpoint itself
       always answers 200; the body says whether the database answered.

    status     database       meaning
    ─────────  ─────────────  ──────────────────────────────────
    healthy    connected      snippet operations can be served
    unhealthy  disconnected   every store call will fail with 400
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from snippets_api import __version__
from snippets_api.database import engine
from snippets_api.schemas.snippet import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.time()


async def database_reachable() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the snippet database answers, with version and uptime.",
)
async def health_check() -> HealthResponse:
    reachable = await database_reachable()
    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _started_at, 2),
    )
