"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends, Request

from siteledger import __version__
from siteledger.api.dependencies import get_notifier
from siteledger.application.dto.responses import HealthResponse
from siteledger.config import get_logger
from siteledger.core.interfaces import INotifier

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    request: Request,
    notifier: INotifier | None = Depends(get_notifier),
) -> HealthResponse:
    """
    Service health.

    Runs a trivial query to confirm the database answers.
    """
    database = "ok"
    start = time.time()
    try:
        async with request.app.state.pool.acquire() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.warning("health_database_failed", error=str(e))
        database = "error"

    logger.debug("health_checked", database=database, latency_ms=(time.time() - start) * 1000)

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=__version__,
        database=database,
        notifier=type(notifier).__name__ if notifier is not None else "none",
    )
