# venue_booking/routes/v1/health.py
"""Liveness, deep dependency, and cache health endpoints."""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ...api.dependencies import get_db, get_versioned_cache
from ...core.config import settings
from ...services.cache_service import VersionedCache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health-v1"])


@router.get("")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "environment": settings.environment}


@router.get("/deep")
async def deep_health(
    response: Response,
    db: AsyncSession = Depends(get_db),
    cache: VersionedCache = Depends(get_versioned_cache),
) -> Dict[str, Any]:
    """
    Round-trip both backing stores.

    The database answers ``SELECT 1``; without it nothing works, so a failure
    turns the response into a 503. The cache gets a ``PING``; a failed ping
    only degrades the status because every read falls back to the database.
    """
    checks: Dict[str, str] = {}
    overall = "ok"

    try:
        value = (await db.execute(text("SELECT 1"))).scalar()
        checks["database"] = "ok" if value == 1 else "fail"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = "fail"
    if checks["database"] != "ok":
        overall = "fail"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    if cache.redis is None:
        checks["cache"] = "disabled"
    else:
        started = time.perf_counter()
        try:
            await cache.redis.ping()
            checks["cache"] = f"ok ({(time.perf_counter() - started) * 1000:.0f} ms)"
        except Exception as e:
            logger.warning(f"Cache health check failed: {e}")
            checks["cache"] = "fail"
            if overall == "ok":
                overall = "degraded"

    return {"status": overall, "checks": checks}


@router.get("/cache")
async def cache_health(cache: VersionedCache = Depends(get_versioned_cache)) -> Dict[str, Any]:
    """Cache counters and circuit state. A missing backend is healthy, just uncached."""
    return {"status": "ok", "cache": cache.get_stats()}
