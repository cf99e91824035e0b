# venue_booking/core/cache_redis.py
"""
Async Redis client for the cache layer.

One client per running event loop. When ``settings.redis_url`` is unset the
factory returns None and the cache runs without a backend.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional
import weakref

from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from .config import settings

logger = logging.getLogger(__name__)

_clients_by_loop: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, AsyncRedis]" = (
    weakref.WeakKeyDictionary()
)
_locks_by_loop: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


async def get_cache_redis_client() -> Optional[AsyncRedis]:
    """
    Get or create the async Redis client for caching operations.

    Returns:
        AsyncRedis client instance, or None when no backend is configured or
        the initial ping fails.
    """
    if not settings.redis_url:
        return None

    loop = asyncio.get_running_loop()
    existing = _clients_by_loop.get(loop)
    if existing is not None:
        return existing

    lock = _locks_by_loop.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        _locks_by_loop[loop] = lock

    async with lock:
        existing = _clients_by_loop.get(loop)
        if existing is not None:
            return existing

        client = AsyncRedis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=settings.cache_socket_timeout,
            socket_timeout=settings.cache_socket_timeout,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except (RedisError, OSError) as exc:
            logger.error("[REDIS-CACHE] Redis client failed to connect: %s", exc)
            with contextlib.suppress(RedisError, OSError):
                await client.aclose()
            return None

        _clients_by_loop[loop] = client
        logger.info("[REDIS-CACHE] Redis client initialized and connected")
        return client


async def close_cache_redis_client() -> None:
    """Close the caching Redis client bound to the running loop."""
    loop = asyncio.get_running_loop()

    client = _clients_by_loop.pop(loop, None)
    if client is None:
        return

    try:
        await client.aclose()
    finally:
        logger.info("[REDIS-CACHE] Redis client closed")
