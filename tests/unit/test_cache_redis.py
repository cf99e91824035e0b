from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from venue_booking.core import cache_redis


@pytest.fixture(autouse=True)
def _clean_clients():
    cache_redis._clients_by_loop.clear()
    cache_redis._locks_by_loop.clear()
    yield
    cache_redis._clients_by_loop.clear()
    cache_redis._locks_by_loop.clear()


def _settings(redis_url):
    return SimpleNamespace(redis_url=redis_url, cache_socket_timeout=0.5)


@pytest.mark.asyncio
async def test_no_url_means_no_client(monkeypatch):
    monkeypatch.setattr(cache_redis, "settings", _settings(None))
    from_url = MagicMock()
    monkeypatch.setattr(cache_redis.AsyncRedis, "from_url", from_url)

    assert await cache_redis.get_cache_redis_client() is None
    from_url.assert_not_called()


@pytest.mark.asyncio
async def test_client_is_reused_within_a_loop(monkeypatch):
    monkeypatch.setattr(cache_redis, "settings", _settings("redis://cache:6379/0"))
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    from_url = MagicMock(return_value=client)
    monkeypatch.setattr(cache_redis.AsyncRedis, "from_url", from_url)

    first = await cache_redis.get_cache_redis_client()
    second = await cache_redis.get_cache_redis_client()

    assert first is client
    assert second is client
    from_url.assert_called_once()
    assert from_url.call_args.kwargs["decode_responses"] is True

    await cache_redis.close_cache_redis_client()
    client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_ping_returns_none(monkeypatch):
    monkeypatch.setattr(cache_redis, "settings", _settings("redis://nowhere:6379/0"))
    client = MagicMock()
    client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
    client.aclose = AsyncMock()
    monkeypatch.setattr(cache_redis.AsyncRedis, "from_url", MagicMock(return_value=client))

    assert await cache_redis.get_cache_redis_client() is None
    client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_without_client_is_a_no_op():
    await cache_redis.close_cache_redis_client()
