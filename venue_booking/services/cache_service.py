# venue_booking/services/cache_service.py
"""
Versioned cache-aside service for the venue booking platform.

The cache is a best-effort accelerator and never a source of truth:
- every backend failure reads as a miss and every failed write as a no-op
- invalidation bumps a version token instead of deleting keys
- TTLs get a random jitter so entries written together do not expire together
- a circuit breaker stops hammering a backend that keeps failing

Task cancellation is never absorbed. ``asyncio.CancelledError`` derives from
``BaseException`` and passes straight through the ``except Exception`` blocks.
"""

from enum import Enum
import json
import logging
import random
import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

BACKEND_ERRORS: tuple[type[BaseException], ...] = (
    RedisError,
    ConnectionError,
    TimeoutError,
    OSError,
)


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject calls
    HALF_OPEN = "half_open"  # Testing if backend recovered


class CircuitBreaker:
    """
    Circuit breaker for cache resilience.

    Prevents a dead backend from adding a timeout to every request.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        expected_exceptions: tuple[type[BaseException], ...] = BACKEND_ERRORS,
    ) -> None:
        """
        Initialize circuit breaker.

        Args:
            failure_threshold: Number of failures before opening circuit
            recovery_timeout: Seconds before attempting recovery
            expected_exceptions: Exception types counted as backend failures
        """
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exceptions = expected_exceptions

        self._failure_count: int = 0
        self._last_failure_time: Optional[float] = None
        self._state: CircuitState = CircuitState.CLOSED
        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        with self._lock:
            if self._state == CircuitState.OPEN and self._last_failure_time is not None:
                if time.monotonic() - self._last_failure_time >= self.recovery_timeout:
                    self._state = CircuitState.HALF_OPEN
            return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def call(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> Optional[T]:
        """
        Await ``func`` with circuit breaker protection.

        Returns:
            The result, or None if the circuit is (or just became) open.

        Raises:
            The backend error while the circuit is still closed.
        """
        if self.state == CircuitState.OPEN:
            logger.debug("Circuit breaker is OPEN, skipping %s", getattr(func, "__name__", func))
            return None

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions:
            self._on_failure()
            if self.state == CircuitState.CLOSED:
                raise
            return None
        self._on_success()
        return result

    def _on_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                logger.info("Circuit breaker recovered, closing circuit")

    def _on_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = time.monotonic()

            if self._failure_count >= self.failure_threshold and self._state != CircuitState.OPEN:
                self._state = CircuitState.OPEN
                logger.warning(f"Circuit breaker opened after {self._failure_count} failures")

    def reset(self) -> None:
        with self._lock:
            self._failure_count = 0
            self._last_failure_time = None
            self._state = CircuitState.CLOSED


def effective_ttl(ttl: int, jitter: int = 0, rng: Optional[random.Random] = None) -> int:
    """
    ``ttl`` shifted by a uniform offset in ``[-jitter, +jitter]``.

    The result stays inside ``[ttl - jitter, ttl + jitter]``; when the shifted
    value would be zero or negative the plain ``ttl`` is used instead.
    """
    if jitter <= 0:
        return ttl
    offset = (rng or random).uniform(-jitter, jitter)
    candidate = int(round(ttl + offset))
    return candidate if candidate > 0 else ttl


class VersionedCache:
    """
    Fail-open JSON cache over an async Redis-compatible backend.

    With ``redis_client=None`` every read is a miss and every write is a
    no-op, which is how the service runs when no cache is configured.
    """

    def __init__(
        self,
        redis_client: Optional[AsyncRedis] = None,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.redis = redis_client
        self.circuit_breaker = CircuitBreaker(
            failure_threshold=failure_threshold, recovery_timeout=recovery_timeout
        )
        self._rng = rng or random.Random()
        self._stats: Dict[str, int] = self._initialize_stats()

    def _initialize_stats(self) -> Dict[str, int]:
        return {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0,
            "errors": 0,
            "token_bumps": 0,
        }

    def _count(self, event: str) -> None:
        self._stats[event] += 1
        prometheus_metrics.record_cache_event(event)

    # Core cache operations

    async def _read_raw(self, key: str) -> Optional[str]:
        """Stored string for ``key``, or None on miss, failure or open circuit."""
        redis_client = self.redis
        if redis_client is None or self.circuit_breaker.state == CircuitState.OPEN:
            return None
        try:
            return await self.circuit_breaker.call(redis_client.get, key)
        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            self._count("errors")
            return None

    async def get(self, key: str) -> Optional[Any]:
        """Decoded value for ``key``; None when absent or unreadable."""
        raw = await self._read_raw(key)
        if raw is None:
            self._count("misses")
            return None
        try:
            value = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cache decode error for key {key}: {e}")
            self._count("errors")
            self._count("misses")
            return None
        self._count("hits")
        return value

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store ``value`` as JSON for ``ttl`` seconds. Returns whether it was written."""
        redis_client = self.redis
        if redis_client is None or self.circuit_breaker.state == CircuitState.OPEN:
            return False
        try:
            serialized = json.dumps(value, default=str)
            result = await self.circuit_breaker.call(redis_client.set, key, serialized, ex=ttl)
        except Exception as e:
            logger.warning(f"Cache set error for key {key}: {e}")
            self._count("errors")
            return False
        if result:
            self._count("sets")
            return True
        return False

    async def remove(self, key: str) -> bool:
        """Delete ``key``. True only when an entry was actually removed."""
        redis_client = self.redis
        if redis_client is None or self.circuit_breaker.state == CircuitState.OPEN:
            return False
        try:
            removed = await self.circuit_breaker.call(redis_client.delete, key)
        except Exception as e:
            logger.warning(f"Cache delete error for key {key}: {e}")
            self._count("errors")
            return False
        if removed:
            self._count("deletes")
            return True
        return False

    async def get_or_set(
        self,
        key: str,
        ttl: int,
        load: Callable[[], Awaitable[Any]],
        cache_none: bool = False,
        jitter: int = 0,
    ) -> Any:
        """
        Cache-aside read.

        A hit returns the stored value without calling ``load``; a stored JSON
        ``null`` counts as a hit. On a miss ``load`` is awaited exactly once and
        its result is stored (None only when ``cache_none`` is set) with a
        jittered TTL. The loaded value is returned whatever happens to the
        write. Errors raised by ``load`` propagate unchanged.
        """
        raw = await self._read_raw(key)
        if raw is not None:
            try:
                value = json.loads(raw)
            except (TypeError, ValueError) as e:
                logger.warning(f"Cache decode error for key {key}: {e}")
                self._count("errors")
            else:
                self._count("hits")
                return value

        self._count("misses")
        value = await load()

        if value is not None or cache_none:
            await self.set(key, value, effective_ttl(ttl, jitter, self._rng))
        return value

    # Version tokens

    async def get_token(self, name: str, default: int = 1) -> int:
        """Current value of the version token ``name``, or ``default``."""
        raw = await self._read_raw(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Cache token {name} holds a non-integer value")
            return default

    async def bump_token(self, name: str, default: int = 1) -> int:
        """
        Atomically increment the version token ``name``.

        An absent token is seeded with ``default`` first, so the very first
        bump moves readers off the default version too.

        Never raises: when the backend cannot be reached the current token is
        returned unchanged.
        """
        redis_client = self.redis
        if redis_client is not None and self.circuit_breaker.state != CircuitState.OPEN:

            async def _seed_and_incr() -> int:
                await redis_client.set(name, default, nx=True)
                return await redis_client.incr(name)

            try:
                result = await self.circuit_breaker.call(_seed_and_incr)
            except Exception as e:
                logger.warning(f"Cache token bump failed for {name}: {e}")
                self._count("errors")
            else:
                if result is not None:
                    self._count("token_bumps")
                    return int(result)
        return await self.get_token(name, default)

    # Monitoring

    def get_stats(self) -> Dict[str, Any]:
        """Cache performance statistics including circuit breaker state."""
        total_requests = self._stats["hits"] + self._stats["misses"]
        hit_rate = (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0
        return {
            **self._stats,
            "hit_rate": f"{hit_rate:.2f}%",
            "total_requests": total_requests,
            "backend": "redis" if self.redis is not None else "none",
            "circuit_breaker": {
                "state": self.circuit_breaker.state.value,
                "failure_count": self.circuit_breaker.failure_count,
                "threshold": self.circuit_breaker.failure_threshold,
            },
        }

    def reset_stats(self) -> None:
        self._stats = self._initialize_stats()
