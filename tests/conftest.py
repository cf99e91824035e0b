"""
Shared fixtures.

- ``FakeRedis``: in-memory stand-in for the handful of async Redis commands
  the cache uses (get, set with ex/nx, delete, incr, ping).
- ``db_session``: AsyncSession on a fresh in-memory SQLite database per test.
- ``make_venue`` / ``make_customer`` / ``make_booking``: persisted rows.
"""

from __future__ import annotations

from datetime import datetime
import os
import random
from typing import Any, AsyncGenerator, Dict, List, Optional

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "")

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from venue_booking import models  # noqa: F401  (registers the mappers)
from venue_booking.core.enums import BookingStatus
from venue_booking.database import Base
from venue_booking.models import Booking, BookingRules, Customer, Venue
from venue_booking.services.cache_keys import CacheKeys
from venue_booking.services.cache_service import VersionedCache


class FakeRedis:
    """Dictionary-backed async Redis double. TTLs are recorded, never enforced."""

    def __init__(self) -> None:
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.commands: List[tuple] = []

    async def get(self, key: str) -> Optional[str]:
        self.commands.append(("get", key))
        return self.store.get(key)

    async def set(
        self, key: str, value: Any, ex: Optional[int] = None, nx: bool = False
    ) -> Optional[bool]:
        self.commands.append(("set", key))
        if nx and key in self.store:
            return None
        self.store[key] = str(value)
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        self.commands.append(("delete",) + keys)
        removed = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                self.ttls.pop(key, None)
                removed += 1
        return removed

    async def incr(self, key: str) -> int:
        self.commands.append(("incr", key))
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None

    def count(self, command: str) -> int:
        return sum(1 for entry in self.commands if entry[0] == command)


class FailingRedis:
    """Every command fails the way an unreachable server does."""

    def __init__(self) -> None:
        self.calls = 0

    async def _fail(self, *args: Any, **kwargs: Any) -> Any:
        self.calls += 1
        raise RedisConnectionError("Connection refused")

    get = _fail
    set = _fail
    delete = _fail
    incr = _fail
    ping = _fail


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def failing_redis() -> FailingRedis:
    return FailingRedis()


@pytest.fixture
def cache(fake_redis: FakeRedis) -> VersionedCache:
    return VersionedCache(fake_redis, rng=random.Random(1234))


@pytest.fixture
def keys() -> CacheKeys:
    return CacheKeys("hb")


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_venue(db_session: AsyncSession):
    async def _make(
        capacity: int = 10,
        slot_minutes: int = 60,
        auto_confirm: bool = True,
        name: str = "Harbour Room",
    ) -> Venue:
        venue = Venue(
            name=name,
            address="1 Quay Street",
            capacity=capacity,
            rules=BookingRules(slot_minutes=slot_minutes, auto_confirm=auto_confirm),
        )
        db_session.add(venue)
        await db_session.commit()
        return venue

    return _make


@pytest.fixture
def make_customer(db_session: AsyncSession):
    async def _make(name: str = "Ada Guest", email: str = "ada@example.com") -> Customer:
        customer = Customer(name=name, email=email)
        db_session.add(customer)
        await db_session.commit()
        return customer

    return _make


@pytest.fixture
def make_booking(db_session: AsyncSession):
    async def _make(
        venue: Venue,
        customer: Customer,
        start: datetime,
        end: datetime,
        status: BookingStatus = BookingStatus.CONFIRMED,
        party_size: int = 2,
    ) -> Booking:
        booking = Booking(
            venue_id=venue.id,
            customer_id=customer.id,
            start_utc=start,
            end_utc=end,
            party_size=party_size,
            status=status,
        )
        db_session.add(booking)
        await db_session.commit()
        return booking

    return _make
