# venue_booking/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

The versioned cache lives on ``app.state`` for the whole process so its
statistics and circuit breaker survive across requests; services are built
per request around the request's session.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.config import settings
from ...services.booking_service import BookingService
from ...services.cache_keys import CacheKeys
from ...services.cache_service import VersionedCache
from ...services.customer_service import CustomerService
from ...services.venue_service import VenueService
from ...services.venue_type_service import VenueTypeService
from .database import get_db

logger = logging.getLogger(__name__)


def get_versioned_cache(request: Request) -> VersionedCache:
    """Process-wide cache. Falls back to a backend-less cache before startup ran."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache = VersionedCache(
            None,
            failure_threshold=settings.cache_failure_threshold,
            recovery_timeout=settings.cache_recovery_timeout,
        )
        request.app.state.cache = cache
    return cache


def get_cache_keys() -> CacheKeys:
    return CacheKeys(settings.cache_namespace)


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    cache: VersionedCache = Depends(get_versioned_cache),
    keys: CacheKeys = Depends(get_cache_keys),
) -> BookingService:
    return BookingService(db, cache=cache, keys=keys)


def get_venue_service(
    db: AsyncSession = Depends(get_db),
    cache: VersionedCache = Depends(get_versioned_cache),
    keys: CacheKeys = Depends(get_cache_keys),
) -> VenueService:
    return VenueService(db, cache=cache, keys=keys)


def get_venue_type_service(
    db: AsyncSession = Depends(get_db),
    cache: VersionedCache = Depends(get_versioned_cache),
    keys: CacheKeys = Depends(get_cache_keys),
) -> VenueTypeService:
    return VenueTypeService(db, cache=cache, keys=keys)


def get_customer_service(db: AsyncSession = Depends(get_db)) -> CustomerService:
    return CustomerService(db)
