"""
Service layer for the venue booking platform.

Services own the units of work and the cache invalidation; routes stay thin.
"""

from .base import BaseService
from .booking_service import BookingService
from .cache_keys import CacheKeys, CachePolicies, CachePolicy
from .cache_service import CircuitBreaker, CircuitState, VersionedCache, effective_ttl
from .customer_service import CustomerService
from .venue_service import VenueService
from .venue_type_service import VenueTypeService

__all__ = [
    "BaseService",
    "BookingService",
    "CacheKeys",
    "CachePolicies",
    "CachePolicy",
    "CircuitBreaker",
    "CircuitState",
    "CustomerService",
    "VenueService",
    "VenueTypeService",
    "VersionedCache",
    "effective_ttl",
]
