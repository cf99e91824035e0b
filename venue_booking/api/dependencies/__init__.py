# venue_booking/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .database import get_db
from .services import (
    get_booking_service,
    get_cache_keys,
    get_customer_service,
    get_venue_service,
    get_venue_type_service,
    get_versioned_cache,
)

__all__ = [
    # Database
    "get_db",
    # Cache
    "get_cache_keys",
    "get_versioned_cache",
    # Services
    "get_booking_service",
    "get_customer_service",
    "get_venue_service",
    "get_venue_type_service",
]
