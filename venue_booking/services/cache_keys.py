# venue_booking/services/cache_keys.py
"""
Cache key scheme and cache policies.

Every cached read is keyed by a version token. Invalidation never deletes
entries: writers bump the token, readers start using fresh keys, and the old
entries age out through their TTL.

    hb:venues:ver                                  venues token
    hb:venues:v{v}:{id}                            venue detail
    hb:venues:list:v{v}                            venue list
    hb:bookings:ver                                bookings token
    hb:bookings:v{v}:{id}                          booking detail
    hb:bookings:list:v{v}:{sig}                    filtered booking list
    hb:availability:ver                            availability token
    hb:availability:v{v}:{venue}:{date}:p{party}   availability answer
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote


@dataclass(frozen=True)
class CachePolicy:
    ttl_seconds: int
    jitter_seconds: int = 0


@dataclass(frozen=True)
class CachePolicies:
    venue_detail: CachePolicy = CachePolicy(20 * 60, 30)
    venue_list: CachePolicy = CachePolicy(10 * 60, 30)
    booking_detail: CachePolicy = CachePolicy(15 * 60, 20)
    booking_list: CachePolicy = CachePolicy(10 * 60, 20)
    availability: CachePolicy = CachePolicy(5 * 60, 10)

    @classmethod
    def from_settings(cls, settings: Any) -> "CachePolicies":
        return cls(
            venue_detail=CachePolicy(settings.venue_detail_ttl, settings.venue_jitter),
            venue_list=CachePolicy(settings.venue_list_ttl, settings.venue_jitter),
            booking_detail=CachePolicy(settings.booking_detail_ttl, settings.booking_jitter),
            booking_list=CachePolicy(settings.booking_list_ttl, settings.booking_jitter),
            availability=CachePolicy(settings.availability_ttl, settings.availability_jitter),
        )


def _filter_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return quote(str(value), safe="")


@dataclass(frozen=True)
class CacheKeys:
    """Builds every cache key for one namespace. Pure and stateless."""

    namespace: str = "hb"

    # Version tokens

    @property
    def venues_token(self) -> str:
        return f"{self.namespace}:venues:ver"

    @property
    def bookings_token(self) -> str:
        return f"{self.namespace}:bookings:ver"

    @property
    def availability_token(self) -> str:
        return f"{self.namespace}:availability:ver"

    # Versioned keys

    def venue_detail(self, venue_id: str, version: int) -> str:
        return f"{self.namespace}:venues:v{version}:{venue_id}"

    def venue_list(self, version: int) -> str:
        return f"{self.namespace}:venues:list:v{version}"

    def booking_detail(self, booking_id: str, version: int) -> str:
        return f"{self.namespace}:bookings:v{version}:{booking_id}"

    def booking_list(self, filters: Optional[Any], version: int) -> str:
        return f"{self.namespace}:bookings:list:v{version}:{self.filter_signature(filters)}"

    def availability(self, venue_id: str, day: date, party_size: int, version: int) -> str:
        return (
            f"{self.namespace}:availability:v{version}:"
            f"{venue_id}:{day.isoformat()}:p{party_size}"
        )

    @staticmethod
    def filter_signature(filters: Optional[Any]) -> str:
        """
        Deterministic encoding of the set filters, in field-name order.

        ``customer=01H..|status=CONFIRMED|venue=01H..``, or ``all`` when
        nothing is set. Values are percent-encoded so a value containing
        ``|`` or ``=`` cannot pose as another filter.
        """
        if filters is None:
            return "all"
        fields = {
            "customer": getattr(filters, "customer_id", None),
            "status": getattr(filters, "status", None),
            "venue": getattr(filters, "venue_id", None),
        }
        parts = [
            f"{name}={_filter_value(value)}"
            for name, value in sorted(fields.items())
            if value is not None and value != ""
        ]
        return "|".join(parts) if parts else "all"
