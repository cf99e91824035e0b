"""
Database models for the venue booking platform.

Importing this package registers every mapper on ``Base.metadata``.
"""

from .booking import Booking
from .customer import Customer
from .venue import BookingRules, Venue
from .venue_type import VenueType

__all__ = [
    "Booking",
    "BookingRules",
    "Customer",
    "Venue",
    "VenueType",
]
