"""
Repository layer for the venue booking platform.

All data access goes through these classes; services never build queries
themselves.
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .customer_repository import CustomerRepository
from .factory import RepositoryFactory
from .venue_repository import VenueRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "CustomerRepository",
    "RepositoryFactory",
    "VenueRepository",
]
