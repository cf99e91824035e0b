# venue_booking/repositories/factory.py
"""
Repository Factory for the venue booking platform.

Provides centralized creation of repository instances for one session.
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .customer_repository import CustomerRepository
    from .venue_repository import VenueRepository
    from .venue_type_repository import VenueTypeRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_venue_repository(db: AsyncSession) -> "VenueRepository":
        from .venue_repository import VenueRepository

        return VenueRepository(db)

    @staticmethod
    def create_venue_type_repository(db: AsyncSession) -> "VenueTypeRepository":
        from .venue_type_repository import VenueTypeRepository

        return VenueTypeRepository(db)

    @staticmethod
    def create_customer_repository(db: AsyncSession) -> "CustomerRepository":
        from .customer_repository import CustomerRepository

        return CustomerRepository(db)

    @staticmethod
    def create_booking_repository(db: AsyncSession) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)
