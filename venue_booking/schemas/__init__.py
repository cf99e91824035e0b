"""Pydantic request/response schemas and the ORM-to-DTO conversion functions."""

from .availability import AvailabilityRead, TimeSlotRead, availability_to_read
from .booking import (
    BookingCancelRequest,
    BookingCreate,
    BookingDecisionRequest,
    BookingFilters,
    BookingRead,
    booking_to_read,
)
from .customer import CustomerCreate, CustomerRead, customer_to_read
from .venue import BookingRulesData, VenueCreate, VenueRead, VenueUpdate, venue_to_read
from .venue_type import VenueTypeCreate, VenueTypeRead, VenueTypeUpdate, venue_type_to_read

__all__ = [
    "AvailabilityRead",
    "BookingCancelRequest",
    "BookingCreate",
    "BookingDecisionRequest",
    "BookingFilters",
    "BookingRead",
    "BookingRulesData",
    "CustomerCreate",
    "CustomerRead",
    "TimeSlotRead",
    "VenueCreate",
    "VenueRead",
    "VenueUpdate",
    "VenueTypeCreate",
    "VenueTypeRead",
    "VenueTypeUpdate",
    "availability_to_read",
    "booking_to_read",
    "customer_to_read",
    "venue_to_read",
    "venue_type_to_read",
]
