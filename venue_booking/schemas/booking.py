# venue_booking/schemas/booking.py
"""
Booking schemas for the venue booking platform.

Time-range and party-size checks run in the booking service, which reports
them as INVALID_ARGUMENT domain errors.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from ..core.enums import BookingStatus
from ..models.booking import Booking
from .base import StrictModel, StrictRequestModel, utc_datetime


class BookingCreate(StrictRequestModel):
    """Request a booking of ``venue_id`` for ``[start_utc, end_utc)``."""

    venue_id: str = Field(..., min_length=1, description="Venue to book")
    customer_id: str = Field(..., min_length=1, description="Requesting customer")
    start_utc: datetime = Field(..., description="Start (UTC; naive values are read as UTC)")
    end_utc: datetime = Field(..., description="End, exclusive")
    party_size: int = Field(..., description="Number of guests")
    customer_note: Optional[str] = Field(None, max_length=1000)

    @field_validator("start_utc", "end_utc", mode="after")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> Any:
        return utc_datetime(value)


class BookingDecisionRequest(StrictRequestModel):
    """Body for confirm, decline, seat and no-show actions."""

    actor: str = Field(..., min_length=1, max_length=200, description="Acting admin identifier")
    note: Optional[str] = Field(None, max_length=1000)


class BookingCancelRequest(StrictRequestModel):
    actor: Optional[str] = Field(None, max_length=200)
    reason: Optional[str] = Field(None, max_length=1000)


class BookingFilters(StrictRequestModel):
    """Optional list filters. Equal filter sets share one cache entry."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    venue_id: Optional[str] = None
    customer_id: Optional[str] = None
    status: Optional[BookingStatus] = None

    @field_validator("venue_id", "customer_id", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BookingRead(StrictModel):
    id: str
    venue_id: str
    customer_id: str
    start_utc: datetime
    end_utc: datetime
    party_size: int
    status: BookingStatus
    requested_at: datetime
    decided_at: Optional[datetime] = None
    decided_by: Optional[str] = None
    customer_note: Optional[str] = None
    admin_note: Optional[str] = None
    created_at: datetime
    updated_at: datetime


def booking_to_read(booking: Booking) -> BookingRead:
    return BookingRead(
        id=booking.id,
        venue_id=booking.venue_id,
        customer_id=booking.customer_id,
        start_utc=booking.start_utc,
        end_utc=booking.end_utc,
        party_size=booking.party_size,
        status=BookingStatus(booking.status),
        requested_at=booking.requested_at,
        decided_at=booking.decided_at,
        decided_by=booking.decided_by,
        customer_note=booking.customer_note,
        admin_note=booking.admin_note,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )
