# venue_booking/schemas/venue.py
"""Venue request and response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models.venue import DEFAULT_SLOT_MINUTES, Venue
from .base import StrictModel, StrictRequestModel


class BookingRulesData(StrictRequestModel):
    slot_minutes: int = Field(DEFAULT_SLOT_MINUTES, ge=15, le=720)
    auto_confirm: bool = True


class VenueCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    venue_type_id: Optional[str] = Field(None, max_length=26)
    address: str = Field("", max_length=500)
    capacity: int = Field(40, ge=1)
    rules: BookingRulesData = Field(default_factory=BookingRulesData)


class VenueUpdate(StrictRequestModel):
    """Partial update. Only fields that are set are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=500)
    venue_type_id: Optional[str] = Field(None, max_length=26)
    capacity: Optional[int] = Field(None, ge=1)
    slot_minutes: Optional[int] = Field(None, ge=15, le=720)
    auto_confirm: Optional[bool] = None


class VenueRead(StrictModel):
    id: str
    venue_type_id: Optional[str] = None
    name: str
    address: str
    capacity: int
    slot_minutes: int
    auto_confirm: bool
    created_at: datetime
    updated_at: datetime


def venue_to_read(venue: Venue) -> VenueRead:
    return VenueRead(
        id=venue.id,
        venue_type_id=venue.venue_type_id,
        name=venue.name,
        address=venue.address or "",
        capacity=venue.capacity,
        slot_minutes=venue.slot_minutes,
        auto_confirm=venue.auto_confirm,
        created_at=venue.created_at,
        updated_at=venue.updated_at,
    )
