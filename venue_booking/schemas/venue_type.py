from typing import Optional

from pydantic import Field

from ..models.venue_type import VenueType
from .base import StrictModel, StrictRequestModel


class VenueTypeCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    display_order: int = 0


class VenueTypeUpdate(StrictRequestModel):
    """Full replacement: every field is written, an omitted description clears it."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    display_order: int = 0


class VenueTypeRead(StrictModel):
    id: str
    name: str
    description: Optional[str] = None
    display_order: int


def venue_type_to_read(venue_type: VenueType) -> VenueTypeRead:
    return VenueTypeRead(
        id=venue_type.id,
        name=venue_type.name,
        description=venue_type.description,
        display_order=venue_type.display_order,
    )
