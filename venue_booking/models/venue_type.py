# venue_booking/models/venue_type.py
"""Venue types: a small ordered catalogue (restaurant, bar, rooftop...) venues point at."""

from typing import Any

from sqlalchemy import Column, Integer, String, Text

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utc_now


class VenueType(Base):
    __tablename__ = "venue_types"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.id is None:
            self.id = generate_ulid()
        if self.display_order is None:
            self.display_order = 0
        if self.created_at is None:
            self.created_at = utc_now()

    def __repr__(self) -> str:
        return f"<VenueType {self.id}: {self.name!r}>"
