# venue_booking/models/venue.py
"""
Venue and booking-rule models.

The booking core only reads venues: capacity bounds the party size, and the
rules provide the slot length and the auto-confirm switch.
"""

from typing import Any

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utc_now

DEFAULT_SLOT_MINUTES = 90


class Venue(Base):
    """A bookable place with a fixed seating capacity."""

    __tablename__ = "venues"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    venue_type_id = Column(
        String(26), ForeignKey("venue_types.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(200), nullable=False)
    address = Column(Text, nullable=False, default="")
    capacity = Column(Integer, nullable=False, default=40)

    created_at = Column(UTCDateTime, nullable=False, default=utc_now)
    updated_at = Column(UTCDateTime, nullable=False, default=utc_now)

    rules = relationship(
        "BookingRules",
        back_populates="venue",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (CheckConstraint("capacity > 0", name="check_capacity_positive"),)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.id is None:
            self.id = generate_ulid()
        now = utc_now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now

    def __repr__(self) -> str:
        return f"<Venue {self.id}: {self.name!r} capacity={self.capacity}>"

    @property
    def slot_minutes(self) -> int:
        if self.rules is None or not self.rules.slot_minutes:
            return DEFAULT_SLOT_MINUTES
        return int(self.rules.slot_minutes)

    @property
    def auto_confirm(self) -> bool:
        return bool(self.rules is not None and self.rules.auto_confirm)


class BookingRules(Base):
    """Per-venue booking rules (one-to-one with Venue)."""

    __tablename__ = "booking_rules"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    venue_id = Column(
        String(26), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    slot_minutes = Column(Integer, nullable=False, default=DEFAULT_SLOT_MINUTES)
    auto_confirm = Column(Boolean, nullable=False, default=True)

    venue = relationship("Venue", back_populates="rules")

    __table_args__ = (
        CheckConstraint("slot_minutes >= 15 AND slot_minutes <= 720", name="check_slot_minutes"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.id is None:
            self.id = generate_ulid()
        if self.slot_minutes is None:
            self.slot_minutes = DEFAULT_SLOT_MINUTES
        if self.auto_confirm is None:
            self.auto_confirm = True
