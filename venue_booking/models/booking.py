# venue_booking/models/booking.py
"""
Booking model for the venue booking platform.

A booking reserves a venue for a party over a half-open UTC interval
``[start_utc, end_utc)``. Status changes go through the lifecycle rules in
``venue_booking.domain.booking_lifecycle``; the methods on the model are thin
wrappers so callers can write ``booking.confirm(actor)``.
"""

import logging
from typing import Any, Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text

from ..core.enums import BookingAction, BookingStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base
from ..domain.booking_lifecycle import apply_transition, is_terminal
from .types import UTCDateTime, utc_now

logger = logging.getLogger(__name__)

_STATUS_VALUES = ", ".join(f"'{status.value}'" for status in BookingStatus)


class Booking(Base):
    """
    Reservation of a venue by a customer.

    Only bookings in an occupying status (CONFIRMED, plus PENDING when the
    deployment is configured that way) block the slot for other requests.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)

    venue_id = Column(String(26), ForeignKey("venues.id"), nullable=False)
    customer_id = Column(String(26), ForeignKey("customers.id"), nullable=False, index=True)

    # Half-open interval, UTC
    start_utc = Column(UTCDateTime, nullable=False)
    end_utc = Column(UTCDateTime, nullable=False)
    party_size = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)

    requested_at = Column(UTCDateTime, nullable=False, default=utc_now)
    decided_at = Column(UTCDateTime, nullable=True)
    decided_by = Column(String(200), nullable=True)
    customer_note = Column(Text, nullable=True)
    admin_note = Column(Text, nullable=True)

    created_at = Column(UTCDateTime, nullable=False, default=utc_now)
    updated_at = Column(UTCDateTime, nullable=False, default=utc_now)

    __table_args__ = (
        CheckConstraint("end_utc > start_utc", name="check_time_order"),
        CheckConstraint("party_size > 0", name="check_party_size_positive"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_bookings_status"),
        Index("ix_bookings_venue_start", "venue_id", "start_utc"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.id is None:
            self.id = generate_ulid()
        if self.status is None:
            self.status = BookingStatus.PENDING.value
        elif isinstance(self.status, BookingStatus):
            self.status = self.status.value
        now = utc_now()
        if self.requested_at is None:
            self.requested_at = now
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: venue={self.venue_id} "
            f"{self.start_utc}-{self.end_utc} party={self.party_size} {self.status}>"
        )

    @property
    def status_enum(self) -> BookingStatus:
        return BookingStatus(self.status)

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.status_enum)

    def confirm(self, actor: Optional[str] = None, note: Optional[str] = None) -> None:
        apply_transition(self, BookingAction.CONFIRM, actor=actor, note=note)

    def decline(self, actor: Optional[str] = None, note: Optional[str] = None) -> None:
        apply_transition(self, BookingAction.DECLINE, actor=actor, note=note)

    def cancel(self, actor: Optional[str] = None, reason: Optional[str] = None) -> None:
        apply_transition(self, BookingAction.CANCEL, actor=actor, note=reason)

    def mark_seated(self, actor: Optional[str] = None, note: Optional[str] = None) -> None:
        apply_transition(self, BookingAction.MARK_SEATED, actor=actor, note=note)

    def mark_no_show(self, actor: Optional[str] = None, note: Optional[str] = None) -> None:
        apply_transition(self, BookingAction.MARK_NO_SHOW, actor=actor, note=note)
