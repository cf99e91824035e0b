# venue_booking/core/enums.py
"""
Core enums for the venue booking platform.

Kept free of ORM and transport imports so the domain layer, the models and
the schemas can all share them.
"""

from enum import Enum


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"  # Requested, awaiting a venue decision
    CONFIRMED = "CONFIRMED"  # Accepted by the venue
    DECLINED = "DECLINED"  # Rejected by the venue
    CANCELLED = "CANCELLED"  # Cancelled after confirmation
    SEATED = "SEATED"  # Party arrived
    NO_SHOW = "NO_SHOW"  # Party never arrived


class BookingAction(str, Enum):
    """Lifecycle actions a venue administrator can apply to a booking."""

    CONFIRM = "confirm"
    DECLINE = "decline"
    CANCEL = "cancel"
    MARK_SEATED = "mark_seated"
    MARK_NO_SHOW = "mark_no_show"


class ErrorKind(str, Enum):
    """
    Error kinds surfaced by the booking core.

    The HTTP layer maps each kind to a status code; nothing below it knows
    about transports.
    """

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    INVALID_STATE = "INVALID_STATE"
