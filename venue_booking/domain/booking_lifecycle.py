# venue_booking/domain/booking_lifecycle.py
"""
Booking lifecycle rules.

    PENDING   --confirm------> CONFIRMED
    PENDING   --decline------> DECLINED
    CONFIRMED --cancel-------> CANCELLED
    CONFIRMED --mark_seated--> SEATED
    CONFIRMED --mark_no_show-> NO_SHOW

A venue that auto-confirms creates bookings directly in CONFIRMED; that is an
alternate initial state, not a transition. Every status other than PENDING and
CONFIRMED is terminal.

The functions here operate on any object exposing the booking attributes
(``status``, ``admin_note``, ``decided_by``, ``decided_at``, ``updated_at``),
so they work on ORM rows and test doubles alike.
"""

from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from ..core.enums import BookingAction, BookingStatus
from ..core.exceptions import InvalidStateException

TRANSITIONS: Dict[BookingAction, Tuple[BookingStatus, BookingStatus]] = {
    BookingAction.CONFIRM: (BookingStatus.PENDING, BookingStatus.CONFIRMED),
    BookingAction.DECLINE: (BookingStatus.PENDING, BookingStatus.DECLINED),
    BookingAction.CANCEL: (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    BookingAction.MARK_SEATED: (BookingStatus.CONFIRMED, BookingStatus.SEATED),
    BookingAction.MARK_NO_SHOW: (BookingStatus.CONFIRMED, BookingStatus.NO_SHOW),
}

TERMINAL_STATUSES: FrozenSet[BookingStatus] = frozenset(
    {
        BookingStatus.DECLINED,
        BookingStatus.CANCELLED,
        BookingStatus.SEATED,
        BookingStatus.NO_SHOW,
    }
)


def _coerce_status(status: Union[BookingStatus, str]) -> BookingStatus:
    return status if isinstance(status, BookingStatus) else BookingStatus(status)


def can_transition(status: Union[BookingStatus, str], action: BookingAction) -> bool:
    source, _target = TRANSITIONS[action]
    return _coerce_status(status) == source


def allowed_actions(status: Union[BookingStatus, str]) -> Tuple[BookingAction, ...]:
    current = _coerce_status(status)
    return tuple(action for action, (source, _) in TRANSITIONS.items() if source == current)


def is_terminal(status: Union[BookingStatus, str]) -> bool:
    return _coerce_status(status) in TERMINAL_STATUSES


def initial_status(auto_confirm: bool) -> BookingStatus:
    return BookingStatus.CONFIRMED if auto_confirm else BookingStatus.PENDING


def occupying_statuses(pending_blocks: bool = False) -> FrozenSet[BookingStatus]:
    """Statuses that hold a slot. PENDING joins only when configured to."""
    if pending_blocks:
        return frozenset({BookingStatus.CONFIRMED, BookingStatus.PENDING})
    return frozenset({BookingStatus.CONFIRMED})


def _append_note(existing: Optional[str], addition: str) -> str:
    if not existing:
        return addition
    return f"{existing}\n{addition}"


def apply_transition(
    booking: Any,
    action: BookingAction,
    actor: Optional[str] = None,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> BookingStatus:
    """
    Move ``booking`` along ``action``.

    Raises:
        InvalidStateException: the current status does not allow ``action``.
            The booking is left untouched.

    Returns:
        The new status.
    """
    current = _coerce_status(booking.status)
    source, target = TRANSITIONS[action]
    if current != source:
        raise InvalidStateException(current_status=current.value, action=action.value)

    timestamp = now or datetime.now(timezone.utc)

    if action in (BookingAction.CONFIRM, BookingAction.DECLINE):
        booking.decided_at = timestamp
        booking.decided_by = actor
        booking.admin_note = note
    elif action == BookingAction.CANCEL:
        if actor:
            booking.admin_note = _append_note(booking.admin_note, f"Cancelled by: {actor}")
        if note:
            booking.admin_note = _append_note(booking.admin_note, note)
    elif note:
        booking.admin_note = _append_note(booking.admin_note, note)

    booking.status = target.value
    booking.updated_at = timestamp
    return target
