# venue_booking/domain/availability.py
"""
Slot availability calculation.

Pure functions with no I/O: callers load the venue and the occupying bookings
and pass them in. Times are UTC throughout and intervals are half-open, so a
booking ending at 11:30 does not block a slot starting at 11:30.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterable, Iterator, List, Optional, Tuple

DEFAULT_SLOT_MINUTES = 90
DEFAULT_STEP_MINUTES = 30


@dataclass(frozen=True)
class BusinessHours:
    open: time = time(9, 0)
    close: time = time(22, 0)


DEFAULT_BUSINESS_HOURS = BusinessHours()


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AvailabilityResult:
    is_available: bool
    reason: str
    slots: List[TimeSlot] = field(default_factory=list)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open overlap test for ``[a_start, a_end)`` and ``[b_start, b_end)``."""
    return a_start < b_end and a_end > b_start


def business_window(
    day: date, hours: BusinessHours = DEFAULT_BUSINESS_HOURS
) -> Tuple[datetime, datetime]:
    opens = datetime.combine(day, hours.open, tzinfo=timezone.utc)
    closes = datetime.combine(day, hours.close, tzinfo=timezone.utc)
    return opens, closes


def candidate_slots(
    day: date,
    slot_minutes: int = DEFAULT_SLOT_MINUTES,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    hours: BusinessHours = DEFAULT_BUSINESS_HOURS,
) -> Iterator[TimeSlot]:
    """
    Yield every slot of ``slot_minutes`` that fits inside business hours.

    Starts advance by ``step_minutes``, so consecutive slots may overlap each
    other when the slot is longer than the step.
    """
    if slot_minutes <= 0 or step_minutes <= 0:
        raise ValueError("slot_minutes and step_minutes must be positive")

    opens, closes = business_window(day, hours)
    length = timedelta(minutes=slot_minutes)
    step = timedelta(minutes=step_minutes)

    current = opens
    while current + length <= closes:
        yield TimeSlot(start=current, end=current + length)
        current += step


def free_slots(
    day: date,
    slot_minutes: int,
    occupying: Iterable[Any],
    step_minutes: int = DEFAULT_STEP_MINUTES,
    hours: BusinessHours = DEFAULT_BUSINESS_HOURS,
) -> List[TimeSlot]:
    """Candidate slots that overlap none of the ``occupying`` bookings."""
    taken = [(b.start_utc, b.end_utc) for b in occupying]
    return [
        slot
        for slot in candidate_slots(day, slot_minutes, step_minutes, hours)
        if not any(intervals_overlap(slot.start, slot.end, start, end) for start, end in taken)
    ]


def compute_availability(
    venue: Optional[Any],
    day: date,
    party_size: int,
    occupying: Iterable[Any],
    slot_minutes: Optional[int] = None,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    hours: BusinessHours = DEFAULT_BUSINESS_HOURS,
) -> AvailabilityResult:
    """
    Decide whether ``venue`` can take a party of ``party_size`` on ``day``.

    ``occupying`` must already be filtered to the bookings that hold slots
    (by default only CONFIRMED ones). When ``slot_minutes`` is not given the
    venue's own slot length is used.
    """
    if venue is None:
        return AvailabilityResult(is_available=False, reason="Venue not found")

    if party_size > venue.capacity:
        return AvailabilityResult(
            is_available=False,
            reason=f"Party size ({party_size}) exceeds venue capacity ({venue.capacity})",
        )

    length = slot_minutes or getattr(venue, "slot_minutes", None) or DEFAULT_SLOT_MINUTES
    slots = free_slots(day, length, occupying, step_minutes, hours)
    if slots:
        return AvailabilityResult(
            is_available=True, reason=f"{len(slots)} slot(s) available", slots=slots
        )
    return AvailabilityResult(is_available=False, reason="No available slots for this date")
