# venue_booking/schemas/availability.py
import datetime as dt
from typing import List

from ..domain.availability import AvailabilityResult
from .base import StrictModel


class TimeSlotRead(StrictModel):
    start: dt.datetime
    end: dt.datetime


class AvailabilityRead(StrictModel):
    venue_id: str
    date: dt.date
    party_size: int
    is_available: bool
    reason: str
    slots: List[TimeSlotRead] = []


def availability_to_read(
    venue_id: str, day: dt.date, party_size: int, result: AvailabilityResult
) -> AvailabilityRead:
    return AvailabilityRead(
        venue_id=venue_id,
        date=day,
        party_size=party_size,
        is_available=result.is_available,
        reason=result.reason,
        slots=[TimeSlotRead(start=slot.start, end=slot.end) for slot in result.slots],
    )
