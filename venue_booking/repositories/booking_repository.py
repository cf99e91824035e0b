# venue_booking/repositories/booking_repository.py
"""
Booking Repository for the venue booking platform.

Implements the booking queries the services need:
- Overlap detection against occupying bookings
- Per-day listing for availability
- Filtered listing, newest first
"""

from datetime import date, datetime, time, timezone
import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.enums import BookingStatus
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


def _status_values(statuses: Iterable[BookingStatus]) -> List[str]:
    return sorted(BookingStatus(s).value for s in statuses)


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking data access.

    Intervals are half-open: ``[start_utc, end_utc)``.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Booking)

    async def get_by_id_for_update(self, booking_id: str) -> Optional[Booking]:
        """
        Load a booking with a row lock so a lifecycle guard and its write run
        atomically. SQLite ignores the lock; it serializes writers anyway.
        """
        rows = await self._execute_query(
            select(Booking).where(Booking.id == booking_id).with_for_update()
        )
        return rows[0] if rows else None

    async def find_overlapping(
        self,
        venue_id: str,
        start: datetime,
        end: datetime,
        statuses: Iterable[BookingStatus],
    ) -> List[Booking]:
        """Bookings at ``venue_id`` in one of ``statuses`` that overlap ``[start, end)``."""
        stmt = select(Booking).where(
            Booking.venue_id == venue_id,
            Booking.status.in_(_status_values(statuses)),
            Booking.start_utc < end,
            Booking.end_utc > start,
        )
        return await self._execute_query(stmt.order_by(Booking.start_utc))

    async def find_by_venue_and_date(
        self,
        venue_id: str,
        day: date,
        statuses: Iterable[BookingStatus],
    ) -> List[Booking]:
        """Bookings at ``venue_id`` whose start falls on the UTC calendar ``day``."""
        day_start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        day_end = datetime.combine(day, time.max, tzinfo=timezone.utc)
        stmt = (
            select(Booking)
            .where(
                Booking.venue_id == venue_id,
                Booking.status.in_(_status_values(statuses)),
                Booking.start_utc >= day_start,
                Booking.start_utc <= day_end,
            )
            .order_by(Booking.start_utc)
        )
        return await self._execute_query(stmt)

    async def list_filtered(
        self,
        venue_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings matching every given filter, newest first."""
        stmt = select(Booking)
        if venue_id:
            stmt = stmt.where(Booking.venue_id == venue_id)
        if customer_id:
            stmt = stmt.where(Booking.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(Booking.status == BookingStatus(status).value)
        return await self._execute_query(
            stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
        )
