# venue_booking/services/booking_service.py
"""
Booking Service for the venue booking platform.

Orchestrates the booking write paths and the cached read paths:
- create: validate, check capacity and overlaps, insert, then invalidate
- lifecycle actions: load, apply the transition guard, persist, then invalidate
- reads: cache-aside on version-tokened keys

Invalidation means bumping the bookings and availability tokens, and it only
ever happens after the database commit succeeded. A failed guard or a failed
commit bumps nothing.

Known gap: the overlap check and the insert in ``create_booking`` are not
atomic, so two concurrent requests for the same slot can both pass the check.
"""

from datetime import date
import logging
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, settings
from ..core.enums import BookingAction, BookingStatus
from ..core.exceptions import (
    CapacityExceededException,
    NotFoundException,
    SlotConflictException,
    ValidationException,
)
from ..domain.availability import BusinessHours, compute_availability
from ..domain.booking_lifecycle import apply_transition, initial_status, occupying_statuses
from ..models.types import as_utc, utc_now
from ..repositories.booking_repository import BookingRepository
from ..repositories.customer_repository import CustomerRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.venue_repository import VenueRepository
from ..schemas.availability import AvailabilityRead, availability_to_read
from ..schemas.booking import BookingCreate, BookingFilters, BookingRead, booking_to_read
from .base import BaseService
from .cache_keys import CacheKeys, CachePolicies
from .cache_service import VersionedCache

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Every public operation is a coroutine, so callers cancel it by cancelling
    the task; cancellation during persistence aborts the unit of work.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache: Optional[VersionedCache] = None,
        keys: Optional[CacheKeys] = None,
        venue_repository: Optional[VenueRepository] = None,
        customer_repository: Optional[CustomerRepository] = None,
        booking_repository: Optional[BookingRepository] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Async database session
            cache: Versioned cache; a backend-less cache is used when omitted
            keys: Cache key scheme
            venue_repository: Optional VenueRepository instance
            customer_repository: Optional CustomerRepository instance
            booking_repository: Optional BookingRepository instance
            config: Settings override (defaults to the process settings)
        """
        super().__init__(db, cache=cache or VersionedCache())
        self.config = config or settings
        self.keys = keys or CacheKeys(self.config.cache_namespace)
        self.policies = CachePolicies.from_settings(self.config)
        self.venue_repository = venue_repository or RepositoryFactory.create_venue_repository(db)
        self.customer_repository = (
            customer_repository or RepositoryFactory.create_customer_repository(db)
        )
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )

    @property
    def occupying(self) -> FrozenSet[BookingStatus]:
        return occupying_statuses(self.config.pending_blocks_slots)

    @property
    def business_hours(self) -> BusinessHours:
        return BusinessHours(open=self.config.business_open, close=self.config.business_close)

    async def _invalidate_booking_caches(self) -> None:
        await self.bump_tokens(self.keys.bookings_token, self.keys.availability_token)

    # Write paths

    @BaseService.measure_operation("create_booking")
    async def create_booking(self, data: BookingCreate) -> BookingRead:
        """
        Create a booking.

        Raises:
            ValidationException: end is not after start, or party size < 1
            NotFoundException: venue or customer does not exist
            CapacityExceededException: party does not fit the venue
            SlotConflictException: an occupying booking overlaps the interval
        """
        start_utc = as_utc(data.start_utc)
        end_utc = as_utc(data.end_utc)
        if end_utc <= start_utc:
            raise ValidationException(
                "End time must be after start time",
                details={"start_utc": start_utc.isoformat(), "end_utc": end_utc.isoformat()},
            )
        if data.party_size <= 0:
            raise ValidationException(
                "Party size must be greater than zero", details={"party_size": data.party_size}
            )

        self.log_operation("create_booking", venue_id=data.venue_id, customer_id=data.customer_id)

        async with self.transaction():
            venue = await self.venue_repository.get_with_rules(data.venue_id)
            if venue is None:
                raise NotFoundException("Venue", data.venue_id)

            if not await self.customer_repository.exists(id=data.customer_id):
                raise NotFoundException("Customer", data.customer_id)

            if data.party_size > venue.capacity:
                raise CapacityExceededException(data.party_size, venue.capacity)

            conflicts = await self.booking_repository.find_overlapping(
                venue.id, start_utc, end_utc, self.occupying
            )
            if conflicts:
                raise SlotConflictException(
                    details={"conflicting_booking_ids": [b.id for b in conflicts]}
                )

            status = initial_status(venue.auto_confirm)
            now = utc_now()
            booking = await self.booking_repository.create(
                venue_id=venue.id,
                customer_id=data.customer_id,
                start_utc=start_utc,
                end_utc=end_utc,
                party_size=data.party_size,
                status=status.value,
                customer_note=data.customer_note,
                requested_at=now,
                created_at=now,
                updated_at=now,
            )

        await self._invalidate_booking_caches()
        self.logger.info(f"Booking {booking.id} created with status {status.value}")
        return booking_to_read(booking)

    async def _apply_action(
        self,
        booking_id: str,
        action: BookingAction,
        actor: Optional[str],
        note: Optional[str],
    ) -> BookingRead:
        async with self.transaction():
            booking = await self.booking_repository.get_by_id_for_update(booking_id)
            if booking is None:
                raise NotFoundException("Booking", booking_id)
            apply_transition(booking, action, actor=actor, note=note)
            await self.booking_repository.flush()

        await self._invalidate_booking_caches()
        self.log_operation(action.value, booking_id=booking_id, actor=actor)
        return booking_to_read(booking)

    @BaseService.measure_operation("confirm_booking")
    async def confirm_booking(
        self, booking_id: str, actor: str, note: Optional[str] = None
    ) -> BookingRead:
        return await self._apply_action(booking_id, BookingAction.CONFIRM, actor, note)

    @BaseService.measure_operation("decline_booking")
    async def decline_booking(
        self, booking_id: str, actor: str, note: Optional[str] = None
    ) -> BookingRead:
        return await self._apply_action(booking_id, BookingAction.DECLINE, actor, note)

    @BaseService.measure_operation("cancel_booking")
    async def cancel_booking(
        self, booking_id: str, actor: Optional[str] = None, reason: Optional[str] = None
    ) -> BookingRead:
        return await self._apply_action(booking_id, BookingAction.CANCEL, actor, reason)

    @BaseService.measure_operation("mark_seated")
    async def mark_seated(
        self, booking_id: str, actor: Optional[str] = None, note: Optional[str] = None
    ) -> BookingRead:
        return await self._apply_action(booking_id, BookingAction.MARK_SEATED, actor, note)

    @BaseService.measure_operation("mark_no_show")
    async def mark_no_show(
        self, booking_id: str, actor: Optional[str] = None, note: Optional[str] = None
    ) -> BookingRead:
        return await self._apply_action(booking_id, BookingAction.MARK_NO_SHOW, actor, note)

    # Read paths

    @BaseService.measure_operation("get_booking")
    async def get_booking(self, booking_id: str) -> BookingRead:
        version = await self.cache.get_token(self.keys.bookings_token)
        policy = self.policies.booking_detail

        async def load() -> Optional[Dict[str, Any]]:
            booking = await self.booking_repository.get_by_id(booking_id)
            if booking is None:
                return None
            return booking_to_read(booking).model_dump(mode="json")

        data = await self.cache.get_or_set(
            self.keys.booking_detail(booking_id, version),
            policy.ttl_seconds,
            load,
            cache_none=True,
            jitter=policy.jitter_seconds,
        )
        if data is None:
            raise NotFoundException("Booking", booking_id)
        return BookingRead.model_validate(data)

    @BaseService.measure_operation("list_bookings")
    async def list_bookings(self, filters: Optional[BookingFilters] = None) -> List[BookingRead]:
        """Bookings matching ``filters``, newest first."""
        filters = filters or BookingFilters()
        version = await self.cache.get_token(self.keys.bookings_token)
        policy = self.policies.booking_list

        async def load() -> List[Dict[str, Any]]:
            bookings = await self.booking_repository.list_filtered(
                venue_id=filters.venue_id,
                customer_id=filters.customer_id,
                status=filters.status,
            )
            return [booking_to_read(b).model_dump(mode="json") for b in bookings]

        data = await self.cache.get_or_set(
            self.keys.booking_list(filters, version),
            policy.ttl_seconds,
            load,
            jitter=policy.jitter_seconds,
        )
        return [BookingRead.model_validate(item) for item in data or []]

    @BaseService.measure_operation("check_availability")
    async def check_availability(
        self, venue_id: str, day: date, party_size: int
    ) -> AvailabilityRead:
        """
        Free slots at ``venue_id`` on ``day`` for a party of ``party_size``.

        An unknown venue or an oversized party is an unavailable answer, not
        an error, and is cached like any other answer.
        """
        if party_size <= 0:
            raise ValidationException(
                "Party size must be greater than zero", details={"party_size": party_size}
            )

        version = await self.cache.get_token(self.keys.availability_token)
        policy = self.policies.availability

        async def load() -> Dict[str, Any]:
            venue = await self.venue_repository.get_with_rules(venue_id)
            occupying: List[Any] = []
            if venue is not None and party_size <= venue.capacity:
                occupying = await self.booking_repository.find_by_venue_and_date(
                    venue_id, day, self.occupying
                )
            slot_minutes = self.config.default_slot_minutes
            if venue is not None and venue.rules is not None and venue.rules.slot_minutes:
                slot_minutes = venue.rules.slot_minutes
            result = compute_availability(
                venue,
                day,
                party_size,
                occupying,
                slot_minutes=slot_minutes,
                step_minutes=self.config.slot_step_minutes,
                hours=self.business_hours,
            )
            return availability_to_read(venue_id, day, party_size, result).model_dump(mode="json")

        data = await self.cache.get_or_set(
            self.keys.availability(venue_id, day, party_size, version),
            policy.ttl_seconds,
            load,
            jitter=policy.jitter_seconds,
        )
        return AvailabilityRead.model_validate(data)
