# venue_booking/services/venue_service.py
"""
Venue Service for the venue booking platform.

Venue reads are cache-aside on versioned keys; every venue write bumps the
venues token after the commit. Updates and deletes also bump the
availability token, because capacity and slot length feed availability.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import NotFoundException
from ..models.types import utc_now
from ..models.venue import BookingRules, Venue
from ..repositories.factory import RepositoryFactory
from ..repositories.venue_repository import VenueRepository
from ..repositories.venue_type_repository import VenueTypeRepository
from ..schemas.venue import VenueCreate, VenueRead, VenueUpdate, venue_to_read
from .base import BaseService
from .cache_keys import CacheKeys, CachePolicies
from .cache_service import VersionedCache

logger = logging.getLogger(__name__)


class VenueService(BaseService):
    def __init__(
        self,
        db: AsyncSession,
        cache: Optional[VersionedCache] = None,
        keys: Optional[CacheKeys] = None,
        policies: Optional[CachePolicies] = None,
        venue_repository: Optional[VenueRepository] = None,
        venue_type_repository: Optional[VenueTypeRepository] = None,
    ):
        super().__init__(db, cache=cache or VersionedCache())
        self.keys = keys or CacheKeys(settings.cache_namespace)
        self.policies = policies or CachePolicies.from_settings(settings)
        self.venue_repository = venue_repository or RepositoryFactory.create_venue_repository(db)
        self.venue_type_repository = (
            venue_type_repository or RepositoryFactory.create_venue_type_repository(db)
        )

    async def _require_venue_type(self, venue_type_id: Optional[str]) -> None:
        if venue_type_id and not await self.venue_type_repository.exists(id=venue_type_id):
            raise NotFoundException("VenueType", venue_type_id)

    @BaseService.measure_operation("get_venue")
    async def get_venue(self, venue_id: str) -> VenueRead:
        """
        Get one venue. Absent venues are cached too, so repeated lookups of a
        bad id stay off the database until the next venue write.
        """
        version = await self.cache.get_token(self.keys.venues_token)
        policy = self.policies.venue_detail

        async def load() -> Optional[Dict[str, Any]]:
            venue = await self.venue_repository.get_with_rules(venue_id)
            if venue is None:
                return None
            return venue_to_read(venue).model_dump(mode="json")

        data = await self.cache.get_or_set(
            self.keys.venue_detail(venue_id, version),
            policy.ttl_seconds,
            load,
            cache_none=True,
            jitter=policy.jitter_seconds,
        )
        if data is None:
            raise NotFoundException("Venue", venue_id)
        return VenueRead.model_validate(data)

    @BaseService.measure_operation("list_venues")
    async def list_venues(self) -> List[VenueRead]:
        version = await self.cache.get_token(self.keys.venues_token)
        policy = self.policies.venue_list

        async def load() -> List[Dict[str, Any]]:
            venues = await self.venue_repository.list_all()
            return [venue_to_read(v).model_dump(mode="json") for v in venues]

        data = await self.cache.get_or_set(
            self.keys.venue_list(version), policy.ttl_seconds, load, jitter=policy.jitter_seconds
        )
        return [VenueRead.model_validate(item) for item in data or []]

    @BaseService.measure_operation("create_venue")
    async def create_venue(self, data: VenueCreate) -> VenueRead:
        async with self.transaction():
            await self._require_venue_type(data.venue_type_id)
            venue = Venue(
                name=data.name,
                venue_type_id=data.venue_type_id,
                address=data.address,
                capacity=data.capacity,
                rules=BookingRules(
                    slot_minutes=data.rules.slot_minutes,
                    auto_confirm=data.rules.auto_confirm,
                ),
            )
            self.db.add(venue)
            await self.venue_repository.flush()

        await self.bump_tokens(self.keys.venues_token)
        self.log_operation("create_venue", venue_id=venue.id)
        return venue_to_read(venue)

    @BaseService.measure_operation("update_venue")
    async def update_venue(self, venue_id: str, data: VenueUpdate) -> VenueRead:
        changes = data.model_dump(exclude_unset=True)
        async with self.transaction():
            venue = await self.venue_repository.get_with_rules(venue_id)
            if venue is None:
                raise NotFoundException("Venue", venue_id)

            await self._require_venue_type(changes.get("venue_type_id"))
            for field in ("name", "address", "capacity", "venue_type_id"):
                if changes.get(field) is not None:
                    setattr(venue, field, changes[field])

            rule_changes = {
                field: changes[field]
                for field in ("slot_minutes", "auto_confirm")
                if changes.get(field) is not None
            }
            if rule_changes:
                if venue.rules is None:
                    venue.rules = BookingRules(**rule_changes)
                else:
                    for field, value in rule_changes.items():
                        setattr(venue.rules, field, value)

            venue.updated_at = utc_now()
            await self.venue_repository.flush()

        await self.bump_tokens(self.keys.venues_token, self.keys.availability_token)
        self.log_operation("update_venue", venue_id=venue_id, fields=sorted(changes))
        return venue_to_read(venue)

    @BaseService.measure_operation("delete_venue")
    async def delete_venue(self, venue_id: str) -> None:
        async with self.transaction():
            deleted = await self.venue_repository.delete(venue_id)
            if not deleted:
                raise NotFoundException("Venue", venue_id)

        await self.bump_tokens(self.keys.venues_token, self.keys.availability_token)
        self.log_operation("delete_venue", venue_id=venue_id)
