# venue_booking/services/venue_type_service.py
"""
Venue Type Service: the catalogue of venue kinds shown to guests.

Venue types are small reference data and are read straight from the
database. Deleting a type detaches the venues that used it; because venue
reads carry ``venue_type_id``, that bumps the venues token after the commit.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import NotFoundException
from ..repositories.factory import RepositoryFactory
from ..repositories.venue_type_repository import VenueTypeRepository
from ..schemas.venue_type import (
    VenueTypeCreate,
    VenueTypeRead,
    VenueTypeUpdate,
    venue_type_to_read,
)
from .base import BaseService
from .cache_keys import CacheKeys
from .cache_service import VersionedCache

logger = logging.getLogger(__name__)


class VenueTypeService(BaseService):
    def __init__(
        self,
        db: AsyncSession,
        cache: Optional[VersionedCache] = None,
        keys: Optional[CacheKeys] = None,
        venue_type_repository: Optional[VenueTypeRepository] = None,
    ):
        super().__init__(db, cache=cache or VersionedCache())
        self.keys = keys or CacheKeys(settings.cache_namespace)
        self.venue_type_repository = (
            venue_type_repository or RepositoryFactory.create_venue_type_repository(db)
        )

    @BaseService.measure_operation("list_venue_types")
    async def list_venue_types(self) -> List[VenueTypeRead]:
        venue_types = await self.venue_type_repository.list_ordered()
        return [venue_type_to_read(vt) for vt in venue_types]

    @BaseService.measure_operation("get_venue_type")
    async def get_venue_type(self, venue_type_id: str) -> VenueTypeRead:
        venue_type = await self.venue_type_repository.get_by_id(venue_type_id)
        if venue_type is None:
            raise NotFoundException("VenueType", venue_type_id)
        return venue_type_to_read(venue_type)

    @BaseService.measure_operation("create_venue_type")
    async def create_venue_type(self, data: VenueTypeCreate) -> VenueTypeRead:
        async with self.transaction():
            venue_type = await self.venue_type_repository.create(**data.model_dump())
        self.log_operation("create_venue_type", venue_type_id=venue_type.id)
        return venue_type_to_read(venue_type)

    @BaseService.measure_operation("update_venue_type")
    async def update_venue_type(self, venue_type_id: str, data: VenueTypeUpdate) -> VenueTypeRead:
        async with self.transaction():
            venue_type = await self.venue_type_repository.get_by_id(venue_type_id)
            if venue_type is None:
                raise NotFoundException("VenueType", venue_type_id)
            venue_type.name = data.name
            venue_type.description = data.description
            venue_type.display_order = data.display_order
            await self.venue_type_repository.flush()

        self.log_operation("update_venue_type", venue_type_id=venue_type_id)
        return venue_type_to_read(venue_type)

    @BaseService.measure_operation("delete_venue_type")
    async def delete_venue_type(self, venue_type_id: str) -> None:
        async with self.transaction():
            if not await self.venue_type_repository.exists(id=venue_type_id):
                raise NotFoundException("VenueType", venue_type_id)
            detached = await self.venue_type_repository.detach_venues(venue_type_id)
            await self.venue_type_repository.delete(venue_type_id)

        if detached:
            await self.bump_tokens(self.keys.venues_token)
        self.log_operation("delete_venue_type", venue_type_id=venue_type_id, detached=detached)
