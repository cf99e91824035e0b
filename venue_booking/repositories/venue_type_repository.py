# venue_booking/repositories/venue_type_repository.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import RepositoryException
from ..models.venue import Venue
from ..models.venue_type import VenueType
from .base_repository import BaseRepository


class VenueTypeRepository(BaseRepository[VenueType]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, VenueType)

    async def list_ordered(self) -> List[VenueType]:
        """All venue types by display order, then name."""
        return await self._execute_query(
            select(VenueType).order_by(VenueType.display_order, VenueType.name, VenueType.id)
        )

    async def detach_venues(self, venue_type_id: str) -> int:
        """Clear ``venue_type_id`` on every venue pointing at the type. Returns the row count."""
        try:
            result = await self.db.execute(
                update(Venue)
                .where(Venue.venue_type_id == venue_type_id)
                .values(venue_type_id=None)
                .execution_options(synchronize_session="fetch")
            )
            return int(result.rowcount or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error detaching venues from type {venue_type_id}: {str(e)}")
            raise RepositoryException(f"Failed to detach venues: {str(e)}") from e
