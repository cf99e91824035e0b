# venue_booking/repositories/venue_repository.py
"""Venue repository: venues always come back with their booking rules loaded."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import RepositoryException
from ..models.venue import Venue
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class VenueRepository(BaseRepository[Venue]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Venue)

    async def get_with_rules(self, venue_id: str) -> Optional[Venue]:
        try:
            result = await self.db.execute(
                select(Venue).options(selectinload(Venue.rules)).where(Venue.id == venue_id)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting venue {venue_id} with rules: {str(e)}")
            raise RepositoryException(f"Failed to retrieve venue: {str(e)}") from e

    async def list_all(self) -> List[Venue]:
        """All venues ordered by name."""
        return await self._execute_query(
            select(Venue).options(selectinload(Venue.rules)).order_by(Venue.name, Venue.id)
        )
