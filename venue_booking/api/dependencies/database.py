# venue_booking/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db as original_get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields:
        Async session that will be closed after use
    """
    async for session in original_get_db():
        yield session
