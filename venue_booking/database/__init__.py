"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeMeta, declarative_base

from ..core.config import settings

logger = logging.getLogger(__name__)

Base: DeclarativeMeta = declarative_base()

_engine: Optional[AsyncEngine] = None

SessionLocal = async_sessionmaker(autoflush=False, expire_on_commit=False, class_=AsyncSession)


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "future": True}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(pool_size=5, max_overflow=10, pool_timeout=5, pool_pre_ping=True)
    return kwargs


def get_engine() -> AsyncEngine:
    """Create the async engine on first use and bind the session factory to it."""
    global _engine
    if _engine is None:
        db_url = settings.database_url
        _engine = create_async_engine(db_url, **_build_engine_kwargs(db_url))
        _add_pool_events(_engine)
        SessionLocal.configure(bind=_engine)
    return _engine


def _add_pool_events(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(_dbapi_connection: Any, _connection_record: Any) -> None:
        logger.debug("Database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def _on_checkin(_dbapi_connection: Any, _connection_record: Any) -> None:
        logger.debug("Connection returned to pool")


async def init_models() -> None:
    """Create tables that do not exist yet."""
    from .. import models  # noqa: F401  (registers the mappers)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session with proper cleanup."""
    get_engine()
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
