# venue_booking/main.py
"""
Venue Booking API - FastAPI application.

Run with:
    uvicorn venue_booking.main:app --reload
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI

from .core.cache_redis import close_cache_redis_client, get_cache_redis_client
from .core.config import is_running_tests, settings
from .database import dispose_engine, init_models
from .routes.errors import register_error_handlers
from .routes.v1 import bookings as bookings_v1
from .routes.v1 import customers as customers_v1
from .routes.v1 import health as health_v1
from .routes.v1 import prometheus as prometheus_v1
from .routes.v1 import venues as venues_v1
from .routes.v1 import venue_types as venue_types_v1
from .services.cache_service import VersionedCache

API_TITLE = "Venue Booking API"
API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{API_TITLE} starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    await init_models()

    redis_client = await get_cache_redis_client()
    if redis_client is None:
        logger.warning("No cache backend available; reads go straight to the database")
    app.state.cache = VersionedCache(
        redis_client,
        failure_threshold=settings.cache_failure_threshold,
        recovery_timeout=settings.cache_recovery_timeout,
    )

    yield

    logger.info(f"{API_TITLE} shutting down...")
    await close_cache_redis_client()
    await dispose_engine()


app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

register_error_handlers(app)

# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")

api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(venues_v1.router, prefix="/venues")
api_v1.include_router(venue_types_v1.router, prefix="/venue-types")
api_v1.include_router(customers_v1.router, prefix="/customers")
api_v1.include_router(health_v1.router, prefix="/health")

app.include_router(api_v1)

# Prometheus scrape target, outside the versioned API
app.include_router(prometheus_v1.router)
