# venue_booking/core/config.py
"""
Application settings for the venue booking API.

Values come from environment variables (case-insensitive) or a local .env
file. Import the module-level ``settings`` instance rather than building new
``Settings`` objects in application code.
"""

from datetime import time
import logging
import os
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


class Settings(BaseSettings):
    environment: Literal["development", "testing", "staging", "production"] = "development"
    log_level: str = Field(default="INFO", description="Root log level")

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./venue_booking.db",
        description="SQLAlchemy async database URL",
    )
    database_echo: bool = False

    # Cache backend. Empty means "no backend": every read is a miss, every write a no-op.
    redis_url: Optional[str] = Field(default=None, description="Redis/Valkey URL for caching")
    cache_namespace: str = Field(default="hb", min_length=1)
    cache_failure_threshold: int = Field(default=5, ge=1)
    cache_recovery_timeout: int = Field(default=60, ge=1, description="Seconds before retrying")
    cache_socket_timeout: float = Field(default=0.5, gt=0)

    # Cache policies (seconds)
    venue_detail_ttl: int = Field(default=20 * 60, gt=0)
    venue_list_ttl: int = Field(default=10 * 60, gt=0)
    venue_jitter: int = Field(default=30, ge=0)
    booking_detail_ttl: int = Field(default=15 * 60, gt=0)
    booking_list_ttl: int = Field(default=10 * 60, gt=0)
    booking_jitter: int = Field(default=20, ge=0)
    availability_ttl: int = Field(default=5 * 60, gt=0)
    availability_jitter: int = Field(default=10, ge=0)

    # Availability
    business_open: time = time(9, 0)
    business_close: time = time(22, 0)
    slot_step_minutes: int = Field(default=30, gt=0)
    default_slot_minutes: int = Field(default=90, ge=15, le=720)
    pending_blocks_slots: bool = Field(
        default=False,
        description="When true, PENDING bookings also occupy slots for overlap/availability",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("redis_url", mode="before")
    @classmethod
    def _blank_redis_url_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _check_business_hours(self) -> "Settings":
        if self.business_close <= self.business_open:
            raise ValueError("business_close must be later than business_open")
        return self


settings = Settings()
