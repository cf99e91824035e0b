"""Schema baselines shared by request and response DTOs."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..models.types import as_utc


class StrictModel(BaseModel):
    """Neutral strict base for response DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)


def utc_datetime(value: Any) -> Any:
    """Field-validator helper: naive datetimes are read as UTC."""
    if isinstance(value, datetime):
        return as_utc(value)
    return value
