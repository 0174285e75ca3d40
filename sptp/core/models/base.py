"""Base Pydantic schemas and helpers for SPTP models."""

import calendar
import math
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Pydantic Base Classes
# =============================================================================


class SPTPBaseModel(BaseModel):
    """Base Pydantic model for all schemas with common configuration."""

    model_config = ConfigDict(
        # Allow ORM model conversion
        from_attributes=True,
        # Validate on assignment
        validate_assignment=True,
        # Use enum values instead of enum members
        use_enum_values=True,
        # Defaults go through validation too, so enum defaults are stored as values
        validate_default=True,
        str_strip_whitespace=True,
    )


class TimestampSchema(SPTPBaseModel):
    """Schema with timestamp fields."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RevisionedSchema(SPTPBaseModel):
    """Schema carrying the document store revision used for optimistic locking."""

    version: int = Field(default=0, ge=0, description="Store revision of this document")


class IdentifiedSchema(SPTPBaseModel):
    """Schema with UUID identifier."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique identifier")


class CompanyDocument(IdentifiedSchema, TimestampSchema, RevisionedSchema):
    """Top-level document stored under a company-scoped collection."""

    company_id: str = Field(..., description="Owning company identifier")


# =============================================================================
# Utility Functions
# =============================================================================


def generate_id(prefix: str = "") -> str:
    """Generate a prefixed UUID.

    Args:
        prefix: Optional prefix for the ID (e.g., "succ_", "pool_")

    Returns:
        Prefixed UUID string
    """
    uid = uuid.uuid4().hex
    return f"{prefix}{uid}" if prefix else uid


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going up, unlike Python's banker's rounding."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def add_months(value: datetime, months: int) -> datetime:
    """Shift a datetime by calendar months, clamping the day to the month's end.

    Args:
        value: Starting datetime
        months: Number of months to add

    Returns:
        Shifted datetime (time of day and tzinfo preserved)
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
