"""Talent pool models (Pydantic only)."""

from datetime import datetime

from pydantic import Field

from .base import CompanyDocument, SPTPBaseModel, utc_now
from .enums import NineBoxCategory, ReadinessLevel, ReviewCycle, TalentPoolType


class TalentPoolMember(SPTPBaseModel):
    """An employee tracked in a talent pool."""

    employee_id: str = Field(..., description="Employee identifier")
    employee_name: str = Field(..., description="Employee name")
    current_position: str = Field(..., description="Current position title")
    nine_box_category: NineBoxCategory = Field(...)
    readiness_level: ReadinessLevel = Field(...)
    added_date: datetime = Field(default_factory=utc_now)
    added_by: str | None = Field(None)
    last_assessed_date: datetime = Field(default_factory=utc_now)


class TalentPool(CompanyDocument):
    """A named collection of employees tracked for a level or type of role."""

    name: str = Field(..., description="Pool name")
    description: str | None = Field(None)
    pool_type: TalentPoolType = Field(...)
    target_level: str | None = Field(None, description="Organizational level the pool feeds")

    members: list[TalentPoolMember] = Field(default_factory=list)
    member_count: int = Field(0, ge=0)
    ready_now_count: int = Field(0, ge=0)
    ready_1_year_count: int = Field(0, ge=0)

    owner_id: str | None = Field(None)
    owner_name: str | None = Field(None)
    review_cycle: ReviewCycle = Field(ReviewCycle.QUARTERLY)
    last_review_date: datetime = Field(default_factory=utc_now)
    next_review_date: datetime | None = Field(None)
    is_active: bool = Field(True)
