"""Development plan models (Pydantic only)."""

from datetime import datetime

from pydantic import Field

from .base import CompanyDocument, SPTPBaseModel
from .enums import ActionStatus, ActionType, DevelopmentPlanStatus, ReadinessLevel


class DevelopmentAction(SPTPBaseModel):
    """A single step in a development plan."""

    id: str = Field(..., description="Sequential action id (action_<n>)")
    type: ActionType = Field(..., description="Action type")
    title: str = Field(..., description="Action title")
    description: str | None = Field(None)
    target_competency: str | None = Field(None, description="Competency being developed")
    start_date: datetime | None = Field(None)
    end_date: datetime | None = Field(None)
    status: ActionStatus = Field(ActionStatus.PLANNED)
    progress: int = Field(0, ge=0, le=100, description="Completion percent")
    resources: list[str] = Field(default_factory=list)
    estimated_cost: float | None = Field(None, ge=0)
    expected_outcome: str | None = Field(None)
    actual_outcome: str | None = Field(None)
    completed_at: datetime | None = Field(None)


class DevelopmentPlan(CompanyDocument):
    """Plan moving one employee toward readiness for one target role."""

    employee_id: str = Field(..., description="Employee being developed")
    employee_name: str = Field(..., description="Employee name")
    target_role_id: str | None = Field(None, description="Critical role the plan targets")
    target_role_title: str | None = Field(None)
    objective: str = Field("", description="Plan objective")
    target_readiness: ReadinessLevel = Field(ReadinessLevel.READY_NOW)
    target_date: datetime | None = Field(None)

    actions: list[DevelopmentAction] = Field(default_factory=list)
    overall_progress: int = Field(0, ge=0, le=100, description="Mean action progress")
    status: DevelopmentPlanStatus = Field(DevelopmentPlanStatus.DRAFT)

    owner_id: str | None = Field(None)
    sponsor_id: str | None = Field(None)
    mentor_id: str | None = Field(None)
    next_review_date: datetime | None = Field(None)
