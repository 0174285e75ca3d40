"""Succession plan and analytics snapshot models (Pydantic only)."""

from datetime import datetime

from pydantic import Field

from .base import CompanyDocument, SPTPBaseModel, utc_now
from .enums import SuccessionPlanScope, SuccessionPlanStatus


class SuccessionPlan(CompanyDocument):
    """Point-in-time summary compiled from a set of critical roles.

    Metrics are fixed at creation; only the approval status moves afterwards.
    """

    name: str = Field(..., description="Plan name")
    description: str | None = Field(None)
    fiscal_year: str | None = Field(None)
    scope: SuccessionPlanScope = Field(SuccessionPlanScope.COMPANY)
    scope_id: str | None = Field(None, description="Department or function id for scoped plans")
    critical_role_ids: list[str] = Field(default_factory=list)

    # Compiled metrics
    total_critical_roles: int = Field(0, ge=0)
    roles_with_successors: int = Field(0, ge=0)
    ready_now_coverage: int = Field(0, ge=0, le=100, description="Percent of roles with a ready-now successor")
    average_bench_strength: float = Field(0.0, ge=0.0)
    high_risk_roles: int = Field(0, ge=0)

    status: SuccessionPlanStatus = Field(SuccessionPlanStatus.DRAFT)
    approved_by: str | None = Field(None)
    approved_at: datetime | None = Field(None)
    last_review_date: datetime = Field(default_factory=utc_now)
    next_review_date: datetime | None = Field(None)


class SuccessionAnalytics(SPTPBaseModel):
    """Read-only, on-demand succession snapshot for a company."""

    company_id: str = Field(...)
    as_of_date: datetime = Field(default_factory=utc_now)

    # Coverage
    total_critical_roles: int = Field(0, ge=0)
    roles_with_ready_successor: int = Field(0, ge=0)
    roles_with_pipeline_successor: int = Field(0, ge=0)
    roles_with_no_successor: int = Field(0, ge=0)
    overall_coverage: int = Field(0, ge=0, le=100)

    # Distributions
    risk_distribution: dict[str, int] = Field(default_factory=dict)
    total_successors: int = Field(0, ge=0)
    nine_box_distribution: dict[str, int] = Field(default_factory=dict)
    readiness_distribution: dict[str, int] = Field(default_factory=dict)

    # Development plan health
    active_development_plans: int = Field(0, ge=0)
    on_track_plans: int = Field(0, ge=0)
    at_risk_plans: int = Field(0, ge=0)
