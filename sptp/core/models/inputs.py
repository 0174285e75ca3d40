"""Caller-facing input, update and filter schemas.

Update schemas leave every field optional; services apply only the fields
the caller actually set (``model_dump(exclude_unset=True)``).
"""

from datetime import datetime

from pydantic import Field

from .base import SPTPBaseModel
from .critical_role import CriticalityFactor, ReadinessAssessment
from .enums import (
    ActionType,
    CriticalityLevel,
    DevelopmentPlanStatus,
    FlightRisk,
    PotentialRating,
    ReadinessLevel,
    ReviewCycle,
    SuccessionPlanScope,
    SuccessionRisk,
    TalentPoolType,
)


# =============================================================================
# Critical roles and successors
# =============================================================================


class CriticalRoleInput(SPTPBaseModel):
    """Input for creating a critical role."""

    position_id: str
    position_title: str
    department_id: str
    department_name: str
    criticality_level: CriticalityLevel
    criticality_factors: list[CriticalityFactor] = Field(default_factory=list)
    incumbent_id: str | None = None
    expected_vacancy_date: datetime | None = None
    vacancy_reason: str | None = None
    emergency_successor_id: str | None = None
    notes: str | None = None


class CriticalRoleUpdate(SPTPBaseModel):
    """Partial update of a critical role's descriptive fields."""

    position_title: str | None = None
    department_id: str | None = None
    department_name: str | None = None
    criticality_level: CriticalityLevel | None = None
    criticality_factors: list[CriticalityFactor] | None = None
    incumbent_id: str | None = None
    incumbent_name: str | None = None
    expected_vacancy_date: datetime | None = None
    vacancy_reason: str | None = None
    emergency_successor_id: str | None = None
    notes: str | None = None


class CompetencyGapInput(SPTPBaseModel):
    """Competency gap as supplied by the assessor."""

    competency: str
    required_level: int = Field(..., ge=0)
    current_level: int = Field(..., ge=0)
    development_actions: list[str] = Field(default_factory=list)


class SuccessorCandidateInput(SPTPBaseModel):
    """Input for nominating a successor."""

    employee_id: str
    employee_name: str
    current_position: str
    current_department: str
    readiness_level: ReadinessLevel
    readiness_assessment: ReadinessAssessment
    performance_rating: int = Field(..., ge=1, le=5)
    potential_rating: PotentialRating
    competency_gaps: list[CompetencyGapInput] = Field(default_factory=list)
    interested_in_role: bool = True
    willing_to_relocate: bool = False
    flight_risk: FlightRisk = FlightRisk.LOW
    rank: int = Field(..., ge=1)


class SuccessorCandidateUpdate(SPTPBaseModel):
    """Partial update of a successor candidate."""

    employee_id: str | None = None
    employee_name: str | None = None
    current_position: str | None = None
    current_department: str | None = None
    readiness_level: ReadinessLevel | None = None
    readiness_assessment: ReadinessAssessment | None = None
    performance_rating: int | None = Field(None, ge=1, le=5)
    potential_rating: PotentialRating | None = None
    competency_gaps: list[CompetencyGapInput] | None = None
    interested_in_role: bool | None = None
    willing_to_relocate: bool | None = None
    flight_risk: FlightRisk | None = None
    flight_risk_factors: list[str] | None = None
    rank: int | None = Field(None, ge=1)


class CriticalRoleFilters(SPTPBaseModel):
    """Filters for listing critical roles."""

    department_id: str | None = None
    criticality_level: CriticalityLevel | None = None
    succession_risk: SuccessionRisk | None = None
    has_successor: bool | None = None


# =============================================================================
# Development plans
# =============================================================================


class DevelopmentActionInput(SPTPBaseModel):
    """Input for one development action."""

    type: ActionType
    title: str
    description: str | None = None
    target_competency: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    resources: list[str] = Field(default_factory=list)
    estimated_cost: float | None = Field(None, ge=0)
    expected_outcome: str | None = None


class DevelopmentPlanInput(SPTPBaseModel):
    """Input for creating a development plan."""

    employee_id: str
    target_role_id: str | None = None
    target_role_title: str | None = None
    objective: str = ""
    target_readiness: ReadinessLevel = ReadinessLevel.READY_NOW
    target_date: datetime | None = None
    actions: list[DevelopmentActionInput] = Field(default_factory=list)
    sponsor_id: str | None = None
    mentor_id: str | None = None


class DevelopmentPlanUpdate(SPTPBaseModel):
    """Partial update of a development plan's descriptive fields."""

    target_role_id: str | None = None
    target_role_title: str | None = None
    objective: str | None = None
    target_readiness: ReadinessLevel | None = None
    target_date: datetime | None = None
    sponsor_id: str | None = None
    mentor_id: str | None = None


class DevelopmentPlanFilters(SPTPBaseModel):
    """Filters for listing development plans."""

    employee_id: str | None = None
    status: DevelopmentPlanStatus | None = None
    target_role_id: str | None = None


# =============================================================================
# Talent pools and succession plans
# =============================================================================


class TalentPoolInput(SPTPBaseModel):
    """Input for creating a talent pool."""

    name: str
    description: str | None = None
    pool_type: TalentPoolType
    target_level: str | None = None
    review_cycle: ReviewCycle = ReviewCycle.QUARTERLY


class TalentPoolMemberInput(SPTPBaseModel):
    """Input for adding a member to a talent pool."""

    employee_id: str
    employee_name: str
    current_position: str


class SuccessionPlanInput(SPTPBaseModel):
    """Input for compiling a succession plan."""

    name: str
    description: str | None = None
    fiscal_year: str | None = None
    scope: SuccessionPlanScope = SuccessionPlanScope.COMPANY
    scope_id: str | None = None
    critical_role_ids: list[str] = Field(default_factory=list)
