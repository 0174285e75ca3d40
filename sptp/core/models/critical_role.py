"""Critical role and embedded successor candidate models (Pydantic only)."""

from datetime import datetime

from pydantic import Field

from .base import CompanyDocument, SPTPBaseModel, generate_id, utc_now
from .enums import (
    CriticalityLevel,
    FlightRisk,
    NineBoxCategory,
    PotentialRating,
    ReadinessLevel,
    SuccessionRisk,
)


# =============================================================================
# Pydantic Schemas
# =============================================================================


class CriticalityFactor(SPTPBaseModel):
    """One weighted factor contributing to a role's criticality."""

    factor: str = Field(..., description="Factor name")
    score: int = Field(..., ge=0, le=5, description="Factor score (0-5)")
    weight: int = Field(..., ge=0, le=100, description="Factor weight in percent")
    description: str | None = Field(None, description="Why the factor scored this way")


class ReadinessAssessment(SPTPBaseModel):
    """Dimensional readiness assessment of a successor."""

    leadership_competencies: int = Field(..., ge=0, le=100)
    technical_expertise: int = Field(..., ge=0, le=100)
    business_acumen: int = Field(..., ge=0, le=100)
    stakeholder_management: int = Field(..., ge=0, le=100)
    strategic_thinking: int = Field(..., ge=0, le=100)
    team_management: int = Field(..., ge=0, le=100)
    regional_market_knowledge: int | None = Field(
        None, ge=0, le=100, description="Optional local market knowledge dimension"
    )
    overall_readiness: int = Field(0, ge=0, le=100, description="Derived readiness score")
    notes: str | None = Field(None, description="Assessor notes")


class CompetencyGap(SPTPBaseModel):
    """Gap between required and current level on one competency."""

    competency: str = Field(..., description="Competency name")
    required_level: int = Field(..., ge=0, description="Level required by the role")
    current_level: int = Field(..., ge=0, description="Candidate's current level")
    gap_size: int = Field(0, description="required_level - current_level")
    development_actions: list[str] = Field(default_factory=list, description="Planned actions")


class SuccessorCandidate(SPTPBaseModel):
    """A potential successor, embedded in a critical role's successor list."""

    id: str = Field(default_factory=lambda: generate_id("succ_"), description="Candidate id")
    employee_id: str = Field(..., description="Employee identifier")
    employee_name: str = Field(..., description="Employee name")
    current_position: str = Field(..., description="Current position title")
    current_department: str = Field(..., description="Current department")

    # Readiness
    readiness_level: ReadinessLevel = Field(..., description="Time-to-ready classification")
    readiness_score: int = Field(0, ge=0, le=100, description="Derived readiness score")
    readiness_assessment: ReadinessAssessment = Field(..., description="Dimensional assessment")

    # Nine-box
    performance_rating: int = Field(..., ge=1, le=5, description="Performance rating (1-5)")
    potential_rating: PotentialRating = Field(..., description="Potential tier")
    nine_box_category: NineBoxCategory = Field(
        NineBoxCategory.CORE_PLAYER, description="Derived nine-box category"
    )

    competency_gaps: list[CompetencyGap] = Field(default_factory=list)

    # Retention
    interested_in_role: bool = Field(True, description="Candidate wants the role")
    willing_to_relocate: bool = Field(False, description="Candidate would relocate")
    flight_risk: FlightRisk = Field(FlightRisk.LOW, description="Flight risk")
    flight_risk_factors: list[str] = Field(default_factory=list)

    rank: int = Field(..., ge=1, description="Rank among successors (1 = best)")
    last_assessed_date: datetime = Field(default_factory=utc_now)
    assessed_by: str | None = Field(None, description="User who assessed the candidate")


class CriticalRole(CompanyDocument):
    """A position flagged as organizationally critical."""

    position_id: str = Field(..., description="Position identifier")
    position_title: str = Field(..., description="Position title")
    department_id: str = Field(..., description="Department identifier")
    department_name: str = Field(..., description="Department name")

    # Criticality
    criticality_level: CriticalityLevel = Field(..., description="Declared criticality level")
    criticality_factors: list[CriticalityFactor] = Field(default_factory=list)
    criticality_score: int = Field(0, ge=0, le=100, description="Derived criticality score")

    # Incumbent
    incumbent_id: str | None = Field(None, description="Current holder of the position")
    incumbent_name: str | None = Field(None)
    expected_vacancy_date: datetime | None = Field(None)
    vacancy_reason: str | None = Field(None)

    # Succession
    successors: list[SuccessorCandidate] = Field(default_factory=list)
    succession_risk: SuccessionRisk = Field(SuccessionRisk.CRITICAL)
    bench_strength: int = Field(0, ge=0, description="Number of ready-now successors")
    emergency_successor_id: str | None = Field(None)

    notes: str | None = Field(None)
    last_review_date: datetime = Field(default_factory=utc_now)
    next_review_date: datetime | None = Field(None)
    reviewed_by: str | None = Field(None)
    is_active: bool = Field(True, description="False once soft-deleted")
