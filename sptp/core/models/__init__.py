"""SPTP data models for critical roles, development plans, pools and plans."""

from .base import (
    CompanyDocument,
    IdentifiedSchema,
    RevisionedSchema,
    SPTPBaseModel,
    TimestampSchema,
    add_months,
    generate_id,
    round_half_up,
    utc_now,
)
from .critical_role import (
    CompetencyGap,
    CriticalityFactor,
    CriticalRole,
    ReadinessAssessment,
    SuccessorCandidate,
)
from .development_plan import DevelopmentAction, DevelopmentPlan
from .enums import (
    ActionStatus,
    ActionType,
    CriticalityLevel,
    DevelopmentPlanStatus,
    FlightRisk,
    NineBoxCategory,
    PerformanceLevel,
    PotentialRating,
    ReadinessLevel,
    ReviewCycle,
    SuccessionPlanScope,
    SuccessionPlanStatus,
    SuccessionRisk,
    TalentPoolType,
)
from .inputs import (
    CompetencyGapInput,
    CriticalRoleFilters,
    CriticalRoleInput,
    CriticalRoleUpdate,
    DevelopmentActionInput,
    DevelopmentPlanFilters,
    DevelopmentPlanInput,
    DevelopmentPlanUpdate,
    SuccessionPlanInput,
    SuccessorCandidateInput,
    SuccessorCandidateUpdate,
    TalentPoolInput,
    TalentPoolMemberInput,
)
from .succession_plan import SuccessionAnalytics, SuccessionPlan
from .talent_pool import TalentPool, TalentPoolMember

__all__ = [
    # Base
    "SPTPBaseModel",
    "IdentifiedSchema",
    "TimestampSchema",
    "RevisionedSchema",
    "CompanyDocument",
    "add_months",
    "generate_id",
    "round_half_up",
    "utc_now",
    # Enums
    "ActionStatus",
    "ActionType",
    "CriticalityLevel",
    "DevelopmentPlanStatus",
    "FlightRisk",
    "NineBoxCategory",
    "PerformanceLevel",
    "PotentialRating",
    "ReadinessLevel",
    "ReviewCycle",
    "SuccessionPlanScope",
    "SuccessionPlanStatus",
    "SuccessionRisk",
    "TalentPoolType",
    # Critical roles
    "CriticalRole",
    "CriticalityFactor",
    "SuccessorCandidate",
    "ReadinessAssessment",
    "CompetencyGap",
    # Development plans
    "DevelopmentPlan",
    "DevelopmentAction",
    # Talent pools
    "TalentPool",
    "TalentPoolMember",
    # Succession plans
    "SuccessionPlan",
    "SuccessionAnalytics",
    # Inputs
    "CriticalRoleInput",
    "CriticalRoleUpdate",
    "CriticalRoleFilters",
    "SuccessorCandidateInput",
    "SuccessorCandidateUpdate",
    "CompetencyGapInput",
    "DevelopmentActionInput",
    "DevelopmentPlanInput",
    "DevelopmentPlanUpdate",
    "DevelopmentPlanFilters",
    "TalentPoolInput",
    "TalentPoolMemberInput",
    "SuccessionPlanInput",
]
