"""Enumeration types for SPTP models."""

from enum import Enum


class CriticalityLevel(str, Enum):
    """How critical a position is to the organization."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuccessionRisk(str, Enum):
    """Succession risk grade derived from the best successor readiness."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReadinessLevel(str, Enum):
    """Time-to-ready classification for a successor."""

    READY_NOW = "ready_now"
    READY_1_YEAR = "ready_1_year"
    READY_2_3_YEARS = "ready_2_3_years"
    NOT_READY = "not_ready"


class PotentialRating(str, Enum):
    """Potential tier used on the nine-box vertical axis."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PerformanceLevel(str, Enum):
    """Bucketed performance rating used on the nine-box horizontal axis."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class NineBoxCategory(str, Enum):
    """Performance x potential talent classification."""

    STAR = "star"
    HIGH_PERFORMER = "high_performer"
    SOLID_PROFESSIONAL = "solid_professional"
    HIGH_POTENTIAL = "high_potential"
    CORE_PLAYER = "core_player"
    EFFECTIVE_PERFORMER = "effective_performer"
    ROUGH_DIAMOND = "rough_diamond"
    INCONSISTENT_PLAYER = "inconsistent_player"
    RISK = "risk"


class FlightRisk(str, Enum):
    """Likelihood that a successor leaves the company."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionType(str, Enum):
    """Kinds of development actions."""

    TRAINING = "training"
    MENTORING = "mentoring"
    COACHING = "coaching"
    STRETCH_ASSIGNMENT = "stretch_assignment"
    JOB_ROTATION = "job_rotation"
    PROJECT = "project"
    EDUCATION = "education"
    SHADOWING = "shadowing"
    OTHER = "other"


class ActionStatus(str, Enum):
    """Development action status."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DevelopmentPlanStatus(str, Enum):
    """Development plan lifecycle status."""

    DRAFT = "draft"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TalentPoolType(str, Enum):
    """Talent pool categories."""

    LEADERSHIP = "leadership"
    TECHNICAL = "technical"
    FUNCTIONAL = "functional"
    HIGH_POTENTIAL = "high_potential"
    EMERGING_TALENT = "emerging_talent"


class ReviewCycle(str, Enum):
    """Talent pool review cadence."""

    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"


class SuccessionPlanStatus(str, Enum):
    """Succession plan approval status."""

    DRAFT = "draft"
    IN_REVIEW = "in_review"
    APPROVED = "approved"


class SuccessionPlanScope(str, Enum):
    """Organizational scope a succession plan covers."""

    COMPANY = "company"
    DEPARTMENT = "department"
    FUNCTION = "function"
