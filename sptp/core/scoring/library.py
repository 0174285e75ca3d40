"""Scoring Library - pure scoring and classification functions.

Nothing here touches the store; services call these on every mutation so the
derived fields of a document are always a function of its base fields.
"""

from collections.abc import Iterable

from ..models.base import round_half_up
from ..models.critical_role import (
    CompetencyGap,
    CriticalityFactor,
    ReadinessAssessment,
)
from ..models.enums import NineBoxCategory, PerformanceLevel, PotentialRating
from ..models.inputs import CompetencyGapInput

CRITICALITY_SCALE = 20
MAX_SCORE = 100

READINESS_DIMENSIONS = (
    "leadership_competencies",
    "technical_expertise",
    "business_acumen",
    "stakeholder_management",
    "strategic_thinking",
    "team_management",
)
OPTIONAL_READINESS_DIMENSIONS = ("regional_market_knowledge",)

# (performance level, potential tier) -> category
NINE_BOX_MAPPING: dict[tuple[str, str], NineBoxCategory] = {
    (PerformanceLevel.HIGH.value, PotentialRating.HIGH.value): NineBoxCategory.STAR,
    (PerformanceLevel.HIGH.value, PotentialRating.MEDIUM.value): NineBoxCategory.HIGH_PERFORMER,
    (PerformanceLevel.HIGH.value, PotentialRating.LOW.value): NineBoxCategory.SOLID_PROFESSIONAL,
    (PerformanceLevel.MEDIUM.value, PotentialRating.HIGH.value): NineBoxCategory.HIGH_POTENTIAL,
    (PerformanceLevel.MEDIUM.value, PotentialRating.MEDIUM.value): NineBoxCategory.CORE_PLAYER,
    (PerformanceLevel.MEDIUM.value, PotentialRating.LOW.value): NineBoxCategory.EFFECTIVE_PERFORMER,
    (PerformanceLevel.LOW.value, PotentialRating.HIGH.value): NineBoxCategory.ROUGH_DIAMOND,
    (PerformanceLevel.LOW.value, PotentialRating.MEDIUM.value): NineBoxCategory.INCONSISTENT_PLAYER,
    (PerformanceLevel.LOW.value, PotentialRating.LOW.value): NineBoxCategory.RISK,
}
DEFAULT_NINE_BOX_CATEGORY = NineBoxCategory.CORE_PLAYER


def clamp(value: int, lower: int = 0, upper: int = MAX_SCORE) -> int:
    return max(lower, min(upper, value))


def criticality_score(factors: Iterable[CriticalityFactor]) -> int:
    """Weighted criticality score on a 0-100 scale.

    Each factor contributes ``score * weight / 100 * 20``. Weights are expected
    to sum to 100 but this is not checked; the total is clamped instead.

    Args:
        factors: Criticality factors (score 0-5, weight 0-100)

    Returns:
        Criticality score in [0, 100]
    """
    total = sum(f.score * f.weight / 100 * CRITICALITY_SCALE for f in factors)
    return clamp(int(round_half_up(total)))


def readiness_score(assessment: ReadinessAssessment) -> int:
    """Rounded mean of every assessment dimension that is present.

    Args:
        assessment: Readiness assessment with six mandatory dimensions and
            optional extras

    Returns:
        Readiness score in [0, 100]
    """
    scores = [getattr(assessment, name) for name in READINESS_DIMENSIONS]
    scores.extend(
        getattr(assessment, name)
        for name in OPTIONAL_READINESS_DIMENSIONS
        if getattr(assessment, name) is not None
    )
    return int(round_half_up(sum(scores) / len(scores)))


def performance_level(performance_rating: int) -> PerformanceLevel:
    if performance_rating >= 4:
        return PerformanceLevel.HIGH
    if performance_rating >= 3:
        return PerformanceLevel.MEDIUM
    return PerformanceLevel.LOW


def nine_box_category(performance_rating: int, potential: PotentialRating | str) -> NineBoxCategory:
    """Classify a performance rating and potential tier into a nine-box cell.

    Unknown combinations fall back to ``core_player`` instead of failing.
    """
    potential_value = potential.value if isinstance(potential, PotentialRating) else str(potential)
    key = (performance_level(performance_rating).value, potential_value)
    return NINE_BOX_MAPPING.get(key, DEFAULT_NINE_BOX_CATEGORY)


def gap_size(required_level: int, current_level: int) -> int:
    return required_level - current_level


def build_competency_gaps(gaps: Iterable[CompetencyGapInput]) -> list[CompetencyGap]:
    """Turn assessor-supplied gaps into stored gaps with their size filled in."""
    return [
        CompetencyGap(
            competency=g.competency,
            required_level=g.required_level,
            current_level=g.current_level,
            gap_size=gap_size(g.required_level, g.current_level),
            development_actions=list(g.development_actions),
        )
        for g in gaps
    ]
