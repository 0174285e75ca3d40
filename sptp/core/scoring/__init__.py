"""Pure scoring, classification and risk derivation functions."""

from .library import (
    DEFAULT_NINE_BOX_CATEGORY,
    NINE_BOX_MAPPING,
    build_competency_gaps,
    criticality_score,
    gap_size,
    nine_box_category,
    performance_level,
    readiness_score,
)
from .progress import overall_progress, plan_status
from .risk import (
    apply_pool_counters,
    apply_risk_cascade,
    bench_strength,
    sort_by_rank,
    succession_risk,
)

__all__ = [
    "DEFAULT_NINE_BOX_CATEGORY",
    "NINE_BOX_MAPPING",
    "build_competency_gaps",
    "criticality_score",
    "gap_size",
    "nine_box_category",
    "performance_level",
    "readiness_score",
    "overall_progress",
    "plan_status",
    "apply_pool_counters",
    "apply_risk_cascade",
    "bench_strength",
    "sort_by_rank",
    "succession_risk",
]
