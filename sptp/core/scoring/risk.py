"""Risk Cascade Rule and membership counters.

Pure projections of persisted base state: every mutating service recomputes
these through the functions below rather than inline.
"""

from collections.abc import Iterable, Sequence

from ..models.critical_role import CriticalRole, SuccessorCandidate
from ..models.enums import ReadinessLevel, SuccessionRisk
from ..models.talent_pool import TalentPool, TalentPoolMember


def count_readiness(items: Iterable[SuccessorCandidate | TalentPoolMember], level: ReadinessLevel) -> int:
    return sum(1 for item in items if item.readiness_level == level)


def succession_risk(successors: Sequence[SuccessorCandidate]) -> SuccessionRisk:
    """Derive succession risk from the best readiness available.

    1. any ready-now successor -> low
    2. else any ready-in-one-year successor -> medium
    3. else any successor at all -> high
    4. else -> critical
    """
    if count_readiness(successors, ReadinessLevel.READY_NOW):
        return SuccessionRisk.LOW
    if count_readiness(successors, ReadinessLevel.READY_1_YEAR):
        return SuccessionRisk.MEDIUM
    if successors:
        return SuccessionRisk.HIGH
    return SuccessionRisk.CRITICAL


def bench_strength(successors: Sequence[SuccessorCandidate]) -> int:
    return count_readiness(successors, ReadinessLevel.READY_NOW)


def sort_by_rank(successors: Iterable[SuccessorCandidate]) -> list[SuccessorCandidate]:
    # sorted() is stable: equal ranks keep their current list order
    return sorted(successors, key=lambda s: s.rank)


def apply_risk_cascade(role: CriticalRole, successors: Iterable[SuccessorCandidate]) -> CriticalRole:
    """Return a copy of ``role`` holding ``successors`` with all derived fields refreshed.

    Args:
        role: Role as read from the store
        successors: New successor list (any order)

    Returns:
        Updated role; the input role is left untouched
    """
    ordered = sort_by_rank(successors)
    updated = role.model_copy(deep=True)
    updated.successors = ordered
    updated.succession_risk = succession_risk(ordered)
    updated.bench_strength = bench_strength(ordered)
    return updated


def apply_pool_counters(pool: TalentPool, members: Iterable[TalentPoolMember]) -> TalentPool:
    """Return a copy of ``pool`` holding ``members`` with its counters recomputed."""
    members = list(members)
    updated = pool.model_copy(deep=True)
    updated.members = members
    updated.member_count = len(members)
    updated.ready_now_count = count_readiness(members, ReadinessLevel.READY_NOW)
    updated.ready_1_year_count = count_readiness(members, ReadinessLevel.READY_1_YEAR)
    return updated
