"""Analytics Aggregator - company-wide succession snapshot.

Roles and plans are streamed from the store in chunks and folded into
counters, so memory stays bounded by the chunk size rather than the number of
documents a company holds.
"""

from collections import Counter
from typing import Any

from ..models.base import round_half_up, utc_now
from ..models.critical_role import CriticalRole
from ..models.development_plan import DevelopmentPlan
from ..models.enums import (
    DevelopmentPlanStatus,
    NineBoxCategory,
    ReadinessLevel,
    SuccessionRisk,
)
from ..models.succession_plan import SuccessionAnalytics
from ..storage.object_store import CRITICAL_ROLES, DEVELOPMENT_PLANS, ObjectStore
from ...observability.logger import get_logger
from .succession_plans import has_ready_now_successor

logger = get_logger(__name__)


def _distribution(counter: Counter, keys: type) -> dict[str, int]:
    # Every enum member appears, zero when absent
    return {member.value: counter.get(member.value, 0) for member in keys}


class AnalyticsService:
    """Read-only projection over critical roles and development plans."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}
        analytics_config = self.config.get("analytics", {})
        self.chunk_size = int(analytics_config.get("chunk_size", 200))
        self.on_track_threshold = analytics_config.get("on_track_threshold", 70)
        self.at_risk_threshold = analytics_config.get("at_risk_threshold", 30)

    def aggregate(self, company_id: str) -> SuccessionAnalytics:
        """Build the succession analytics snapshot for a company.

        Args:
            company_id: Company to aggregate

        Returns:
            SuccessionAnalytics computed from the current roles and plans
        """
        total_roles = 0
        ready_roles = 0
        pipeline_roles = 0
        empty_roles = 0
        risk_counts: Counter = Counter()
        nine_box_counts: Counter = Counter()
        readiness_counts: Counter = Counter()
        total_successors = 0

        for chunk in self.store.iter_query(
            company_id, CRITICAL_ROLES, where={"is_active": True}, chunk_size=self.chunk_size
        ):
            for doc in chunk:
                role = CriticalRole(**doc)
                total_roles += 1
                risk_counts[role.succession_risk] += 1
                if not role.successors:
                    empty_roles += 1
                elif has_ready_now_successor(role):
                    ready_roles += 1
                else:
                    pipeline_roles += 1
                for successor in role.successors:
                    total_successors += 1
                    nine_box_counts[successor.nine_box_category] += 1
                    readiness_counts[successor.readiness_level] += 1

        active_plans = 0
        on_track = 0
        at_risk = 0
        for chunk in self.store.iter_query(
            company_id,
            DEVELOPMENT_PLANS,
            where={"status": DevelopmentPlanStatus.ACTIVE.value},
            chunk_size=self.chunk_size,
        ):
            for doc in chunk:
                plan = DevelopmentPlan(**doc)
                active_plans += 1
                if plan.overall_progress >= self.on_track_threshold:
                    on_track += 1
                elif plan.overall_progress < self.at_risk_threshold:
                    at_risk += 1

        analytics = SuccessionAnalytics(
            company_id=company_id,
            as_of_date=utc_now(),
            total_critical_roles=total_roles,
            roles_with_ready_successor=ready_roles,
            roles_with_pipeline_successor=pipeline_roles,
            roles_with_no_successor=empty_roles,
            overall_coverage=int(round_half_up(ready_roles / total_roles * 100)) if total_roles else 0,
            risk_distribution=_distribution(risk_counts, SuccessionRisk),
            total_successors=total_successors,
            nine_box_distribution=_distribution(nine_box_counts, NineBoxCategory),
            readiness_distribution=_distribution(readiness_counts, ReadinessLevel),
            active_development_plans=active_plans,
            on_track_plans=on_track,
            at_risk_plans=at_risk,
        )
        logger.info(
            "succession_analytics_aggregated",
            company_id=company_id,
            total_critical_roles=total_roles,
            overall_coverage=analytics.overall_coverage,
            active_development_plans=active_plans,
        )
        return analytics
