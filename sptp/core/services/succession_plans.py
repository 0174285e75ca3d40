"""Succession Plan Compiler - point-in-time plans over a set of critical roles."""

from collections.abc import Iterable
from datetime import timedelta
from typing import Any

from ..errors import NotFoundError
from ..models.base import round_half_up, utc_now
from ..models.critical_role import CriticalRole
from ..models.enums import ReadinessLevel, SuccessionPlanStatus, SuccessionRisk
from ..models.inputs import SuccessionPlanInput
from ..models.succession_plan import SuccessionPlan
from ..storage.object_store import CRITICAL_ROLES, ObjectStore, SUCCESSION_PLANS
from ..storage.transaction import load_document, run_transaction, save_new
from ...observability.logger import get_logger

logger = get_logger(__name__)

ENTITY = "Succession plan"
HIGH_RISK_LEVELS = (SuccessionRisk.HIGH, SuccessionRisk.CRITICAL)


def has_ready_now_successor(role: CriticalRole) -> bool:
    return any(s.readiness_level == ReadinessLevel.READY_NOW for s in role.successors)


def compile_plan(
    company_id: str,
    input_data: SuccessionPlanInput,
    roles: Iterable[CriticalRole],
    review_interval_days: int = 90,
) -> SuccessionPlan:
    """Compile plan metrics from the requested subset of ``roles``.

    Args:
        company_id: Owning company
        input_data: Plan definition including the requested role ids
        roles: Candidate roles; those not requested are ignored
        review_interval_days: Days until the plan's next review

    Returns:
        Unsaved SuccessionPlan with metrics fixed at this point in time
    """
    # Each requested role counts once, however often its id or the role repeats
    requested = set(input_data.critical_role_ids)
    unique_roles = {r.id: r for r in roles if r.id in requested}
    included = list(unique_roles.values())
    total = len(included)

    ready_now_roles = sum(1 for r in included if has_ready_now_successor(r))
    coverage = int(round_half_up(ready_now_roles / total * 100)) if total else 0
    average_bench = round_half_up(sum(r.bench_strength for r in included) / total, 1) if total else 0.0

    now = utc_now()
    return SuccessionPlan(
        company_id=company_id,
        **input_data.model_dump(exclude={"critical_role_ids"}),
        critical_role_ids=list(dict.fromkeys(input_data.critical_role_ids)),
        total_critical_roles=total,
        roles_with_successors=sum(1 for r in included if r.successors),
        ready_now_coverage=coverage,
        average_bench_strength=average_bench,
        high_risk_roles=sum(1 for r in included if r.succession_risk in HIGH_RISK_LEVELS),
        status=SuccessionPlanStatus.DRAFT,
        last_review_date=now,
        next_review_date=now + timedelta(days=review_interval_days),
        created_at=now,
        updated_at=now,
    )


class SuccessionPlanService:
    """Creates, lists and moves succession plans through review."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}
        self.concurrency = self.config.get("concurrency", {})
        self.review_interval_days = (
            self.config.get("succession_plans", {}).get("review_interval_days", 90)
        )

    def _load_roles(self, company_id: str, role_ids: Iterable[str]) -> list[CriticalRole]:
        roles = []
        for role_id in dict.fromkeys(role_ids):
            data = self.store.get(company_id, CRITICAL_ROLES, role_id)
            if data is None:
                logger.warning("succession_plan_role_missing", company_id=company_id, role_id=role_id)
                continue
            roles.append(CriticalRole(**data))
        return roles

    def create_succession_plan(
        self,
        company_id: str,
        input_data: SuccessionPlanInput,
        roles: Iterable[CriticalRole] | None = None,
    ) -> SuccessionPlan:
        """Compile and persist a plan.

        When ``roles`` is omitted the requested roles are read from the store.
        The stored plan never changes when those roles change later.
        """
        if roles is None:
            roles = self._load_roles(company_id, input_data.critical_role_ids)

        plan = compile_plan(company_id, input_data, roles, self.review_interval_days)
        plan = save_new(self.store, SUCCESSION_PLANS, plan)
        logger.info(
            "succession_plan_created",
            company_id=company_id,
            plan_id=plan.id,
            total_critical_roles=plan.total_critical_roles,
            ready_now_coverage=plan.ready_now_coverage,
        )
        return plan

    def get_succession_plan(self, company_id: str, plan_id: str) -> SuccessionPlan:
        return load_document(self.store, company_id, SUCCESSION_PLANS, plan_id, SuccessionPlan, ENTITY)

    def list_succession_plans(self, company_id: str) -> list[SuccessionPlan]:
        docs = self.store.query(company_id, SUCCESSION_PLANS, order_by="created_at", descending=True)
        return [SuccessionPlan(**doc) for doc in docs]

    def update_plan_status(
        self,
        company_id: str,
        plan_id: str,
        status: SuccessionPlanStatus,
        user_id: str | None = None,
    ) -> SuccessionPlan:
        """Move a plan through draft -> in_review -> approved.

        Only the status and approval stamps change; compiled metrics stay fixed.
        """

        def mutate(plan: SuccessionPlan) -> SuccessionPlan:
            updated = plan.model_copy(deep=True)
            updated.status = status
            if status == SuccessionPlanStatus.APPROVED and user_id:
                updated.approved_by = user_id
                updated.approved_at = utc_now()
            return updated

        try:
            plan = run_transaction(
                self.store,
                company_id,
                SUCCESSION_PLANS,
                plan_id,
                SuccessionPlan,
                mutate,
                ENTITY,
                self.concurrency,
            )
        except NotFoundError:
            logger.warning("succession_plan_missing", company_id=company_id, plan_id=plan_id)
            raise
        logger.info("succession_plan_status_updated", company_id=company_id, plan_id=plan_id, status=plan.status)
        return plan
