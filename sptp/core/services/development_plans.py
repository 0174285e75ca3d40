"""Development Plan Tracker - remediation plans and action-level progress."""

from datetime import timedelta
from typing import Any

from ..errors import NotFoundError
from ..models.base import utc_now
from ..models.development_plan import DevelopmentAction, DevelopmentPlan
from ..models.enums import ActionStatus, DevelopmentPlanStatus
from ..models.inputs import (
    DevelopmentPlanFilters,
    DevelopmentPlanInput,
    DevelopmentPlanUpdate,
)
from ..scoring.progress import overall_progress, plan_status
from ..storage.object_store import DEVELOPMENT_PLANS, ObjectStore
from ..storage.transaction import load_document, run_transaction, save_new
from ...observability.logger import get_logger

logger = get_logger(__name__)

ENTITY = "Development plan"


class DevelopmentPlanService:
    """Owns development plans and rolls action progress up to the plan."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}
        self.concurrency = self.config.get("concurrency", {})
        self.review_interval_days = (
            self.config.get("development_plans", {}).get("review_interval_days", 30)
        )

    def _transaction(self, company_id: str, plan_id: str, mutate) -> DevelopmentPlan:
        return run_transaction(
            self.store,
            company_id,
            DEVELOPMENT_PLANS,
            plan_id,
            DevelopmentPlan,
            mutate,
            ENTITY,
            self.concurrency,
        )

    def create_development_plan(
        self,
        company_id: str,
        input_data: DevelopmentPlanInput,
        employee_name: str,
        owner_id: str | None = None,
    ) -> DevelopmentPlan:
        """Create a draft plan whose actions are all planned at 0%."""
        now = utc_now()
        actions = [
            DevelopmentAction(
                id=f"action_{index}",
                **action.model_dump(),
                status=ActionStatus.PLANNED,
                progress=0,
            )
            for index, action in enumerate(input_data.actions, start=1)
        ]
        plan = DevelopmentPlan(
            company_id=company_id,
            employee_name=employee_name,
            **input_data.model_dump(exclude={"actions"}),
            actions=actions,
            overall_progress=0,
            status=DevelopmentPlanStatus.DRAFT,
            owner_id=owner_id,
            next_review_date=now + timedelta(days=self.review_interval_days),
            created_at=now,
            updated_at=now,
        )
        plan = save_new(self.store, DEVELOPMENT_PLANS, plan)
        logger.info(
            "development_plan_created",
            company_id=company_id,
            plan_id=plan.id,
            employee_id=plan.employee_id,
            actions=len(actions),
        )
        return plan

    def get_development_plan(self, company_id: str, plan_id: str) -> DevelopmentPlan:
        return load_document(self.store, company_id, DEVELOPMENT_PLANS, plan_id, DevelopmentPlan, ENTITY)

    def list_development_plans(
        self,
        company_id: str,
        filters: DevelopmentPlanFilters | None = None,
    ) -> list[DevelopmentPlan]:
        """List plans, newest first."""
        where = (filters or DevelopmentPlanFilters()).model_dump(exclude_none=True)
        docs = self.store.query(
            company_id, DEVELOPMENT_PLANS, where=where, order_by="created_at", descending=True
        )
        return [DevelopmentPlan(**doc) for doc in docs]

    def update_development_plan(
        self,
        company_id: str,
        plan_id: str,
        updates: DevelopmentPlanUpdate,
    ) -> DevelopmentPlan:
        """Change descriptive plan fields. Actions, progress and status are untouched."""
        changes = updates.model_dump(exclude_unset=True)

        def mutate(plan: DevelopmentPlan) -> DevelopmentPlan:
            return DevelopmentPlan(**{**plan.model_dump(), **changes})

        return self._transaction(company_id, plan_id, mutate)

    def update_action_progress(
        self,
        company_id: str,
        plan_id: str,
        action_id: str,
        progress: int,
        status: ActionStatus | None = None,
        actual_outcome: str | None = None,
    ) -> DevelopmentPlan:
        """Record progress on one action and roll it up to the plan.

        Overall progress is the mean over all actions, not just this one.

        Raises:
            NotFoundError: If the plan or the action does not exist
        """

        def mutate(plan: DevelopmentPlan) -> DevelopmentPlan:
            updated = plan.model_copy(deep=True)
            action = next((a for a in updated.actions if a.id == action_id), None)
            if action is None:
                raise NotFoundError("Development action", action_id)

            was_completed = action.status == ActionStatus.COMPLETED
            action.progress = progress
            if status is not None:
                action.status = status
            if actual_outcome:
                action.actual_outcome = actual_outcome
            if action.status == ActionStatus.COMPLETED and not was_completed:
                action.completed_at = utc_now()

            updated.overall_progress = overall_progress(updated.actions)
            updated.status = plan_status(updated.actions, updated.status)
            return updated

        plan = self._transaction(company_id, plan_id, mutate)
        logger.info(
            "action_progress_updated",
            company_id=company_id,
            plan_id=plan_id,
            action_id=action_id,
            progress=progress,
            overall_progress=plan.overall_progress,
            status=plan.status,
        )
        return plan

    def activate_plan(self, company_id: str, plan_id: str) -> DevelopmentPlan:
        """Manually promote a plan to active regardless of action state."""

        def mutate(plan: DevelopmentPlan) -> DevelopmentPlan:
            updated = plan.model_copy(deep=True)
            updated.status = DevelopmentPlanStatus.ACTIVE
            return updated

        plan = self._transaction(company_id, plan_id, mutate)
        logger.info("development_plan_activated", company_id=company_id, plan_id=plan_id)
        return plan

    def delete_development_plan(self, company_id: str, plan_id: str) -> None:
        """Hard-delete a plan.

        Raises:
            NotFoundError: If the plan does not exist
        """
        if not self.store.delete(company_id, DEVELOPMENT_PLANS, plan_id):
            raise NotFoundError(ENTITY, plan_id)
        logger.info("development_plan_deleted", company_id=company_id, plan_id=plan_id)
