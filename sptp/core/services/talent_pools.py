"""Talent Pool Manager - pool membership and readiness counters."""

from datetime import datetime
from typing import Any

from ..errors import DuplicateMemberError
from ..models.base import add_months, utc_now
from ..models.enums import NineBoxCategory, ReadinessLevel, ReviewCycle
from ..models.inputs import TalentPoolInput, TalentPoolMemberInput
from ..models.talent_pool import TalentPool, TalentPoolMember
from ..scoring.risk import apply_pool_counters
from ..storage.object_store import TALENT_POOLS, ObjectStore
from ..storage.transaction import load_document, run_transaction, save_new
from ...observability.logger import get_logger

logger = get_logger(__name__)

ENTITY = "Talent pool"

REVIEW_CYCLE_MONTHS = {
    ReviewCycle.QUARTERLY.value: 3,
    ReviewCycle.SEMI_ANNUAL.value: 6,
    ReviewCycle.ANNUAL.value: 12,
}


def next_review_date(cycle: ReviewCycle | str, now: datetime | None = None) -> datetime:
    """Next review date for a cycle; unknown cycles review quarterly."""
    cycle_value = cycle.value if isinstance(cycle, ReviewCycle) else cycle
    months = REVIEW_CYCLE_MONTHS.get(cycle_value, 3)
    return add_months(now or utc_now(), months)


class TalentPoolService:
    """Owns talent pools; counters are recomputed on every membership change."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}
        self.concurrency = self.config.get("concurrency", {})

    def _transaction(self, company_id: str, pool_id: str, mutate) -> TalentPool:
        return run_transaction(
            self.store,
            company_id,
            TALENT_POOLS,
            pool_id,
            TalentPool,
            mutate,
            ENTITY,
            self.concurrency,
        )

    def create_talent_pool(
        self,
        company_id: str,
        input_data: TalentPoolInput,
        owner_id: str | None = None,
        owner_name: str | None = None,
    ) -> TalentPool:
        now = utc_now()
        pool = TalentPool(
            company_id=company_id,
            **input_data.model_dump(),
            members=[],
            owner_id=owner_id,
            owner_name=owner_name,
            last_review_date=now,
            next_review_date=next_review_date(input_data.review_cycle, now),
            created_at=now,
            updated_at=now,
        )
        pool = save_new(self.store, TALENT_POOLS, pool)
        logger.info("talent_pool_created", company_id=company_id, pool_id=pool.id, pool_type=pool.pool_type)
        return pool

    def get_talent_pool(self, company_id: str, pool_id: str) -> TalentPool:
        return load_document(self.store, company_id, TALENT_POOLS, pool_id, TalentPool, ENTITY)

    def list_talent_pools(self, company_id: str) -> list[TalentPool]:
        """Active pools, newest first."""
        docs = self.store.query(
            company_id, TALENT_POOLS, where={"is_active": True}, order_by="created_at", descending=True
        )
        return [TalentPool(**doc) for doc in docs]

    def add_member(
        self,
        company_id: str,
        pool_id: str,
        input_data: TalentPoolMemberInput,
        nine_box_category: NineBoxCategory,
        readiness_level: ReadinessLevel,
        user_id: str | None = None,
    ) -> TalentPool:
        """Add an employee to a pool.

        Raises:
            NotFoundError: If the pool does not exist
            DuplicateMemberError: If the employee is already a member
        """

        def mutate(pool: TalentPool) -> TalentPool:
            if any(m.employee_id == input_data.employee_id for m in pool.members):
                logger.warning(
                    "duplicate_member_rejected",
                    company_id=company_id,
                    pool_id=pool_id,
                    employee_id=input_data.employee_id,
                )
                raise DuplicateMemberError(pool_id, input_data.employee_id)
            now = utc_now()
            member = TalentPoolMember(
                **input_data.model_dump(),
                nine_box_category=nine_box_category,
                readiness_level=readiness_level,
                added_date=now,
                added_by=user_id,
                last_assessed_date=now,
            )
            return apply_pool_counters(pool, [*pool.members, member])

        pool = self._transaction(company_id, pool_id, mutate)
        logger.info(
            "talent_pool_member_added",
            company_id=company_id,
            pool_id=pool_id,
            employee_id=input_data.employee_id,
            member_count=pool.member_count,
        )
        return pool

    def remove_member(self, company_id: str, pool_id: str, employee_id: str) -> TalentPool:
        """Remove an employee; removing a non-member still rewrites the counters."""

        def mutate(pool: TalentPool) -> TalentPool:
            return apply_pool_counters(pool, [m for m in pool.members if m.employee_id != employee_id])

        pool = self._transaction(company_id, pool_id, mutate)
        logger.info(
            "talent_pool_member_removed",
            company_id=company_id,
            pool_id=pool_id,
            employee_id=employee_id,
            member_count=pool.member_count,
        )
        return pool

    def deactivate_talent_pool(self, company_id: str, pool_id: str) -> TalentPool:
        def mutate(pool: TalentPool) -> TalentPool:
            updated = pool.model_copy(deep=True)
            updated.is_active = False
            return updated

        pool = self._transaction(company_id, pool_id, mutate)
        logger.info("talent_pool_deactivated", company_id=company_id, pool_id=pool_id)
        return pool
