"""Critical Role Registry - critical roles and their embedded successor lists."""

from datetime import timedelta
from typing import Any

from ..errors import DuplicateSuccessorError, NotFoundError
from ..models.base import utc_now
from ..models.critical_role import CriticalRole, SuccessorCandidate
from ..models.enums import SuccessionRisk
from ..models.inputs import (
    CriticalRoleFilters,
    CriticalRoleInput,
    CriticalRoleUpdate,
    SuccessorCandidateInput,
    SuccessorCandidateUpdate,
)
from ..scoring.library import (
    build_competency_gaps,
    criticality_score,
    nine_box_category,
    readiness_score,
)
from ..scoring.risk import apply_risk_cascade
from ..storage.object_store import CRITICAL_ROLES, ObjectStore
from ..storage.transaction import load_document, run_transaction, save_new
from ...observability.logger import get_logger

logger = get_logger(__name__)

ENTITY = "Critical role"


def build_successor(input_data: SuccessorCandidateInput, user_id: str | None) -> SuccessorCandidate:
    """Create a successor candidate with its derived scores filled in."""
    score = readiness_score(input_data.readiness_assessment)
    assessment = input_data.readiness_assessment.model_copy(update={"overall_readiness": score})
    return SuccessorCandidate(
        employee_id=input_data.employee_id,
        employee_name=input_data.employee_name,
        current_position=input_data.current_position,
        current_department=input_data.current_department,
        readiness_level=input_data.readiness_level,
        readiness_score=score,
        readiness_assessment=assessment,
        performance_rating=input_data.performance_rating,
        potential_rating=input_data.potential_rating,
        nine_box_category=nine_box_category(input_data.performance_rating, input_data.potential_rating),
        competency_gaps=build_competency_gaps(input_data.competency_gaps),
        interested_in_role=input_data.interested_in_role,
        willing_to_relocate=input_data.willing_to_relocate,
        flight_risk=input_data.flight_risk,
        rank=input_data.rank,
        last_assessed_date=utc_now(),
        assessed_by=user_id,
    )


def merge_successor(
    current: SuccessorCandidate,
    updates: SuccessorCandidateUpdate,
    user_id: str | None,
) -> SuccessorCandidate:
    """Apply a partial update, recomputing only the scores whose inputs changed."""
    # Explicit None clears optional fields; required ones fail validation
    changes = updates.model_dump(exclude_unset=True, exclude={"competency_gaps", "readiness_assessment"})
    merged = current.model_dump()
    merged.update(changes)

    if "competency_gaps" in updates.model_fields_set:
        merged["competency_gaps"] = [
            gap.model_dump() for gap in build_competency_gaps(updates.competency_gaps or [])
        ]

    if updates.readiness_assessment is not None:
        score = readiness_score(updates.readiness_assessment)
        merged["readiness_score"] = score
        merged["readiness_assessment"] = {
            **updates.readiness_assessment.model_dump(),
            "overall_readiness": score,
        }

    if updates.performance_rating is not None or updates.potential_rating is not None:
        merged["nine_box_category"] = nine_box_category(
            merged["performance_rating"], merged["potential_rating"]
        )

    merged["last_assessed_date"] = utc_now()
    merged["assessed_by"] = user_id
    return SuccessorCandidate(**merged)


class CriticalRoleService:
    """Owns critical roles; every successor mutation re-runs the risk cascade."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}
        self.concurrency = self.config.get("concurrency", {})
        self.review_interval_days = (
            self.config.get("critical_roles", {}).get("review_interval_days", 90)
        )

    def _transaction(self, company_id: str, role_id: str, mutate) -> CriticalRole:
        return run_transaction(
            self.store,
            company_id,
            CRITICAL_ROLES,
            role_id,
            CriticalRole,
            mutate,
            ENTITY,
            self.concurrency,
        )

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------
    def create_critical_role(
        self,
        company_id: str,
        input_data: CriticalRoleInput,
        incumbent_name: str | None = None,
        user_id: str | None = None,
    ) -> CriticalRole:
        """Register a critical role with no successors and critical risk."""
        now = utc_now()
        role = CriticalRole(
            company_id=company_id,
            **input_data.model_dump(),
            criticality_score=criticality_score(input_data.criticality_factors),
            incumbent_name=incumbent_name,
            successors=[],
            succession_risk=SuccessionRisk.CRITICAL,
            bench_strength=0,
            last_review_date=now,
            next_review_date=now + timedelta(days=self.review_interval_days),
            reviewed_by=user_id,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        role = save_new(self.store, CRITICAL_ROLES, role)
        logger.info(
            "critical_role_created",
            company_id=company_id,
            role_id=role.id,
            criticality_score=role.criticality_score,
        )
        return role

    def get_critical_role(self, company_id: str, role_id: str) -> CriticalRole:
        return load_document(self.store, company_id, CRITICAL_ROLES, role_id, CriticalRole, ENTITY)

    def list_critical_roles(
        self,
        company_id: str,
        filters: CriticalRoleFilters | None = None,
    ) -> list[CriticalRole]:
        """List active roles, highest criticality first.

        Department, criticality level and risk filters go to the store; the
        has-successor filter depends on list length and is applied afterwards.
        """
        filters = filters or CriticalRoleFilters()
        where: dict[str, Any] = {"is_active": True}
        if filters.department_id:
            where["department_id"] = filters.department_id
        if filters.criticality_level:
            where["criticality_level"] = filters.criticality_level
        if filters.succession_risk:
            where["succession_risk"] = filters.succession_risk

        docs = self.store.query(
            company_id, CRITICAL_ROLES, where=where, order_by="criticality_score", descending=True
        )
        roles = [CriticalRole(**doc) for doc in docs]

        if filters.has_successor is not None:
            roles = [r for r in roles if bool(r.successors) == filters.has_successor]
        return roles

    def update_critical_role(
        self,
        company_id: str,
        role_id: str,
        updates: CriticalRoleUpdate,
        user_id: str | None = None,
    ) -> CriticalRole:
        """Apply descriptive changes; rescore when the factors change."""
        changes = updates.model_dump(exclude_unset=True)

        def mutate(role: CriticalRole) -> CriticalRole:
            merged = role.model_dump()
            merged.update(changes)
            if updates.criticality_factors is not None:
                merged["criticality_score"] = criticality_score(updates.criticality_factors)
            if user_id:
                merged["reviewed_by"] = user_id
            return CriticalRole(**merged)

        role = self._transaction(company_id, role_id, mutate)
        logger.info("critical_role_updated", company_id=company_id, role_id=role_id, fields=sorted(changes))
        return role

    def deactivate_critical_role(self, company_id: str, role_id: str) -> CriticalRole:
        """Soft-delete a role. Roles are never physically removed."""

        def mutate(role: CriticalRole) -> CriticalRole:
            updated = role.model_copy(deep=True)
            updated.is_active = False
            return updated

        role = self._transaction(company_id, role_id, mutate)
        logger.info("critical_role_deactivated", company_id=company_id, role_id=role_id)
        return role

    # ------------------------------------------------------------------
    # Successors
    # ------------------------------------------------------------------
    def add_successor(
        self,
        company_id: str,
        role_id: str,
        input_data: SuccessorCandidateInput,
        user_id: str | None = None,
    ) -> CriticalRole:
        """Nominate a successor and re-derive succession risk and bench strength.

        Raises:
            NotFoundError: If the role does not exist
            DuplicateSuccessorError: If the employee is already a successor
        """

        def mutate(role: CriticalRole) -> CriticalRole:
            if any(s.employee_id == input_data.employee_id for s in role.successors):
                logger.warning(
                    "duplicate_successor_rejected",
                    company_id=company_id,
                    role_id=role_id,
                    employee_id=input_data.employee_id,
                )
                raise DuplicateSuccessorError(role_id, input_data.employee_id)
            successor = build_successor(input_data, user_id)
            return apply_risk_cascade(role, [*role.successors, successor])

        role = self._transaction(company_id, role_id, mutate)
        logger.info(
            "successor_added",
            company_id=company_id,
            role_id=role_id,
            employee_id=input_data.employee_id,
            succession_risk=role.succession_risk,
            bench_strength=role.bench_strength,
        )
        return role

    def update_successor(
        self,
        company_id: str,
        role_id: str,
        successor_id: str,
        updates: SuccessorCandidateUpdate,
        user_id: str | None = None,
    ) -> CriticalRole:
        """Merge partial successor changes, re-sort and re-derive risk.

        Raises:
            NotFoundError: If the role or the successor does not exist
            DuplicateSuccessorError: If the employee id is changed to one
                already on the list
        """

        def mutate(role: CriticalRole) -> CriticalRole:
            index = next((i for i, s in enumerate(role.successors) if s.id == successor_id), None)
            if index is None:
                raise NotFoundError("Successor", successor_id)

            if updates.employee_id is not None and any(
                s.employee_id == updates.employee_id
                for i, s in enumerate(role.successors)
                if i != index
            ):
                raise DuplicateSuccessorError(role_id, updates.employee_id)

            successors = list(role.successors)
            successors[index] = merge_successor(successors[index], updates, user_id)
            return apply_risk_cascade(role, successors)

        role = self._transaction(company_id, role_id, mutate)
        logger.info(
            "successor_updated",
            company_id=company_id,
            role_id=role_id,
            successor_id=successor_id,
            succession_risk=role.succession_risk,
            bench_strength=role.bench_strength,
        )
        return role

    def remove_successor(self, company_id: str, role_id: str, successor_id: str) -> CriticalRole:
        """Remove a successor by id and re-derive risk.

        Removing the last ready-now successor can move risk straight from low
        to high or critical.
        """

        def mutate(role: CriticalRole) -> CriticalRole:
            successors = [s for s in role.successors if s.id != successor_id]
            if len(successors) == len(role.successors):
                logger.warning(
                    "successor_not_on_role", company_id=company_id, role_id=role_id, successor_id=successor_id
                )
            return apply_risk_cascade(role, successors)

        role = self._transaction(company_id, role_id, mutate)
        logger.info(
            "successor_removed",
            company_id=company_id,
            role_id=role_id,
            successor_id=successor_id,
            succession_risk=role.succession_risk,
            bench_strength=role.bench_strength,
        )
        return role
