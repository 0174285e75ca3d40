"""Shared fixtures: a throwaway object store and input factories."""

import pytest

from sptp.core.engine import SuccessionEngine
from sptp.core.models import (
    CriticalityFactor,
    CriticalityLevel,
    CriticalRoleInput,
    PotentialRating,
    ReadinessAssessment,
    ReadinessLevel,
    SuccessorCandidateInput,
)
from sptp.core.storage.object_store import ObjectStore


@pytest.fixture
def store(tmp_path):
    return ObjectStore(tmp_path / "store")


@pytest.fixture
def engine(store):
    return SuccessionEngine(store, {"concurrency": {"max_attempts": 25, "wait_min": 0.001, "wait_max": 0.01}})


@pytest.fixture
def make_role_input():
    def factory(**overrides) -> CriticalRoleInput:
        data = {
            "position_id": "pos_cfo",
            "position_title": "Chief Financial Officer",
            "department_id": "dept_fin",
            "department_name": "Finance",
            "criticality_level": CriticalityLevel.CRITICAL,
            "criticality_factors": [
                CriticalityFactor(factor="revenue_impact", score=5, weight=60),
                CriticalityFactor(factor="replacement_difficulty", score=4, weight=40),
            ],
        }
        data.update(overrides)
        return CriticalRoleInput(**data)

    return factory


@pytest.fixture
def make_successor_input():
    def factory(employee_id: str = "emp_1", **overrides) -> SuccessorCandidateInput:
        data = {
            "employee_id": employee_id,
            "employee_name": f"Employee {employee_id}",
            "current_position": "Finance Director",
            "current_department": "Finance",
            "readiness_level": ReadinessLevel.READY_1_YEAR,
            "readiness_assessment": ReadinessAssessment(
                leadership_competencies=80,
                technical_expertise=70,
                business_acumen=75,
                stakeholder_management=65,
                strategic_thinking=60,
                team_management=70,
            ),
            "performance_rating": 4,
            "potential_rating": PotentialRating.HIGH,
            "rank": 1,
        }
        data.update(overrides)
        return SuccessorCandidateInput(**data)

    return factory
