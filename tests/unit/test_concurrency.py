"""Concurrent mutations of one document must not lose updates."""

import multiprocessing
import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from sptp.core.errors import VersionConflictError
from sptp.core.models import (
    NineBoxCategory,
    PotentialRating,
    ReadinessAssessment,
    ReadinessLevel,
    SuccessorCandidateInput,
    TalentPoolInput,
    TalentPoolMemberInput,
    TalentPoolType,
)
from sptp.core.services import CriticalRoleService
from sptp.core.storage.object_store import CRITICAL_ROLES, ObjectStore

COMPANY = "acme"


def _interleave_once(monkeypatch, store, competing_write):
    """Run ``competing_write`` right after the next role read, before its write-back."""
    original_get = store.get
    state = {"raced": False}

    def racing_get(company_id, collection, doc_id):
        data = original_get(company_id, collection, doc_id)
        if collection == CRITICAL_ROLES and not state["raced"]:
            state["raced"] = True
            competing_write()
        return data

    monkeypatch.setattr(store, "get", racing_get)


def test_interleaved_add_successor_keeps_both(monkeypatch, store, engine, make_role_input, make_successor_input):
    role = engine.roles.create_critical_role(COMPANY, make_role_input())
    _interleave_once(
        monkeypatch,
        store,
        lambda: engine.roles.add_successor(COMPANY, role.id, make_successor_input("emp_b", rank=2)),
    )

    engine.roles.add_successor(COMPANY, role.id, make_successor_input("emp_a", rank=1))

    monkeypatch.undo()
    stored = engine.roles.get_critical_role(COMPANY, role.id)
    assert [s.employee_id for s in stored.successors] == ["emp_a", "emp_b"]
    # create, competing add, retried add
    assert stored.version == 3


def test_conflict_surfaces_when_retries_exhausted(monkeypatch, store, make_role_input, make_successor_input):
    service = CriticalRoleService(store, {"concurrency": {"max_attempts": 1}})
    role = service.create_critical_role(COMPANY, make_role_input())
    _interleave_once(
        monkeypatch,
        store,
        lambda: service.add_successor(COMPANY, role.id, make_successor_input("emp_b", rank=2)),
    )

    with pytest.raises(VersionConflictError):
        service.add_successor(COMPANY, role.id, make_successor_input("emp_a", rank=1))

    monkeypatch.undo()
    stored = service.get_critical_role(COMPANY, role.id)
    assert [s.employee_id for s in stored.successors] == ["emp_b"]


def test_parallel_add_successor(engine, make_role_input, make_successor_input):
    role = engine.roles.create_critical_role(COMPANY, make_role_input())
    employees = [f"emp_{i}" for i in range(5)]

    with ThreadPoolExecutor(max_workers=5) as pool:
        futures = [
            pool.submit(
                engine.roles.add_successor,
                COMPANY,
                role.id,
                make_successor_input(employee_id, readiness_level=ReadinessLevel.READY_NOW, rank=i + 1),
            )
            for i, employee_id in enumerate(employees)
        ]
        for future in futures:
            future.result()

    stored = engine.roles.get_critical_role(COMPANY, role.id)
    assert sorted(s.employee_id for s in stored.successors) == employees
    assert stored.bench_strength == 5
    assert stored.version == 6


def test_parallel_add_member(engine):
    pool = engine.talent_pools.create_talent_pool(
        COMPANY, TalentPoolInput(name="Leaders", pool_type=TalentPoolType.LEADERSHIP)
    )

    def add(employee_id: str):
        return engine.talent_pools.add_member(
            COMPANY,
            pool.id,
            TalentPoolMemberInput(employee_id=employee_id, employee_name=employee_id, current_position="Lead"),
            NineBoxCategory.HIGH_POTENTIAL,
            ReadinessLevel.READY_1_YEAR,
        )

    with ThreadPoolExecutor(max_workers=5) as executor:
        list(executor.map(add, [f"emp_{i}" for i in range(5)]))

    stored = engine.talent_pools.get_talent_pool(COMPANY, pool.id)
    assert stored.member_count == 5
    assert stored.ready_1_year_count == 5


def _add_successors_in_process(base_dir: str, role_id: str, worker: int, count: int) -> None:
    service = CriticalRoleService(
        ObjectStore(base_dir),
        {"concurrency": {"max_attempts": 200, "wait_min": 0.001, "wait_max": 0.05}},
    )
    for i in range(count):
        employee_id = f"emp_{worker}_{i}"
        service.add_successor(
            COMPANY,
            role_id,
            SuccessorCandidateInput(
                employee_id=employee_id,
                employee_name=employee_id,
                current_position="Director",
                current_department="Finance",
                readiness_level=ReadinessLevel.READY_1_YEAR,
                readiness_assessment=ReadinessAssessment(
                    leadership_competencies=70,
                    technical_expertise=70,
                    business_acumen=70,
                    stakeholder_management=70,
                    strategic_thinking=70,
                    team_management=70,
                ),
                performance_rating=4,
                potential_rating=PotentialRating.HIGH,
                rank=i + 1,
            ),
        )


@pytest.mark.skipif(sys.platform == "win32", reason="needs the fork start method")
def test_processes_sharing_a_store_keep_every_successor(tmp_path, make_role_input):
    base_dir = tmp_path / "shared"
    service = CriticalRoleService(ObjectStore(base_dir))
    role = service.create_critical_role(COMPANY, make_role_input())
    workers, per_worker = 4, 5

    ctx = multiprocessing.get_context("fork")
    processes = [
        ctx.Process(target=_add_successors_in_process, args=(str(base_dir), role.id, worker, per_worker))
        for worker in range(workers)
    ]
    for process in processes:
        process.start()
    for process in processes:
        process.join(timeout=120)

    assert [process.exitcode for process in processes] == [0] * workers
    stored = service.get_critical_role(COMPANY, role.id)
    expected = sorted(f"emp_{w}_{i}" for w in range(workers) for i in range(per_worker))
    assert sorted(s.employee_id for s in stored.successors) == expected
    assert stored.version == workers * per_worker + 1
