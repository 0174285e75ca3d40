"""Development plan tracker: action progress roll-up and status transitions."""

import pytest
from pydantic import ValidationError

from sptp.core.errors import NotFoundError
from sptp.core.models import (
    ActionStatus,
    ActionType,
    DevelopmentActionInput,
    DevelopmentPlanFilters,
    DevelopmentPlanInput,
    DevelopmentPlanStatus,
    DevelopmentPlanUpdate,
)

COMPANY = "acme"


def _plan_input(employee_id: str = "emp_1", actions: int = 3, **overrides) -> DevelopmentPlanInput:
    data = {
        "employee_id": employee_id,
        "target_role_id": "role_cfo",
        "target_role_title": "Chief Financial Officer",
        "objective": "Ready for CFO within a year",
        "actions": [
            DevelopmentActionInput(type=ActionType.TRAINING, title=f"Step {i}") for i in range(1, actions + 1)
        ],
    }
    data.update(overrides)
    return DevelopmentPlanInput(**data)


def test_create_plan_starts_as_draft(engine):
    plan = engine.development_plans.create_development_plan(
        COMPANY, _plan_input(), employee_name="Sam Lee", owner_id="hr_1"
    )

    assert plan.status == DevelopmentPlanStatus.DRAFT
    assert plan.overall_progress == 0
    assert [a.id for a in plan.actions] == ["action_1", "action_2", "action_3"]
    assert all(a.status == ActionStatus.PLANNED and a.progress == 0 for a in plan.actions)
    assert plan.owner_id == "hr_1"
    assert plan.employee_name == "Sam Lee"
    assert plan.next_review_date is not None


def test_progress_rolls_up_and_drives_status(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")
    plans = engine.development_plans

    plan = plans.update_action_progress(COMPANY, plan.id, "action_2", 50, ActionStatus.IN_PROGRESS)
    assert plan.status == DevelopmentPlanStatus.ACTIVE
    assert plan.overall_progress == 17

    plan = plans.update_action_progress(
        COMPANY, plan.id, "action_3", 100, ActionStatus.COMPLETED, actual_outcome="Certified"
    )
    assert plan.overall_progress == 50
    assert plan.status == DevelopmentPlanStatus.ACTIVE
    completed = next(a for a in plan.actions if a.id == "action_3")
    assert completed.completed_at is not None
    assert completed.actual_outcome == "Certified"

    plan = plans.update_action_progress(COMPANY, plan.id, "action_1", 100, ActionStatus.COMPLETED)
    assert plan.status == DevelopmentPlanStatus.ACTIVE

    plan = plans.update_action_progress(COMPANY, plan.id, "action_2", 100, ActionStatus.COMPLETED)
    assert plan.overall_progress == 100
    assert plan.status == DevelopmentPlanStatus.COMPLETED


def test_completed_at_only_stamped_on_transition(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(actions=2), employee_name="Sam")
    plans = engine.development_plans

    plan = plans.update_action_progress(COMPANY, plan.id, "action_1", 100, ActionStatus.COMPLETED)
    first_stamp = plan.actions[0].completed_at

    plan = plans.update_action_progress(COMPANY, plan.id, "action_1", 100, ActionStatus.COMPLETED)
    assert plan.actions[0].completed_at == first_stamp


def test_progress_without_status_keeps_action_status(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    plan = engine.development_plans.update_action_progress(COMPANY, plan.id, "action_1", 30)

    assert plan.actions[0].status == ActionStatus.PLANNED
    assert plan.overall_progress == 10
    assert plan.status == DevelopmentPlanStatus.DRAFT


def test_progress_out_of_range_rejected(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    with pytest.raises(ValidationError):
        engine.development_plans.update_action_progress(COMPANY, plan.id, "action_1", 150)


def test_unknown_action_raises(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    with pytest.raises(NotFoundError):
        engine.development_plans.update_action_progress(COMPANY, plan.id, "action_9", 10)


def test_plan_without_actions_has_zero_progress(engine):
    plan = engine.development_plans.create_development_plan(
        COMPANY, _plan_input(actions=0), employee_name="Sam"
    )
    assert plan.actions == []
    assert plan.overall_progress == 0


def test_activate_and_update_descriptive_fields(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    plan = engine.development_plans.activate_plan(COMPANY, plan.id)
    assert plan.status == DevelopmentPlanStatus.ACTIVE

    plan = engine.development_plans.update_development_plan(
        COMPANY, plan.id, DevelopmentPlanUpdate(objective="Ready in six months", mentor_id="emp_9")
    )
    assert plan.objective == "Ready in six months"
    assert plan.mentor_id == "emp_9"
    assert plan.status == DevelopmentPlanStatus.ACTIVE
    assert len(plan.actions) == 3


def test_update_clears_target_role(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    plan = engine.development_plans.update_development_plan(
        COMPANY, plan.id, DevelopmentPlanUpdate(target_role_id=None, target_role_title=None)
    )

    assert plan.target_role_id is None
    assert plan.target_role_title is None
    assert plan.objective == "Ready for CFO within a year"


def test_list_filters_and_orders_newest_first(engine):
    plans = engine.development_plans
    first = plans.create_development_plan(COMPANY, _plan_input("emp_1"), employee_name="A")
    second = plans.create_development_plan(COMPANY, _plan_input("emp_2"), employee_name="B")
    third = plans.create_development_plan(
        COMPANY, _plan_input("emp_1", target_role_id="role_coo"), employee_name="A"
    )
    plans.activate_plan(COMPANY, second.id)

    assert [p.id for p in plans.list_development_plans(COMPANY)] == [third.id, second.id, first.id]
    assert [p.id for p in plans.list_development_plans(COMPANY, DevelopmentPlanFilters(employee_id="emp_1"))] == [
        third.id,
        first.id,
    ]
    assert [
        p.id
        for p in plans.list_development_plans(COMPANY, DevelopmentPlanFilters(status=DevelopmentPlanStatus.ACTIVE))
    ] == [second.id]
    assert [
        p.id for p in plans.list_development_plans(COMPANY, DevelopmentPlanFilters(target_role_id="role_coo"))
    ] == [third.id]


def test_delete_plan(engine):
    plan = engine.development_plans.create_development_plan(COMPANY, _plan_input(), employee_name="Sam")

    engine.development_plans.delete_development_plan(COMPANY, plan.id)

    with pytest.raises(NotFoundError):
        engine.development_plans.get_development_plan(COMPANY, plan.id)
    with pytest.raises(NotFoundError):
        engine.development_plans.delete_development_plan(COMPANY, plan.id)
