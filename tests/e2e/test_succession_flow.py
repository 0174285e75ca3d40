"""End-to-end flow through the engine and the CLI with file-backed storage."""

import json

from rich.console import Console
from typer.testing import CliRunner

from sptp.cli import main as cli_main
from sptp.cli.main import app
from sptp.core.config.loader import load_config
from sptp.core.engine import SuccessionEngine
from sptp.core.models import (
    ActionStatus,
    ActionType,
    CriticalityFactor,
    CriticalityLevel,
    CriticalRoleInput,
    DevelopmentActionInput,
    DevelopmentPlanInput,
    DevelopmentPlanStatus,
    NineBoxCategory,
    PotentialRating,
    ReadinessAssessment,
    ReadinessLevel,
    SuccessionPlanInput,
    SuccessionPlanStatus,
    SuccessionRisk,
    SuccessorCandidateInput,
    SuccessorCandidateUpdate,
    TalentPoolInput,
    TalentPoolMemberInput,
    TalentPoolType,
)

COMPANY = "acme"
runner = CliRunner()


def _assessment(value: int) -> ReadinessAssessment:
    return ReadinessAssessment(
        leadership_competencies=value,
        technical_expertise=value,
        business_acumen=value,
        stakeholder_management=value,
        strategic_thinking=value,
        team_management=value,
    )


def _seed(engine: SuccessionEngine) -> dict:
    cfo = engine.roles.create_critical_role(
        COMPANY,
        CriticalRoleInput(
            position_id="pos_cfo",
            position_title="Chief Financial Officer",
            department_id="dept_fin",
            department_name="Finance",
            criticality_level=CriticalityLevel.CRITICAL,
            criticality_factors=[CriticalityFactor(factor="revenue_impact", score=5, weight=100)],
        ),
        incumbent_name="Jane Doe",
    )
    cto = engine.roles.create_critical_role(
        COMPANY,
        CriticalRoleInput(
            position_id="pos_cto",
            position_title="Chief Technology Officer",
            department_id="dept_eng",
            department_name="Engineering",
            criticality_level=CriticalityLevel.HIGH,
            criticality_factors=[CriticalityFactor(factor="scarcity", score=3, weight=100)],
        ),
    )

    cfo = engine.roles.add_successor(
        COMPANY,
        cfo.id,
        SuccessorCandidateInput(
            employee_id="emp_fd",
            employee_name="Finance Director",
            current_position="Finance Director",
            current_department="Finance",
            readiness_level=ReadinessLevel.READY_1_YEAR,
            readiness_assessment=_assessment(72),
            performance_rating=4,
            potential_rating=PotentialRating.HIGH,
            rank=1,
        ),
    )
    return {"cfo": cfo, "cto": cto}


def test_full_succession_flow(tmp_path):
    engine = SuccessionEngine.from_config(
        load_config(overrides={"storage": {"object_store_dir": str(tmp_path / "store")}})
    )
    seeded = _seed(engine)
    cfo = seeded["cfo"]

    assert cfo.succession_risk == SuccessionRisk.MEDIUM
    assert cfo.successors[0].nine_box_category == NineBoxCategory.STAR

    # Development plan for the successor, then promote them to ready-now
    plan = engine.development_plans.create_development_plan(
        COMPANY,
        DevelopmentPlanInput(
            employee_id="emp_fd",
            target_role_id=cfo.id,
            target_role_title=cfo.position_title,
            actions=[
                DevelopmentActionInput(type=ActionType.MENTORING, title="CFO mentoring"),
                DevelopmentActionInput(type=ActionType.STRETCH_ASSIGNMENT, title="Lead the audit"),
            ],
        ),
        employee_name="Finance Director",
    )
    for action in plan.actions:
        plan = engine.development_plans.update_action_progress(
            COMPANY, plan.id, action.id, 100, ActionStatus.COMPLETED
        )
    assert plan.status == DevelopmentPlanStatus.COMPLETED

    cfo = engine.roles.update_successor(
        COMPANY,
        cfo.id,
        cfo.successors[0].id,
        SuccessorCandidateUpdate(readiness_level=ReadinessLevel.READY_NOW),
    )
    assert cfo.succession_risk == SuccessionRisk.LOW
    assert cfo.bench_strength == 1

    pool = engine.talent_pools.create_talent_pool(
        COMPANY, TalentPoolInput(name="C-suite bench", pool_type=TalentPoolType.LEADERSHIP)
    )
    pool = engine.talent_pools.add_member(
        COMPANY,
        pool.id,
        TalentPoolMemberInput(employee_id="emp_fd", employee_name="Finance Director", current_position="Finance Director"),
        cfo.successors[0].nine_box_category,
        cfo.successors[0].readiness_level,
    )
    assert pool.ready_now_count == 1

    succession_plan = engine.succession_plans.create_succession_plan(
        COMPANY,
        SuccessionPlanInput(name="FY27", critical_role_ids=[cfo.id, seeded["cto"].id]),
    )
    assert succession_plan.ready_now_coverage == 50
    assert succession_plan.high_risk_roles == 1

    approved = engine.succession_plans.update_plan_status(
        COMPANY, succession_plan.id, SuccessionPlanStatus.APPROVED, "ceo"
    )
    assert approved.approved_by == "ceo"

    snapshot = engine.analytics.aggregate(COMPANY)
    assert snapshot.total_critical_roles == 2
    assert snapshot.overall_coverage == 50
    assert snapshot.risk_distribution["critical"] == 1
    assert snapshot.active_development_plans == 0


def test_cli_commands(tmp_path, monkeypatch):
    store_dir = tmp_path / "store"
    monkeypatch.setenv("SPTP_STORAGE__OBJECT_STORE_DIR", str(store_dir))
    # Wide enough that table cells are not wrapped
    monkeypatch.setattr(cli_main, "console", Console(width=200))
    # Keep pytest's log handlers instead of binding them to the runner's stream
    monkeypatch.setattr(cli_main, "setup_logging_from_config", lambda config: None)
    engine = SuccessionEngine.from_config(load_config())
    seeded = _seed(engine)
    cfo_id = seeded["cfo"].id

    result = runner.invoke(app, ["roles", "--company", COMPANY])
    assert result.exit_code == 0
    assert "Chief Financial Officer" in result.stdout

    result = runner.invoke(app, ["roles", "--company", COMPANY, "--risk", "critical"])
    assert result.exit_code == 0
    assert "Chief Technology Officer" in result.stdout
    assert "Chief Financial Officer" not in result.stdout

    result = runner.invoke(app, ["role", cfo_id, "--company", COMPANY])
    assert result.exit_code == 0
    assert "Finance Director" in result.stdout

    result = runner.invoke(app, ["role", "missing", "--company", COMPANY])
    assert result.exit_code == 1

    result = runner.invoke(
        app, ["compile", "--company", COMPANY, "--name", "FY27", "--role", cfo_id, "--role", seeded["cto"].id]
    )
    assert result.exit_code == 0
    assert "Ready-now coverage" in result.stdout

    output = tmp_path / "analytics.json"
    result = runner.invoke(app, ["analytics", "--company", COMPANY, "--output", str(output)])
    assert result.exit_code == 0
    data = json.loads(output.read_text())
    assert data["total_critical_roles"] == 2
    assert data["risk_distribution"]["medium"] == 1

    result = runner.invoke(app, ["pools", "--company", COMPANY])
    assert result.exit_code == 0
    assert "No talent pools" in result.stdout


def test_compile_command_does_not_shadow_builtin():
    names = {command.name for command in app.registered_commands}
    assert "compile" in names
    assert not hasattr(cli_main, "compile")
    assert cli_main.compile_plan_cmd.__name__ == "compile_plan_cmd"
