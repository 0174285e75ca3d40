"""CLI interface for SPTP using Typer."""

import json
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from ..core.config.loader import load_config
from ..core.engine import SuccessionEngine
from ..core.errors import SuccessionError
from ..core.models.enums import (
    CriticalityLevel,
    DevelopmentPlanStatus,
    SuccessionPlanStatus,
    SuccessionRisk,
)
from ..core.models.inputs import (
    CriticalRoleFilters,
    DevelopmentPlanFilters,
    SuccessionPlanInput,
)
from ..observability.logger import get_logger, setup_logging_from_config

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="sptp",
    help="Succession Planning & Talent Pipeline - critical roles, successors and bench strength",
    add_completion=False,
)

RISK_STYLES = {
    SuccessionRisk.LOW.value: "green",
    SuccessionRisk.MEDIUM.value: "yellow",
    SuccessionRisk.HIGH.value: "red",
    SuccessionRisk.CRITICAL.value: "bold red",
}

CompanyOption = Annotated[str, typer.Option("--company", "-c", help="Company identifier")]


def _get_engine(company_id: str | None = None) -> SuccessionEngine:
    """Build the engine from config, applying the configured log settings."""
    config = load_config(company_id=company_id)
    setup_logging_from_config(config)
    return SuccessionEngine.from_config(config)


def _risk(value: str) -> str:
    return f"[{RISK_STYLES.get(value, 'white')}]{value}[/]"


def _fail(error: Exception) -> NoReturn:
    logger.warning("cli_command_failed", error=str(error))
    console.print(f"[red]! Error:[/red] {error}")
    raise typer.Exit(code=1)


@app.command()
def init_store(company: CompanyOption = "default"):
    """Initialize the object store directory."""
    engine = _get_engine(company)
    engine.store.base_dir.mkdir(parents=True, exist_ok=True)
    console.print("[green]Object store ready at[/green]", engine.store.base_dir)


@app.command()
def roles(
    company: CompanyOption,
    department: Annotated[str | None, typer.Option("--department", "-d", help="Department id")] = None,
    level: Annotated[CriticalityLevel | None, typer.Option("--level", "-l", help="Criticality level")] = None,
    risk: Annotated[SuccessionRisk | None, typer.Option("--risk", "-r", help="Succession risk")] = None,
    has_successor: Annotated[
        bool | None,
        typer.Option("--has-successor/--no-successor", help="Only roles with / without successors"),
    ] = None,
):
    """List active critical roles, most critical first."""
    engine = _get_engine(company)
    filters = CriticalRoleFilters(
        department_id=department,
        criticality_level=level,
        succession_risk=risk,
        has_successor=has_successor,
    )
    found = engine.roles.list_critical_roles(company, filters)

    if not found:
        console.print(f"[yellow]No critical roles found for company:[/yellow] {company}")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Role ID", style="dim")
    table.add_column("Position")
    table.add_column("Department")
    table.add_column("Criticality", justify="right")
    table.add_column("Risk")
    table.add_column("Successors", justify="right")
    table.add_column("Bench", justify="right")

    for role in found:
        table.add_row(
            role.id,
            role.position_title,
            role.department_name,
            str(role.criticality_score),
            _risk(role.succession_risk),
            str(len(role.successors)),
            str(role.bench_strength),
        )

    console.print(table)


@app.command()
def role(
    company: CompanyOption,
    role_id: Annotated[str, typer.Argument(help="Critical role id")],
):
    """Show one critical role and its ranked successors."""
    engine = _get_engine(company)
    try:
        found = engine.roles.get_critical_role(company, role_id)
    except SuccessionError as e:
        _fail(e)

    console.print(f"\n[bold blue]{found.position_title}[/bold blue] ({found.department_name})")
    console.print(
        f"Criticality {found.criticality_score}/100 | Risk {_risk(found.succession_risk)} | "
        f"Bench strength {found.bench_strength}"
    )

    if not found.successors:
        console.print("[yellow]No successors nominated[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Rank", style="dim", width=6)
    table.add_column("Employee")
    table.add_column("Readiness")
    table.add_column("Score", justify="right")
    table.add_column("Nine-box")
    table.add_column("Flight risk")

    for successor in found.successors:
        table.add_row(
            str(successor.rank),
            successor.employee_name,
            successor.readiness_level,
            str(successor.readiness_score),
            successor.nine_box_category,
            successor.flight_risk,
        )

    console.print(table)


@app.command()
def plans(
    company: CompanyOption,
    employee: Annotated[str | None, typer.Option("--employee", "-e", help="Employee id")] = None,
    status: Annotated[DevelopmentPlanStatus | None, typer.Option("--status", "-s", help="Plan status")] = None,
    target_role: Annotated[str | None, typer.Option("--target-role", "-t", help="Target role id")] = None,
):
    """List development plans, newest first."""
    engine = _get_engine(company)
    filters = DevelopmentPlanFilters(employee_id=employee, status=status, target_role_id=target_role)
    found = engine.development_plans.list_development_plans(company, filters)

    if not found:
        console.print(f"[yellow]No development plans found for company:[/yellow] {company}")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Plan ID", style="dim")
    table.add_column("Employee")
    table.add_column("Target role")
    table.add_column("Status")
    table.add_column("Progress", justify="right")
    table.add_column("Actions", justify="right")

    for plan in found:
        table.add_row(
            plan.id,
            plan.employee_name,
            plan.target_role_title or "-",
            plan.status,
            f"{plan.overall_progress}%",
            str(len(plan.actions)),
        )

    console.print(table)


@app.command()
def pools(company: CompanyOption):
    """List active talent pools."""
    engine = _get_engine(company)
    found = engine.talent_pools.list_talent_pools(company)

    if not found:
        console.print(f"[yellow]No talent pools found for company:[/yellow] {company}")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Pool ID", style="dim")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Members", justify="right")
    table.add_column("Ready now", justify="right")
    table.add_column("Ready 1y", justify="right")
    table.add_column("Next review")

    for pool in found:
        table.add_row(
            pool.id,
            pool.name,
            pool.pool_type,
            str(pool.member_count),
            str(pool.ready_now_count),
            str(pool.ready_1_year_count),
            pool.next_review_date.date().isoformat() if pool.next_review_date else "-",
        )

    console.print(table)


@app.command("compile")
def compile_plan_cmd(
    company: CompanyOption,
    name: Annotated[str, typer.Option("--name", "-n", help="Plan name")],
    role_ids: Annotated[list[str], typer.Option("--role", "-r", help="Critical role id (repeatable)")],
    fiscal_year: Annotated[str | None, typer.Option("--fiscal-year", "-y", help="Fiscal year")] = None,
):
    """Compile a succession plan from a set of critical roles."""
    engine = _get_engine(company)
    plan = engine.succession_plans.create_succession_plan(
        company,
        SuccessionPlanInput(name=name, fiscal_year=fiscal_year, critical_role_ids=role_ids),
    )

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Plan ID", plan.id)
    table.add_row("Critical roles", str(plan.total_critical_roles))
    table.add_row("With successors", str(plan.roles_with_successors))
    table.add_row("Ready-now coverage", f"{plan.ready_now_coverage}%")
    table.add_row("Average bench strength", f"{plan.average_bench_strength:.1f}")
    table.add_row("High-risk roles", str(plan.high_risk_roles))
    console.print(table)


@app.command()
def plan_status(
    company: CompanyOption,
    plan_id: Annotated[str, typer.Argument(help="Succession plan id")],
    status: Annotated[SuccessionPlanStatus, typer.Option("--status", "-s", help="New status")],
    user: Annotated[str | None, typer.Option("--user", "-u", help="Approving user id")] = None,
):
    """Move a succession plan through review."""
    engine = _get_engine(company)
    try:
        plan = engine.succession_plans.update_plan_status(company, plan_id, status, user)
    except SuccessionError as e:
        _fail(e)
    console.print(f"[green]Plan {plan.id} is now[/green] {plan.status}")


@app.command()
def analytics(
    company: CompanyOption,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Path to save analytics JSON"),
    ] = None,
):
    """Show the company-wide succession snapshot."""
    engine = _get_engine(company)
    snapshot = engine.analytics.aggregate(company)

    console.print(f"\n[bold blue]Succession analytics for:[/bold blue] {company}")
    summary = Table(show_header=False)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Critical roles", str(snapshot.total_critical_roles))
    summary.add_row("With ready-now successor", str(snapshot.roles_with_ready_successor))
    summary.add_row("Pipeline only", str(snapshot.roles_with_pipeline_successor))
    summary.add_row("No successor", str(snapshot.roles_with_no_successor))
    summary.add_row("Overall coverage", f"{snapshot.overall_coverage}%")
    summary.add_row("Active development plans", str(snapshot.active_development_plans))
    summary.add_row("On track / at risk", f"{snapshot.on_track_plans} / {snapshot.at_risk_plans}")
    console.print(summary)

    for title, distribution in (
        ("Risk", snapshot.risk_distribution),
        ("Readiness", snapshot.readiness_distribution),
        ("Nine-box", snapshot.nine_box_distribution),
    ):
        table = Table(show_header=True, header_style="bold magenta", title=title)
        table.add_column("Bucket")
        table.add_column("Count", justify="right")
        for bucket, count in distribution.items():
            table.add_row(bucket, str(count))
        console.print(table)

    if output_file:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(json.dumps(snapshot.model_dump(mode="json"), indent=2), encoding="utf-8")
            console.print(f"\n[green]Analytics saved to:[/green] {output_file}")
        except OSError as e:
            console.print(f"\n[red]! Error saving analytics:[/red] {e}")
            raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
