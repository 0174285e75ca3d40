"""Development plan progress and status derivation."""

from collections.abc import Sequence

from ..models.base import round_half_up
from ..models.development_plan import DevelopmentAction
from ..models.enums import ActionStatus, DevelopmentPlanStatus


def overall_progress(actions: Sequence[DevelopmentAction]) -> int:
    """Rounded mean progress of every action; 0 for a plan without actions."""
    if not actions:
        return 0
    return int(round_half_up(sum(a.progress for a in actions) / len(actions)))


def plan_status(
    actions: Sequence[DevelopmentAction],
    current: DevelopmentPlanStatus | str,
) -> DevelopmentPlanStatus | str:
    """Derive plan status from its actions.

    completed when every action is completed, active when any action is in
    progress, otherwise the current status is kept.
    """
    if actions and all(a.status == ActionStatus.COMPLETED for a in actions):
        return DevelopmentPlanStatus.COMPLETED
    if any(a.status == ActionStatus.IN_PROGRESS for a in actions):
        return DevelopmentPlanStatus.ACTIVE
    return current
