"""Succession engine services: registry, tracker, pools, compiler, analytics."""

from .analytics import AnalyticsService
from .critical_roles import CriticalRoleService
from .development_plans import DevelopmentPlanService
from .succession_plans import SuccessionPlanService, compile_plan
from .talent_pools import TalentPoolService, next_review_date

__all__ = [
    "AnalyticsService",
    "CriticalRoleService",
    "DevelopmentPlanService",
    "SuccessionPlanService",
    "TalentPoolService",
    "compile_plan",
    "next_review_date",
]
