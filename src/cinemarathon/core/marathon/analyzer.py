"""Plan analysis."""

from __future__ import annotations

from cinemarathon.shared.constants import MarathonDefaults, QualityLabels
from cinemarathon.shared.models import Plan, PlanReport

from .formatting import format_minutes


def analyze_plan(plan: Plan) -> PlanReport:
    """Derive summary statistics from a plan.

    ``time_utilization`` is the share of the budget used, 0 for a
    non-positive budget. ``quality`` is Excellent when the average rating
    reaches 7.5.
    """
    utilization = plan.total_duration / plan.budget if plan.budget > 0 else 0.0
    excellent = sum(
        1
        for item in plan.items
        if item.rating is not None and item.rating >= MarathonDefaults.EXCELLENT_RATING
    )
    quality = (
        QualityLabels.EXCELLENT
        if plan.average_rating >= MarathonDefaults.EXCELLENT_PLAN_AVERAGE
        else QualityLabels.GOOD
    )
    return PlanReport(
        time_utilization=utilization,
        excellent_count=excellent,
        free_time=format_minutes(plan.remaining),
        quality=quality,
    )
