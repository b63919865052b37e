"""Estimate -> project -> merge, producing everything the dashboard shows."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from cutplan.config.settings import Settings
from cutplan.tracking.estimator import estimate_expenditure
from cutplan.tracking.models import (
    Observation,
    PhaseDefinition,
    PhaseSummary,
    ProjectionPoint,
    TrajectoryReport,
)
from cutplan.tracking.projector import project_phases
from cutplan.tracking.series import merge_weekly_series

logger = logging.getLogger(__name__)


def summarize_phases(
    current_weight: float,
    phases: Sequence[PhaseDefinition],
    projection: Sequence[ProjectionPoint],
) -> list[PhaseSummary]:
    """
    Per-phase display figures.

    The first phase starts at the current weight; each later phase starts
    at the previous bound (or the current weight, if lower). The estimated
    duration is `ceil(band / weekly rate)`, zero for phases already done.
    """
    summaries = []
    upper = current_weight
    for phase in phases:
        band = max(upper - phase.lower_bound_lbs, 0.0)
        summaries.append(
            PhaseSummary(
                phase=phase,
                upper_bound_lbs=upper,
                estimated_weeks=math.ceil(band / phase.weekly_loss_lbs),
                projected_weeks=sum(1 for p in projection if p.phase == phase.phase_id),
            )
        )
        upper = min(upper, phase.lower_bound_lbs)
    return summaries


def run_pipeline(
    observations: Sequence[Observation],
    settings: Optional[Settings] = None,
) -> TrajectoryReport:
    """
    Run the full estimation and projection for a weigh-in history.

    The projection starts at the current weight on the first whole week at
    or after the latest weigh-in. When the history is too short to
    estimate expenditure, `settings.plan.fallback_tdee` is used instead.

    Args:
        observations: Weigh-ins in chronological order
        settings: Plan constants and phases (defaults if None)

    Returns:
        TrajectoryReport

    Raises:
        ValueError: If there are no observations
        PhaseConfigError: If the phases are inconsistent
    """
    if settings is None:
        settings = Settings()
    if not observations:
        raise ValueError("At least one weigh-in is required")

    plan = settings.plan
    observations = list(observations)
    latest = observations[-1]
    notes: list[str] = []

    estimate = estimate_expenditure(
        observations,
        plan.daily_intake,
        plan.window_weeks,
        fallback=plan.estimator_fallback,
    )
    if estimate is None:
        baseline_tdee = plan.fallback_tdee
        logger.warning(
            "Not enough weigh-ins to estimate TDEE, using fallback %.0f kcal/day",
            baseline_tdee,
        )
        notes.append(
            f"Not enough weigh-ins to estimate TDEE; using {baseline_tdee:.0f} kcal/day"
        )
    else:
        baseline_tdee = estimate.tdee
        if estimate.weeks_analyzed < plan.window_weeks:
            notes.append(
                f"History shorter than {plan.window_weeks:g} weeks; "
                f"TDEE based on {estimate.weeks_analyzed:g} weeks"
            )

    start_week = math.ceil(latest.week_number)
    projection = project_phases(
        current_weight=latest.weight_lbs,
        baseline_tdee=baseline_tdee,
        phases=settings.phases,
        epoch=plan.epoch,
        start_week=start_week,
        adaptation_per_lb=plan.adaptation_per_lb,
    )
    if not projection:
        notes.append("Goal weight already reached; nothing to project")

    weekly_rows = merge_weekly_series(
        observations,
        projection,
        plan.epoch,
        default_horizon_weeks=plan.default_horizon_weeks,
    )

    logger.debug(
        "Pipeline: %d weigh-ins, TDEE %.0f, %d projected weeks, %d chart rows",
        len(observations),
        baseline_tdee,
        len(projection),
        len(weekly_rows),
    )

    return TrajectoryReport(
        epoch=plan.epoch,
        observations=observations,
        estimate=estimate,
        baseline_tdee=baseline_tdee,
        used_fallback_tdee=estimate is None,
        projection=projection,
        weekly_rows=weekly_rows,
        phase_summaries=summarize_phases(latest.weight_lbs, settings.phases, projection),
        daily_intake=plan.daily_intake,
        window_weeks=plan.window_weeks,
        adaptation_per_lb=plan.adaptation_per_lb,
        notes=notes,
    )


def report_to_dict(report: TrajectoryReport) -> dict:
    """Convert a TrajectoryReport to plain data for JSON output."""
    estimate = report.estimate
    current_phase = report.current_phase
    next_milestone = report.next_milestone
    return {
        "epoch": report.epoch.isoformat(),
        "estimate": {
            "tdee": estimate.tdee,
            "daily_deficit": estimate.daily_deficit,
            "weekly_loss_rate": estimate.weekly_loss_rate,
            "weeks_analyzed": estimate.weeks_analyzed,
        } if estimate else None,
        "baseline_tdee": report.baseline_tdee,
        "used_fallback_tdee": report.used_fallback_tdee,
        "summary": {
            "start_weight_lbs": report.start_weight,
            "current_weight_lbs": report.current_weight,
            "current_week": report.current_week,
            "total_lost_lbs": report.total_lost,
            "to_first_milestone_lbs": report.to_first_milestone,
            "goal_weight_lbs": report.goal_weight,
            "current_phase": current_phase.phase_id if current_phase else None,
            "next_milestone_lbs": (
                next_milestone.lower_bound_lbs if next_milestone else None
            ),
            "final_week": report.final_week,
        },
        "phases": [
            {
                "id": s.phase.phase_id,
                "name": s.phase.name,
                "upper_bound_lbs": s.upper_bound_lbs,
                "lower_bound_lbs": s.phase.lower_bound_lbs,
                "weekly_loss_lbs": s.phase.weekly_loss_lbs,
                "estimated_weeks": s.estimated_weeks,
                "projected_weeks": s.projected_weeks,
            }
            for s in report.phase_summaries
        ],
        "projection": [
            {
                "week_number": p.week_number,
                "date": p.date.isoformat(),
                "weight_lbs": p.weight_lbs,
                "phase": p.phase,
                "tdee": p.tdee,
                "daily_calories": p.daily_calories,
                "deficit": p.deficit,
                "weekly_loss_lbs": p.weekly_loss_lbs,
            }
            for p in report.projection
        ],
        "weekly_rows": [row.to_dict() for row in report.weekly_rows],
        "notes": report.notes,
    }
