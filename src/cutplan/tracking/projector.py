"""Week-by-week weight projection across ordered loss phases.

Each phase loses a fixed amount per week until the projected weight
reaches the phase's lower bound; the running weight and week counter
carry over into the next phase. Expenditure is modelled as falling by
a fixed amount per pound already lost (metabolic adaptation):

    adjusted_tdee = baseline_tdee - (current_weight - weight) × 22
    daily_calories = adjusted_tdee - weekly_loss × 3500 / 7
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from cutplan.tracking.estimator import CALORIES_PER_LB
from cutplan.tracking.models import PhaseDefinition, ProjectionPoint, validate_phases
from cutplan.tracking.rounding import round_half_up, round_tenth
from cutplan.tracking.weeks import date_for_week

logger = logging.getLogger(__name__)

# kcal/day of expenditure lost per pound of body weight lost
DEFAULT_ADAPTATION_PER_LB = 22.0


def daily_deficit_for_rate(weekly_loss_lbs: float) -> float:
    """Daily calorie deficit needed to lose `weekly_loss_lbs` per week."""
    return (weekly_loss_lbs * CALORIES_PER_LB) / 7


def project_phases(
    current_weight: float,
    baseline_tdee: float,
    phases: Sequence[PhaseDefinition],
    epoch: date,
    start_week: int = 0,
    adaptation_per_lb: float = DEFAULT_ADAPTATION_PER_LB,
) -> list[ProjectionPoint]:
    """
    Project weekly weights from `current_weight` through every phase.

    Args:
        current_weight: Weight at the start of the projection (lbs)
        baseline_tdee: Expenditure at `current_weight` (kcal/day)
        phases: Phase definitions in plan order
        epoch: Plan start date, used to date each projected week
        start_week: Integer week of the first projected point
        adaptation_per_lb: Expenditure drop per pound lost (kcal/day)

    Returns:
        Projection points with consecutive week numbers. A phase whose
        lower bound is already at or above the running weight emits
        nothing.

    Raises:
        PhaseConfigError: If the phases could not terminate
    """
    validate_phases(list(phases))

    points: list[ProjectionPoint] = []
    weight = current_weight
    week = start_week

    for phase in phases:
        deficit = daily_deficit_for_rate(phase.weekly_loss_lbs)
        emitted = 0

        while weight > phase.lower_bound_lbs:
            cumulative_loss = current_weight - weight
            tdee = baseline_tdee - cumulative_loss * adaptation_per_lb
            daily_calories = tdee - deficit

            points.append(
                ProjectionPoint(
                    week_number=week,
                    weight_lbs=round_tenth(weight),
                    date=date_for_week(week, epoch),
                    phase=phase.phase_id,
                    tdee=round_half_up(tdee),
                    daily_calories=round_half_up(daily_calories),
                    deficit=round_half_up(deficit),
                    weekly_loss_lbs=phase.weekly_loss_lbs,
                )
            )
            emitted += 1

            weight -= phase.weekly_loss_lbs
            week += 1

        logger.debug("%s: %d projected weeks", phase.label, emitted)

    return points
