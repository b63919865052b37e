"""Trailing-window TDEE estimation from observed weight change.

Given weigh-ins and an assumed constant daily intake, the energy
expenditure follows from the energy balance:

    TDEE = intake + deficit
    deficit = (weight_lost × 3500) / days

The deficit is measured as a backward difference between the latest
weigh-in and the newest weigh-in at least `window_weeks` older. This
reacts to the last few weeks rather than smoothing over the whole
history.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cutplan.tracking.models import ExpenditureEstimate, Observation
from cutplan.tracking.rounding import round_half_up, round_tenth

logger = logging.getLogger(__name__)

# 3500 kcal ≈ 1 lb of body mass
CALORIES_PER_LB = 3500

DEFAULT_WINDOW_WEEKS = 4.0

# What to do when no weigh-in is old enough to span the full window
FALLBACK_OLDEST = "oldest"
FALLBACK_NONE = "none"
VALID_FALLBACKS = (FALLBACK_OLDEST, FALLBACK_NONE)


def find_window_start(
    observations: Sequence[Observation],
    window_weeks: float = DEFAULT_WINDOW_WEEKS,
    fallback: str = FALLBACK_OLDEST,
) -> Optional[Observation]:
    """
    Pick the observation that opens the trailing window.

    Scans from newest to oldest and returns the first observation at or
    before `latest.week_number - window_weeks`. When the history is too
    short, `fallback="oldest"` uses the first observation and
    `fallback="none"` returns None.
    """
    if fallback not in VALID_FALLBACKS:
        raise ValueError(f"fallback must be one of {VALID_FALLBACKS}, got '{fallback}'")
    if not observations:
        return None

    target_week = observations[-1].week_number - window_weeks
    for obs in reversed(observations):
        if obs.week_number <= target_week:
            return obs

    if fallback == FALLBACK_NONE:
        return None
    logger.debug(
        "No weigh-in at or before week %.1f, falling back to oldest (week %.1f)",
        target_week,
        observations[0].week_number,
    )
    return observations[0]


def estimate_expenditure(
    observations: Sequence[Observation],
    daily_intake: float,
    window_weeks: float = DEFAULT_WINDOW_WEEKS,
    fallback: str = FALLBACK_OLDEST,
) -> Optional[ExpenditureEstimate]:
    """
    Estimate TDEE from the weight change over a trailing window.

    Args:
        observations: Weigh-ins in chronological order
        daily_intake: Assumed average daily calorie intake (kcal/day)
        window_weeks: Length of the trailing window in weeks
        fallback: Policy when the history is shorter than the window,
                  "oldest" (use everything available) or "none"

    Returns:
        ExpenditureEstimate, or None if there are fewer than two weigh-ins
        or the window spans no time

    Example:
        >>> obs = [Observation(date(2025, 9, 10), 255, 0.0),
        ...        Observation(date(2025, 9, 17), 250, 1.0)]
        >>> estimate_expenditure(obs, 1200)
        ExpenditureEstimate(tdee=3700, daily_deficit=2500, weekly_loss_rate=5.0, weeks_analyzed=1.0)
    """
    if len(observations) < 2:
        return None

    latest = observations[-1]
    earlier = find_window_start(observations, window_weeks, fallback)
    if earlier is None:
        return None

    weeks_diff = latest.week_number - earlier.week_number
    if weeks_diff <= 0:
        return None

    weight_loss = earlier.weight_lbs - latest.weight_lbs
    total_deficit = weight_loss * CALORIES_PER_LB
    daily_deficit = total_deficit / (weeks_diff * 7)
    tdee = daily_intake + daily_deficit

    logger.debug(
        "Window %s -> %s: %.1f lbs over %.1f weeks, deficit %.0f kcal/day",
        earlier.measured_at,
        latest.measured_at,
        weight_loss,
        weeks_diff,
        daily_deficit,
    )

    return ExpenditureEstimate(
        tdee=round_half_up(tdee),
        daily_deficit=round_half_up(daily_deficit),
        weekly_loss_rate=round_tenth(weight_loss / weeks_diff),
        weeks_analyzed=round_tenth(weeks_diff),
    )
