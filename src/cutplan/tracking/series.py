"""Align weigh-ins and projection onto one weekly x-axis for charting."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from cutplan.tracking.models import Observation, ProjectionPoint, WeeklyRow
from cutplan.tracking.weeks import date_for_week, format_short_date

# Chart span when there is nothing left to project
DEFAULT_HORIZON_WEEKS = 60


def find_observation_near(
    observations: Sequence[Observation], week: int
) -> Optional[Observation]:
    """First observation within half a week of `week`."""
    for obs in observations:
        if abs(obs.week_number - week) < 0.5:
            return obs
    return None


def merge_weekly_series(
    observations: Sequence[Observation],
    projection: Sequence[ProjectionPoint],
    epoch: date,
    default_horizon_weeks: int = DEFAULT_HORIZON_WEEKS,
) -> list[WeeklyRow]:
    """
    Build one row per integer week from 0 through the last projected week.

    Args:
        observations: Weigh-ins on the fractional week axis
        projection: Projection points on integer weeks
        epoch: Plan start date
        default_horizon_weeks: Last week when the projection is empty

    Returns:
        Rows with consecutive week numbers starting at 0. `weight` is set
        where a weigh-in lies within 0.5 week, `projected` where a
        projection point sits on exactly that week.
    """
    final_week = projection[-1].week_number if projection else default_horizon_weeks
    projected_by_week = {}
    for point in projection:
        projected_by_week.setdefault(point.week_number, point)

    rows = []
    for week in range(0, final_week + 1):
        actual = find_observation_near(observations, week)
        projected = projected_by_week.get(week)
        rows.append(
            WeeklyRow(
                week_number=week,
                date=format_short_date(date_for_week(week, epoch)),
                weight=actual.weight_lbs if actual else None,
                projected=projected.weight_lbs if projected else None,
            )
        )
    return rows
