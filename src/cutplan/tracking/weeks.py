"""Week-axis arithmetic relative to the plan epoch.

Every date in the plan is positioned on a single axis measured in weeks
since the epoch (the day tracking started). Weigh-ins land on fractional
weeks rounded to one decimal; projection points and chart rows sit on
whole weeks.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Union

from cutplan.tracking.models import Observation
from cutplan.tracking.rounding import round_tenth

DAYS_PER_WEEK = 7


def week_number(measured_at: date, epoch: date) -> float:
    """
    Fractional weeks elapsed since the epoch, rounded half-up to 1 decimal.

    Example:
        >>> week_number(date(2025, 11, 14), date(2025, 9, 10))
        9.3
    """
    return round_tenth((measured_at - epoch).days / DAYS_PER_WEEK)


def date_for_week(week: int, epoch: date) -> date:
    """Calendar day at the start of an integer week."""
    return epoch + timedelta(days=week * DAYS_PER_WEEK)


def format_short_date(day: date) -> str:
    """Format a date as "M/D" without zero padding."""
    return f"{day.month}/{day.day}"


def parse_weighin_date(value: Union[str, date], epoch: date) -> date:
    """
    Parse a weigh-in date.

    Accepts ISO dates ("2025-11-14"), short "M/D" strings, or date objects.
    Short dates take the epoch's year; a month/day that falls before the
    epoch is rolled into the following year so a plan can cross New Year.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if "-" in text:
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid ISO date: '{text}'")

    parts = text.split("/")
    if len(parts) != 2:
        raise ValueError(f"Invalid date '{text}': expected M/D or YYYY-MM-DD")
    try:
        month, day = (int(p) for p in parts)
        parsed = date(epoch.year, month, day)
    except ValueError:
        raise ValueError(f"Invalid date '{text}': expected M/D or YYYY-MM-DD")

    if parsed < epoch:
        parsed = parsed.replace(year=epoch.year + 1)
    return parsed


def build_observations(
    weighins: Iterable[dict],
    epoch: date,
) -> list[Observation]:
    """
    Normalize raw weigh-in rows onto the week axis.

    Args:
        weighins: Rows with "date" and "weight" keys (optional "notes")
        epoch: Plan start date

    Returns:
        Observations sorted by date

    Raises:
        ValueError: If a row is missing a field or has a non-numeric weight
    """
    observations = []
    for row in weighins:
        if "date" not in row or "weight" not in row:
            raise ValueError(f"Weigh-in row needs 'date' and 'weight': {row}")
        measured_at = parse_weighin_date(row["date"], epoch)
        try:
            weight = float(row["weight"])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid weight for {row['date']}: {row['weight']!r}")
        notes: Optional[str] = row.get("notes")
        observations.append(
            Observation(
                measured_at=measured_at,
                weight_lbs=weight,
                week_number=week_number(measured_at, epoch),
                notes=notes,
            )
        )

    observations.sort(key=lambda o: o.measured_at)
    return observations
