"""Data models for weigh-ins, TDEE estimates and phased projections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from cutplan.tracking.rounding import round_tenth


class PhaseConfigError(ValueError):
    """Raised when a phase list could not produce a terminating projection."""


@dataclass(frozen=True)
class Observation:
    """A single weigh-in, positioned on the plan's week axis."""

    measured_at: date
    weight_lbs: float
    week_number: float  # fractional weeks since the plan epoch, 1 decimal
    notes: Optional[str] = None


@dataclass(frozen=True)
class ExpenditureEstimate:
    """TDEE estimated from observed weight change over a trailing window."""

    tdee: int
    daily_deficit: int
    weekly_loss_rate: float
    weeks_analyzed: float


@dataclass(frozen=True)
class PhaseDefinition:
    """One leg of the plan: lose `weekly_loss_lbs` per week until `lower_bound_lbs`."""

    phase_id: int
    lower_bound_lbs: float
    weekly_loss_lbs: float
    name: str = ""
    strategy: str = ""
    goal: str = ""

    def __post_init__(self) -> None:
        if self.weekly_loss_lbs <= 0:
            raise PhaseConfigError(
                f"Phase {self.phase_id}: weekly_loss_lbs must be positive, "
                f"got {self.weekly_loss_lbs}"
            )
        if self.lower_bound_lbs <= 0:
            raise PhaseConfigError(
                f"Phase {self.phase_id}: lower_bound_lbs must be positive, "
                f"got {self.lower_bound_lbs}"
            )

    @property
    def label(self) -> str:
        if self.name:
            return f"Phase {self.phase_id}: {self.name}"
        return f"Phase {self.phase_id}"


def validate_phases(phases: list[PhaseDefinition]) -> list[PhaseDefinition]:
    """Check that phases are ordered, contiguous and strictly descending.

    Args:
        phases: Phase definitions in plan order

    Returns:
        The same list, for chaining

    Raises:
        PhaseConfigError: If the list is empty, ids are not increasing, or
            lower bounds are not strictly decreasing
    """
    if not phases:
        raise PhaseConfigError("At least one phase is required")

    for prev, curr in zip(phases, phases[1:]):
        if curr.phase_id <= prev.phase_id:
            raise PhaseConfigError(
                f"Phase ids must increase: {prev.phase_id} is followed by {curr.phase_id}"
            )
        if curr.lower_bound_lbs >= prev.lower_bound_lbs:
            raise PhaseConfigError(
                f"Phase bounds must strictly decrease: phase {prev.phase_id} ends at "
                f"{prev.lower_bound_lbs} lbs but phase {curr.phase_id} ends at "
                f"{curr.lower_bound_lbs} lbs"
            )
    return phases


@dataclass(frozen=True)
class ProjectionPoint:
    """A single projected week."""

    week_number: int
    weight_lbs: float
    date: date
    phase: int
    tdee: int  # adjusted for metabolic adaptation
    daily_calories: int
    deficit: int
    weekly_loss_lbs: float


@dataclass(frozen=True)
class WeeklyRow:
    """One x-axis slot of the chart: actual and/or projected weight."""

    week_number: int
    date: str  # "M/D"
    weight: Optional[float] = None
    projected: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "week_number": self.week_number,
            "date": self.date,
            "weight": self.weight,
            "projected": self.projected,
        }


@dataclass(frozen=True)
class PhaseSummary:
    """Display figures for one phase."""

    phase: PhaseDefinition
    upper_bound_lbs: float
    estimated_weeks: int  # ceil(band width / weekly rate)
    projected_weeks: int  # points the projector actually emitted

    @property
    def band_lbs(self) -> float:
        return max(self.upper_bound_lbs - self.phase.lower_bound_lbs, 0.0)


@dataclass
class TrajectoryReport:
    """Everything needed to render the dashboard."""

    epoch: date
    observations: list[Observation]
    estimate: Optional[ExpenditureEstimate]
    baseline_tdee: float
    used_fallback_tdee: bool
    projection: list[ProjectionPoint]
    weekly_rows: list[WeeklyRow]
    phase_summaries: list[PhaseSummary]
    daily_intake: float
    window_weeks: float
    adaptation_per_lb: float = 22.0
    notes: list[str] = field(default_factory=list)

    @property
    def start_weight(self) -> float:
        return self.observations[0].weight_lbs

    @property
    def current_weight(self) -> float:
        return self.observations[-1].weight_lbs

    @property
    def current_week(self) -> float:
        return self.observations[-1].week_number

    @property
    def total_lost(self) -> float:
        return round_tenth(self.start_weight - self.current_weight)

    @property
    def goal_weight(self) -> float:
        return self.phase_summaries[-1].phase.lower_bound_lbs

    @property
    def final_week(self) -> int:
        return self.weekly_rows[-1].week_number if self.weekly_rows else 0

    @property
    def to_first_milestone(self) -> float:
        """Pounds left until the first phase bound (negative once past it)."""
        return round_tenth(self.current_weight - self.phase_summaries[0].phase.lower_bound_lbs)

    @property
    def current_phase(self) -> Optional[PhaseDefinition]:
        """Phase whose band contains the current weight, None once the goal is hit."""
        for summary in self.phase_summaries:
            if self.current_weight > summary.phase.lower_bound_lbs:
                return summary.phase
        return None

    @property
    def next_milestone(self) -> Optional[PhaseDefinition]:
        """Phase after the current one, None when the current phase is the last."""
        current = self.current_phase
        if current is None:
            return None
        ids = [s.phase.phase_id for s in self.phase_summaries]
        index = ids.index(current.phase_id) + 1
        return self.phase_summaries[index].phase if index < len(ids) else None
