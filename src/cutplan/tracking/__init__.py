"""Weight trajectory estimation and projection.

Key components:
- Week-axis normalization relative to the plan epoch
- Trailing-window TDEE estimator (3500 kcal/lb energy balance)
- Phased projector with metabolic adaptation (22 kcal/day per lb lost)
- Weekly series merge for charting
"""

from __future__ import annotations

from cutplan.tracking.estimator import estimate_expenditure
from cutplan.tracking.models import (
    ExpenditureEstimate,
    Observation,
    PhaseConfigError,
    PhaseDefinition,
    ProjectionPoint,
    TrajectoryReport,
    WeeklyRow,
)
from cutplan.tracking.projector import project_phases
from cutplan.tracking.series import merge_weekly_series

__all__ = [
    "ExpenditureEstimate",
    "Observation",
    "PhaseConfigError",
    "PhaseDefinition",
    "ProjectionPoint",
    "TrajectoryReport",
    "WeeklyRow",
    "estimate_expenditure",
    "merge_weekly_series",
    "project_phases",
]
