"""Weight trajectory chart rendered with matplotlib.

Actual weigh-ins are drawn as a purple line with markers, the projection
as a red line. Each phase's weight band is shaded and its lower bound is
marked with a dashed reference line. X ticks fall every few weeks and
are labelled with the calendar date of that week.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from cutplan.config.settings import ChartConfig  # noqa: E402
from cutplan.tracking.models import TrajectoryReport  # noqa: E402
from cutplan.tracking.weeks import date_for_week, format_short_date  # noqa: E402

logger = logging.getLogger(__name__)

ACTUAL_COLOR = "#8b5cf6"
PROJECTED_COLOR = "#ef4444"
ZONE_COLORS = ["#ef4444", "#f97316", "#22c55e", "#06b6d4", "#a855f7"]


def week_ticks(final_week: int, every: int = 4) -> list[int]:
    """Tick positions 0, every, 2*every, ... covering `final_week`."""
    every = max(every, 1)
    last = math.ceil(final_week / every) * every
    return list(range(0, last + 1, every))


def zone_bands(report: TrajectoryReport, y_max: float) -> list[tuple[float, float, str]]:
    """(low, high, color) for each phase band, top phase capped at `y_max`."""
    bands = []
    upper = y_max
    for i, summary in enumerate(report.phase_summaries):
        lower = summary.phase.lower_bound_lbs
        bands.append((lower, upper, ZONE_COLORS[i % len(ZONE_COLORS)]))
        upper = lower
    return bands


def build_chart(
    report: TrajectoryReport,
    config: Optional[ChartConfig] = None,
    show_zones: Optional[bool] = None,
) -> Figure:
    """
    Draw the trajectory chart.

    Args:
        report: Pipeline output
        config: Axis and tick settings (defaults if None)
        show_zones: Override `config.show_zones`

    Returns:
        The matplotlib Figure (caller saves/closes it)
    """
    if config is None:
        config = ChartConfig()
    if show_zones is None:
        show_zones = config.show_zones

    rows = report.weekly_rows
    fig, ax = plt.subplots(figsize=(14, 6))

    # Zones go first so the lines draw over them
    if show_zones:
        for low, high, color in zone_bands(report, config.y_max):
            ax.axhspan(low, high, color=color, alpha=0.1, linewidth=0)

    for i, summary in enumerate(report.phase_summaries):
        phase = summary.phase
        ax.axhline(
            phase.lower_bound_lbs,
            color=ZONE_COLORS[i % len(ZONE_COLORS)],
            linestyle="--",
            linewidth=1,
            label=f"{phase.lower_bound_lbs:g} lbs: {phase.goal or phase.label}",
        )

    projected = [(r.week_number, r.projected) for r in rows if r.projected is not None]
    if projected:
        ax.plot(
            [w for w, _ in projected],
            [p for _, p in projected],
            color=PROJECTED_COLOR,
            linewidth=2,
            label="Projected Weight",
        )

    # Rows without a weigh-in are skipped so the line bridges the gaps
    actual = [(r.week_number, r.weight) for r in rows if r.weight is not None]
    ax.plot(
        [w for w, _ in actual],
        [a for _, a in actual],
        color=ACTUAL_COLOR,
        linewidth=3,
        marker="o",
        markersize=5,
        label="Actual Weight",
    )

    ticks = week_ticks(report.final_week, config.tick_every_weeks)
    ax.set_xticks(ticks)
    ax.set_xticklabels(
        [format_short_date(date_for_week(w, report.epoch)) for w in ticks], fontsize=9
    )
    ax.set_xlim(0, max(ticks[-1], 1))
    ax.set_ylim(config.y_min, config.y_max)
    ax.set_ylabel("Weight (lbs)")
    ax.set_title("Weight Trajectory")
    ax.grid(True, linestyle=":", alpha=0.6)
    ax.legend(loc="upper right", fontsize=9)
    fig.tight_layout()
    return fig


def render_chart(
    report: TrajectoryReport,
    output_path: Path,
    config: Optional[ChartConfig] = None,
    show_zones: Optional[bool] = None,
) -> Path:
    """Draw the chart and save it to `output_path` (format from the suffix)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = build_chart(report, config, show_zones)
    try:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    finally:
        plt.close(fig)
    logger.info("Wrote chart to %s", output_path)
    return output_path
