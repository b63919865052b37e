"""Tests for chart rendering."""

from __future__ import annotations

import matplotlib
import matplotlib.pyplot as plt

from cutplan.export.chart import build_chart, render_chart, week_ticks, zone_bands
from cutplan.tracking.pipeline import run_pipeline


def line_by_label(fig, label):
    return next(line for line in fig.axes[0].get_lines() if line.get_label() == label)


class TestWeekTicks:
    """Tests for week_ticks function."""

    def test_covers_final_week(self) -> None:
        assert week_ticks(56, 4) == list(range(0, 57, 4))

    def test_rounds_up(self) -> None:
        assert week_ticks(57, 4)[-1] == 60

    def test_zero(self) -> None:
        assert week_ticks(0) == [0]


class TestBuildChart:
    """Tests for build_chart function."""

    def test_zone_bands(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)
        bands = zone_bands(report, 260)
        assert [(low, high) for low, high, _ in bands] == [(200, 260), (170, 200), (150, 170)]

    def test_zones_toggle(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)

        with_zones = build_chart(report, settings.chart, show_zones=True)
        without_zones = build_chart(report, settings.chart, show_zones=False)

        assert len(with_zones.axes[0].patches) == 3
        assert len(without_zones.axes[0].patches) == 0
        plt.close(with_zones)
        plt.close(without_zones)

    def test_axes(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)
        fig = build_chart(report, settings.chart)
        ax = fig.axes[0]

        assert ax.get_ylim() == (140, 260)
        assert ax.get_xticklabels()[0].get_text() == "9/10"
        plt.close(fig)

    def test_actual_line_follows_weekly_rows(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)
        fig = build_chart(report, settings.chart)
        line = line_by_label(fig, "Actual Weight")

        rows = [r for r in report.weekly_rows if r.weight is not None]
        assert list(line.get_xdata()) == [r.week_number for r in rows]
        assert list(line.get_ydata()) == [r.weight for r in rows]
        assert line.get_xdata()[-1] == 13
        plt.close(fig)

    def test_projected_line_follows_weekly_rows(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)
        fig = build_chart(report, settings.chart)
        line = line_by_label(fig, "Projected Weight")

        assert line.get_xdata()[0] == 14
        assert line.get_ydata()[0] == 213.0
        plt.close(fig)

    def test_uses_agg_backend(self) -> None:
        assert matplotlib.get_backend().lower() == "agg"

    def test_render_to_file(self, tmp_path, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)
        output = render_chart(report, tmp_path / "out" / "trajectory.svg", settings.chart)
        assert output.exists()
