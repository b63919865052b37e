"""Tests for terminal dashboard output."""

from __future__ import annotations

from rich.console import Console

from conftest import make_obs
from cutplan.export.formatters import DashboardFormatter, format_estimate
from cutplan.tracking.pipeline import run_pipeline


def render(report, **kwargs) -> str:
    console = Console(record=True, width=160)
    DashboardFormatter(console).format(report, **kwargs)
    return console.export_text()


class TestDashboardFormatter:
    """Tests for DashboardFormatter class."""

    def test_cards_and_phases(self, default_observations, settings) -> None:
        text = render(run_pipeline(default_observations, settings))

        assert "Total Lost" in text
        assert "42 lbs" in text
        assert "Phase 1: Rapid Fat Loss" in text
        assert "Phase 3: Final Approach" in text
        assert "Est. Duration: 6 weeks" in text
        assert "Week 13.3" in text

    def test_next_milestone_card(self, default_observations, settings) -> None:
        text = render(run_pipeline(default_observations, settings))

        assert "Next Milestone" in text
        assert "170 lbs" in text
        assert "Race-ready for L'Etape" in text

    def test_next_milestone_in_final_phase(self, settings) -> None:
        text = render(run_pipeline([make_obs(0, 165)], settings))

        assert "Next Milestone" in text
        assert "Final phase" in text

    def test_footer_states_adaptation(self, default_observations, settings) -> None:
        settings.plan.adaptation_per_lb = 18
        text = " ".join(render(run_pipeline(default_observations, settings)).split())

        assert "18 kcal/day decline per lb lost" in text
        assert "2450 kcal/day" in text

    def test_projection_table_optional(self, default_observations, settings) -> None:
        report = run_pipeline(default_observations, settings)

        assert "Projected Trajectory" not in render(report)
        assert "Projected Trajectory" in render(report, show_projection=True)

    def test_fallback_note_shown(self, settings) -> None:
        text = render(run_pipeline([make_obs(0, 230)], settings))
        assert "fallback" in text


class TestFormatEstimate:
    """Tests for format_estimate function."""

    def test_without_estimate(self) -> None:
        assert "2000" in format_estimate(None, 2000)
