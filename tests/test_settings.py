"""Tests for YAML settings."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from cutplan.config.settings import Settings
from cutplan.tracking.models import PhaseConfigError


class TestSettingsLoad:
    """Tests for Settings.load."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "nope.yaml")

        assert settings.plan.epoch == date(2025, 9, 10)
        assert settings.plan.daily_intake == 1200
        assert settings.plan.window_weeks == 4
        assert settings.plan.fallback_tdee == 2000
        assert [p.lower_bound_lbs for p in settings.phases] == [200, 170, 150]
        assert [p.weekly_loss_lbs for p in settings.phases] == [2.5, 1.9, 0.9]

    def test_partial_override(self, tmp_path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text(
            "plan:\n"
            "  epoch: 2026-01-05\n"
            "  daily_intake: 1600\n"
            "chart:\n"
            "  show_zones: false\n"
            "data:\n"
            "  weighins_path: ~/weighins.csv\n"
        )

        settings = Settings.load(config)

        assert settings.plan.epoch == date(2026, 1, 5)
        assert settings.plan.daily_intake == 1600
        assert settings.plan.window_weeks == 4  # untouched
        assert settings.chart.show_zones is False
        assert settings.data.weighins_path == Path("~/weighins.csv").expanduser()
        assert len(settings.phases) == 3

    def test_custom_phases(self, tmp_path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text(
            "phases:\n"
            "  - lower_bound_lbs: 180\n"
            "    weekly_loss_lbs: 1.5\n"
            "    name: Cut\n"
            "  - lower_bound_lbs: 175\n"
            "    weekly_loss_lbs: 0.5\n"
        )

        settings = Settings.load(config)

        assert [p.phase_id for p in settings.phases] == [1, 2]
        assert settings.phases[0].name == "Cut"
        assert settings.phases[1].weekly_loss_lbs == 0.5

    def test_bad_phases_rejected(self, tmp_path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text(
            "phases:\n"
            "  - lower_bound_lbs: 170\n"
            "    weekly_loss_lbs: 1.0\n"
            "  - lower_bound_lbs: 180\n"
            "    weekly_loss_lbs: 1.0\n"
        )

        with pytest.raises(PhaseConfigError):
            Settings.load(config)

    @pytest.mark.parametrize(
        "phases_yaml,message",
        [
            ("  - weekly_loss_lbs: 1.0\n", "missing required key"),
            ("  - lower_bound_lbs: 170\n", "missing required key"),
            ("  - lower_bound_lbs: heavy\n    weekly_loss_lbs: 1.0\n", "Phase 1"),
            ("  - 170\n", "expected a mapping"),
        ],
    )
    def test_malformed_phase_entry(self, tmp_path, phases_yaml, message) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("phases:\n" + phases_yaml)

        with pytest.raises(PhaseConfigError, match=message):
            Settings.load(config)

    def test_empty_file(self, tmp_path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("")
        assert Settings.load(config).plan.daily_intake == 1200


class TestSettingsSave:
    """Tests for Settings.save."""

    def test_save_then_load(self, tmp_path) -> None:
        settings = Settings()
        settings.plan.window_weeks = 6
        settings.plan.estimator_fallback = "none"
        path = tmp_path / "nested" / "config.yaml"

        settings.save(path)
        loaded = Settings.load(path)

        assert loaded.to_dict() == settings.to_dict()
