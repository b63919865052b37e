"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

import yaml

from cutplan.tracking.models import PhaseConfigError, PhaseDefinition, validate_phases


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".cutplan"


def _default_phases() -> list[PhaseDefinition]:
    return [
        PhaseDefinition(
            phase_id=1,
            lower_bound_lbs=200.0,
            weekly_loss_lbs=2.5,
            name="Rapid Fat Loss",
            strategy="Maintain aggressive deficit",
            goal="Exit obesity range",
        ),
        PhaseDefinition(
            phase_id=2,
            lower_bound_lbs=170.0,
            weekly_loss_lbs=1.9,
            name="Training Ramp",
            strategy="More calories for training",
            goal="Race-ready for L'Etape",
        ),
        PhaseDefinition(
            phase_id=3,
            lower_bound_lbs=150.0,
            weekly_loss_lbs=0.9,
            name="Final Approach",
            strategy="Sustainable deficit + training",
            goal="Return to elite racing weight",
        ),
    ]


def _parse_phase(index: int, phase_data: object) -> PhaseDefinition:
    """Build one phase from its config mapping.

    Raises:
        PhaseConfigError: If the entry is not a mapping, a required key is
            missing, or a value is not numeric
    """
    if not isinstance(phase_data, dict):
        raise PhaseConfigError(f"Phase {index}: expected a mapping, got {phase_data!r}")
    try:
        return PhaseDefinition(
            phase_id=int(phase_data.get("id", index)),
            lower_bound_lbs=float(phase_data["lower_bound_lbs"]),
            weekly_loss_lbs=float(phase_data["weekly_loss_lbs"]),
            name=str(phase_data.get("name") or ""),
            strategy=str(phase_data.get("strategy") or ""),
            goal=str(phase_data.get("goal") or ""),
        )
    except PhaseConfigError:
        raise
    except KeyError as e:
        raise PhaseConfigError(f"Phase {index}: missing required key {e}") from e
    except (TypeError, ValueError) as e:
        raise PhaseConfigError(f"Phase {index}: {e}") from e


@dataclass
class PlanConfig:
    """Constants driving estimation and projection."""

    epoch: date = field(default_factory=lambda: date(2025, 9, 10))
    daily_intake: float = 1200.0
    window_weeks: float = 4.0
    fallback_tdee: float = 2000.0
    adaptation_per_lb: float = 22.0
    default_horizon_weeks: int = 60
    estimator_fallback: str = "oldest"  # "oldest" or "none"


@dataclass
class DataConfig:
    """Weigh-in data source."""

    weighins_path: Optional[Path] = None


@dataclass
class ChartConfig:
    """Chart rendering options."""

    show_zones: bool = True
    y_min: float = 140.0
    y_max: float = 260.0
    tick_every_weeks: int = 4
    output_path: Path = field(default_factory=lambda: Path("trajectory.png"))


@dataclass
class Settings:
    """Main application settings."""

    plan: PlanConfig = field(default_factory=PlanConfig)
    phases: list[PhaseDefinition] = field(default_factory=_default_phases)
    data: DataConfig = field(default_factory=DataConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.cutplan/config.yaml

        Returns:
            Settings instance

        Raises:
            PhaseConfigError: If the configured phases are inconsistent
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Build settings from a parsed config mapping, keeping defaults for gaps."""
        settings = cls()

        # Parse plan config
        if "plan" in data:
            plan_data = data["plan"] or {}
            if "epoch" in plan_data:
                epoch = plan_data["epoch"]
                settings.plan.epoch = (
                    epoch if isinstance(epoch, date) else date.fromisoformat(str(epoch))
                )
            if "daily_intake" in plan_data:
                settings.plan.daily_intake = float(plan_data["daily_intake"])
            if "window_weeks" in plan_data:
                settings.plan.window_weeks = float(plan_data["window_weeks"])
            if "fallback_tdee" in plan_data:
                settings.plan.fallback_tdee = float(plan_data["fallback_tdee"])
            if "adaptation_per_lb" in plan_data:
                settings.plan.adaptation_per_lb = float(plan_data["adaptation_per_lb"])
            if "default_horizon_weeks" in plan_data:
                settings.plan.default_horizon_weeks = int(
                    plan_data["default_horizon_weeks"]
                )
            if "estimator_fallback" in plan_data:
                settings.plan.estimator_fallback = plan_data["estimator_fallback"]

        # Parse phases (replaces the default list wholesale)
        if data.get("phases"):
            if not isinstance(data["phases"], list):
                raise PhaseConfigError("phases must be a list of phase mappings")
            phases = [
                _parse_phase(i, phase_data)
                for i, phase_data in enumerate(data["phases"], start=1)
            ]
            settings.phases = validate_phases(phases)

        # Parse data config
        if "data" in data:
            data_cfg = data["data"] or {}
            if data_cfg.get("weighins_path"):
                settings.data.weighins_path = Path(data_cfg["weighins_path"]).expanduser()

        # Parse chart config
        if "chart" in data:
            chart_data = data["chart"] or {}
            if "show_zones" in chart_data:
                settings.chart.show_zones = bool(chart_data["show_zones"])
            if "y_min" in chart_data:
                settings.chart.y_min = float(chart_data["y_min"])
            if "y_max" in chart_data:
                settings.chart.y_max = float(chart_data["y_max"])
            if "tick_every_weeks" in chart_data:
                settings.chart.tick_every_weeks = int(chart_data["tick_every_weeks"])
            if "output_path" in chart_data:
                settings.chart.output_path = Path(chart_data["output_path"]).expanduser()

        return settings

    def to_dict(self) -> dict:
        """Serialize to the same shape `from_dict` reads."""
        return {
            "plan": {
                "epoch": self.plan.epoch.isoformat(),
                "daily_intake": self.plan.daily_intake,
                "window_weeks": self.plan.window_weeks,
                "fallback_tdee": self.plan.fallback_tdee,
                "adaptation_per_lb": self.plan.adaptation_per_lb,
                "default_horizon_weeks": self.plan.default_horizon_weeks,
                "estimator_fallback": self.plan.estimator_fallback,
            },
            "phases": [
                {
                    "id": p.phase_id,
                    "lower_bound_lbs": p.lower_bound_lbs,
                    "weekly_loss_lbs": p.weekly_loss_lbs,
                    "name": p.name,
                    "strategy": p.strategy,
                    "goal": p.goal,
                }
                for p in self.phases
            ],
            "data": {
                "weighins_path": (
                    str(self.data.weighins_path) if self.data.weighins_path else None
                ),
            },
            "chart": {
                "show_zones": self.chart.show_zones,
                "y_min": self.chart.y_min,
                "y_max": self.chart.y_max,
                "tick_every_weeks": self.chart.tick_every_weeks,
                "output_path": str(self.chart.output_path),
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.cutplan/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
