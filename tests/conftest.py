"""Pytest fixtures for cutplan tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from cutplan.config.settings import Settings
from cutplan.data.loader import load_observations
from cutplan.tracking.models import Observation, PhaseDefinition

EPOCH = date(2025, 9, 10)


def make_obs(week: float, weight: float) -> Observation:
    """Observation placed directly on the week axis."""
    return Observation(
        measured_at=EPOCH + timedelta(days=round(week * 7)),
        weight_lbs=weight,
        week_number=week,
    )


@pytest.fixture
def epoch() -> date:
    return EPOCH


@pytest.fixture
def settings() -> Settings:
    """Default plan: 1200 kcal intake, 4-week window, three phases."""
    return Settings()


@pytest.fixture
def phases(settings) -> list[PhaseDefinition]:
    return settings.phases


@pytest.fixture
def default_observations(epoch) -> list[Observation]:
    """The bundled 21 weigh-ins, 255 lbs on 9/10 to 213 lbs on 12/12."""
    return load_observations(epoch)
