"""Weigh-in data sources."""

from __future__ import annotations

from cutplan.data.loader import WeighInLoader, load_observations
from cutplan.data.weighins import DEFAULT_WEIGHINS

__all__ = ["DEFAULT_WEIGHINS", "WeighInLoader", "load_observations"]
