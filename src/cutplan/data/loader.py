"""Load and validate weigh-in data from CSV files."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from cutplan.data.weighins import DEFAULT_WEIGHINS
from cutplan.tracking.models import Observation
from cutplan.tracking.weeks import build_observations

logger = logging.getLogger(__name__)


class WeighInLoader:
    """Handles importing weigh-ins from CSV files."""

    REQUIRED_COLUMNS = ["date", "weight"]
    OPTIONAL_COLUMNS = ["notes"]

    def __init__(self, epoch: date):
        """Initialize the loader.

        Args:
            epoch: Plan start date used to place weigh-ins on the week axis
        """
        self.epoch = epoch
        self.skipped_missing_weight = 0

    def load_from_csv(self, csv_path: Path) -> list[Observation]:
        """Load weigh-ins from a CSV file.

        CSV format:
            date,weight,notes
            9/10,255,start
            2025-09-22,245,

        Args:
            csv_path: Path to the CSV file

        Returns:
            Observations sorted by date

        Raises:
            ValueError: If required columns are missing, no rows remain, or
                a date cannot be parsed
        """
        df = pd.read_csv(csv_path)

        # Validate required columns
        missing = set(self.REQUIRED_COLUMNS) - set(df.columns)
        if missing:
            raise ValueError(
                f"Missing required columns: {missing}. "
                f"Required columns are: {self.REQUIRED_COLUMNS}"
            )

        rows = []
        self.skipped_missing_weight = 0
        for _, row in df.iterrows():
            # Skip if missing weight
            if pd.isna(row["weight"]) or pd.isna(row["date"]):
                self.skipped_missing_weight += 1
                continue

            entry = {"date": str(row["date"]).strip(), "weight": row["weight"]}
            if "notes" in df.columns and not pd.isna(row["notes"]):
                entry["notes"] = str(row["notes"])
            rows.append(entry)

        if self.skipped_missing_weight:
            logger.warning(
                "Skipped %d rows without date or weight in %s",
                self.skipped_missing_weight,
                csv_path,
            )

        if not rows:
            raise ValueError(f"No weigh-ins found in {csv_path}")

        return build_observations(rows, self.epoch)

    def load_default(self) -> list[Observation]:
        """Load the bundled weigh-in history."""
        return build_observations(DEFAULT_WEIGHINS, self.epoch)


def load_observations(epoch: date, csv_path: Optional[Path] = None) -> list[Observation]:
    """Load weigh-ins from `csv_path`, or the bundled table if None."""
    loader = WeighInLoader(epoch)
    if csv_path is None:
        return loader.load_default()
    logger.debug("Loading weigh-ins from %s", csv_path)
    return loader.load_from_csv(csv_path)
