"""Tests for week-axis normalization."""

from __future__ import annotations

from datetime import date

import pytest

from cutplan.tracking.weeks import (
    build_observations,
    date_for_week,
    format_short_date,
    parse_weighin_date,
    week_number,
)


class TestWeekNumber:
    """Tests for week_number function."""

    def test_epoch_is_week_zero(self, epoch) -> None:
        assert week_number(epoch, epoch) == 0.0

    def test_rounds_to_one_decimal(self, epoch) -> None:
        """65 days = 9.2857 weeks -> 9.3."""
        assert week_number(date(2025, 11, 14), epoch) == 9.3

    def test_latest_default_weighin(self, epoch) -> None:
        """12/12 is 93 days after 9/10."""
        assert week_number(date(2025, 12, 12), epoch) == 13.3


class TestDates:
    """Tests for date helpers."""

    def test_date_for_week(self, epoch) -> None:
        assert date_for_week(14, epoch) == date(2025, 12, 17)

    def test_short_date_has_no_padding(self) -> None:
        assert format_short_date(date(2025, 12, 5)) == "12/5"

    def test_parse_short_date_uses_epoch_year(self, epoch) -> None:
        assert parse_weighin_date("12/05", epoch) == date(2025, 12, 5)

    def test_parse_short_date_rolls_into_next_year(self, epoch) -> None:
        """A month/day before the epoch belongs to the following year."""
        assert parse_weighin_date("1/15", epoch) == date(2026, 1, 15)

    def test_parse_iso_date(self, epoch) -> None:
        assert parse_weighin_date("2025-09-22", epoch) == date(2025, 9, 22)

    def test_parse_date_object_passthrough(self, epoch) -> None:
        assert parse_weighin_date(date(2025, 10, 1), epoch) == date(2025, 10, 1)

    def test_parse_invalid_date(self, epoch) -> None:
        with pytest.raises(ValueError, match="Invalid date"):
            parse_weighin_date("13/45", epoch)

    def test_parse_garbage(self, epoch) -> None:
        with pytest.raises(ValueError):
            parse_weighin_date("yesterday", epoch)


class TestBuildObservations:
    """Tests for build_observations function."""

    def test_sorted_by_date(self, epoch) -> None:
        rows = [
            {"date": "9/22", "weight": 245},
            {"date": "9/10", "weight": 255},
        ]
        observations = build_observations(rows, epoch)

        assert [o.weight_lbs for o in observations] == [255.0, 245.0]
        assert [o.week_number for o in observations] == [0.0, 1.7]

    def test_missing_weight_raises(self, epoch) -> None:
        with pytest.raises(ValueError, match="'date' and 'weight'"):
            build_observations([{"date": "9/10"}], epoch)

    def test_non_numeric_weight_raises(self, epoch) -> None:
        with pytest.raises(ValueError, match="Invalid weight"):
            build_observations([{"date": "9/10", "weight": "heavy"}], epoch)

    def test_default_table(self, default_observations) -> None:
        """Bundled table spans week 0 to week 13.3."""
        assert len(default_observations) == 21
        assert default_observations[0].week_number == 0.0
        assert default_observations[0].weight_lbs == 255
        assert default_observations[-1].week_number == 13.3
        assert default_observations[-1].weight_lbs == 213
