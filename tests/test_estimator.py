"""Tests for trailing-window TDEE estimation."""

from __future__ import annotations

import pytest

from conftest import make_obs
from cutplan.tracking.estimator import (
    FALLBACK_NONE,
    estimate_expenditure,
    find_window_start,
)


class TestEstimateExpenditure:
    """Tests for estimate_expenditure function."""

    def test_empty_returns_none(self) -> None:
        assert estimate_expenditure([], 1200) is None

    def test_single_observation_returns_none(self) -> None:
        assert estimate_expenditure([make_obs(1, 100)], 1200) is None

    def test_duplicate_timestamps_return_none(self) -> None:
        """Zero elapsed weeks cannot yield a rate."""
        observations = [make_obs(2.0, 230), make_obs(2.0, 229)]
        assert estimate_expenditure(observations, 1200) is None

    def test_short_history_falls_back_to_oldest(self) -> None:
        """Two points a week apart with a 4-week window use both points."""
        observations = [make_obs(0, 255), make_obs(1, 250)]

        result = estimate_expenditure(observations, 1200, window_weeks=4)

        assert result is not None
        assert result.weeks_analyzed == 1.0
        assert result.daily_deficit == 2500  # 5 lbs × 3500 / 7 days
        assert result.tdee == 3700
        assert result.weekly_loss_rate == 5.0

    def test_short_history_without_fallback(self) -> None:
        observations = [make_obs(0, 255), make_obs(1, 250)]
        assert estimate_expenditure(observations, 1200, 4, fallback=FALLBACK_NONE) is None

    def test_losing_weight_means_positive_deficit(self) -> None:
        observations = [make_obs(0, 200), make_obs(3, 199.5)]

        result = estimate_expenditure(observations, 1800)

        assert result is not None
        assert result.daily_deficit > 0
        assert result.tdee > 1800

    def test_gaining_weight_means_surplus(self) -> None:
        observations = [make_obs(0, 180), make_obs(2, 182)]

        result = estimate_expenditure(observations, 2500)

        assert result is not None
        assert result.daily_deficit == -500
        assert result.tdee == 2000

    def test_default_table(self, default_observations) -> None:
        """11/14 (223 lbs, week 9.3) -> 12/12 (213 lbs, week 13.3)."""
        result = estimate_expenditure(default_observations, 1200, 4)

        assert result is not None
        assert result.weeks_analyzed == pytest.approx(4.0)
        assert result.weekly_loss_rate == pytest.approx(2.5)
        assert result.daily_deficit == 1250
        assert result.tdee == 2450

    def test_ties_round_up(self) -> None:
        """1 lb over 8 weeks is 62.5 kcal/day; ties go up, not to even."""
        result = estimate_expenditure([make_obs(0, 201), make_obs(8, 200)], 1200)

        assert result is not None
        assert result.daily_deficit == 63
        assert result.tdee == 1263

    def test_longer_window_reaches_further_back(self, default_observations) -> None:
        result = estimate_expenditure(default_observations, 1200, window_weeks=8)

        assert result is not None
        assert result.weeks_analyzed >= 8


class TestFindWindowStart:
    """Tests for find_window_start function."""

    def test_picks_newest_point_before_target(self) -> None:
        observations = [make_obs(0, 250), make_obs(1, 249), make_obs(2, 248), make_obs(6, 244)]

        start = find_window_start(observations, window_weeks=4)

        assert start is not None
        assert start.week_number == 2

    def test_point_exactly_on_target_counts(self) -> None:
        observations = [make_obs(0, 250), make_obs(4, 246)]

        start = find_window_start(observations, window_weeks=4)

        assert start is not None
        assert start.week_number == 0

    def test_invalid_fallback(self) -> None:
        with pytest.raises(ValueError, match="fallback"):
            find_window_start([make_obs(0, 200)], fallback="newest")
