"""Tests for trend classification."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from slimpath.tracking.models import WeeklyProgress
from slimpath.tracking.patterns import INSUFFICIENT_DATA, detect_patterns


def make_progress(weights: list[float]) -> list[WeeklyProgress]:
    """Weekly entries for consecutive weeks starting at week 1."""
    start = date(2024, 1, 1)
    return [
        WeeklyProgress(
            week=i + 1,
            current_weight=w,
            predicted_date=start + timedelta(weeks=i + 1),
            daily_calories=1500,
            calorie_adjustment=0,
        )
        for i, w in enumerate(weights)
    ]


class TestInsufficientData:
    """Tests for the short-history sentinel."""

    @pytest.mark.parametrize("weights", [[], [180], [180, 179]])
    def test_fewer_than_three(self, weights):
        patterns = detect_patterns(make_progress(weights))

        assert patterns.overall_trend == INSUFFICIENT_DATA
        assert patterns.pattern_type == "N/A"
        assert patterns.consistency_score == 0


class TestTrend:
    """Tests for trend classification."""

    def test_steady_decline(self):
        patterns = detect_patterns(make_progress([180, 179, 178, 177]))

        assert patterns.overall_trend == "Steady Decline"
        assert patterns.pattern_type == "Steady"
        assert patterns.consistency_score == 100
        assert patterns.volatility == 0
        assert patterns.average_weekly_change == pytest.approx(-1.0)
        assert patterns.trend_details.negative_changes == 3

    def test_gradual_gain(self):
        patterns = detect_patterns(make_progress([170, 171, 172]))

        assert patterns.overall_trend == "Gradual Gain"
        assert patterns.trend_details.positive_changes == 2

    def test_stable_within_tolerance(self):
        patterns = detect_patterns(make_progress([170, 170.05, 170]))

        assert patterns.overall_trend == "Stable"
        assert patterns.trend_details.neutral_changes == 2

    def test_tie_is_inconsistent(self):
        patterns = detect_patterns(make_progress([170, 171, 170]))

        assert patterns.overall_trend == "Inconsistent"
        assert patterns.consistency_score == 80
        assert patterns.volatility == 10


class TestVolatility:
    """Tests for pattern type from volatility."""

    def test_moderate_fluctuation(self):
        patterns = detect_patterns(make_progress([170, 173, 170]))

        assert patterns.volatility == 30
        assert patterns.pattern_type == "Moderate Fluctuation"

    def test_high_fluctuation(self):
        patterns = detect_patterns(make_progress([170, 180, 170, 180]))

        assert patterns.volatility == 94
        assert patterns.pattern_type == "High Fluctuation"
        assert patterns.consistency_score == 0
        assert patterns.overall_trend == "Gradual Gain"

    def test_scores_bounded(self):
        patterns = detect_patterns(make_progress([150, 200, 140, 210, 130]))

        assert 0 <= patterns.consistency_score <= 100
        assert 0 <= patterns.volatility <= 100
