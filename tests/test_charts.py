"""Tests for chart payloads and goal progress."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

import pytest

from slimpath.tracking.charts import build_chart_data, progress_percentage
from slimpath.tracking.models import WeeklyProgress


def _entry(week: int, weight: float) -> WeeklyProgress:
    return WeeklyProgress(
        week=week,
        current_weight=weight,
        predicted_date=date(2024, 1, 1) + timedelta(weeks=week),
        daily_calories=1500,
        calorie_adjustment=0,
    )


class TestChartData:
    """Tests for build_chart_data."""

    def test_weight_progress_ends_at_goal(self, sample_record):
        charts = build_chart_data(sample_record, [_entry(1, 178), _entry(2, 176)])

        assert len(charts.weight_progress) == 3
        first, goal = charts.weight_progress[0], charts.weight_progress[-1]
        assert first.date == date(2024, 1, 8)
        assert first.is_actual is True
        assert goal.date == date(2024, 2, 26)
        assert goal.weight == 160.0
        assert goal.is_actual is False

    def test_calorie_distribution(self, sample_record):
        charts = build_chart_data(sample_record, [])

        assert charts.calorie_distribution.labels == ["Morning", "Afternoon", "Night"]
        assert charts.calorie_distribution.data == [530, 605, 378]

    def test_progress_trend(self, sample_record):
        charts = build_chart_data(sample_record, [_entry(1, 178)])

        assert len(charts.progress_trend) == 1
        assert charts.progress_trend[0].actual == 178
        assert charts.progress_trend[0].predicted == pytest.approx(177.5)


class TestProgressPercentage:
    """Tests for progress_percentage."""

    def test_start(self, sample_record):
        assert progress_percentage(sample_record) == 0.0

    def test_partway(self, sample_record):
        assert progress_percentage(replace(sample_record, current_weight=175)) == 25.0

    def test_gain_clamped_to_zero(self, sample_record):
        assert progress_percentage(replace(sample_record, current_weight=185)) == 0.0

    def test_past_goal_clamped(self, sample_record):
        assert progress_percentage(replace(sample_record, current_weight=150)) == 100.0

    def test_goal_equals_start(self, sample_record):
        record = replace(sample_record, goal_weight=180.0)
        assert progress_percentage(record) == 100.0
