"""Tests for glide-path adherence scoring."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

import pytest

from slimpath.tracking.adherence import expected_weight, score_adherence, week_score
from slimpath.tracking.models import WeeklyProgress


def _entry(week: int, weight: float) -> WeeklyProgress:
    return WeeklyProgress(
        week=week,
        current_weight=weight,
        predicted_date=date(2024, 1, 1) + timedelta(weeks=week),
        daily_calories=1500,
        calorie_adjustment=0,
    )


class TestGlidePath:
    """Tests for expected weight and per-week score."""

    def test_expected_weight(self, sample_record):
        """180 -> 160 over 8 weeks loses 2.5 lbs a week."""
        assert expected_weight(sample_record, 4) == pytest.approx(170.0)
        assert expected_weight(sample_record, 8) == pytest.approx(160.0)

    def test_score_on_path(self):
        assert week_score(170, 170) == 100

    def test_score_loses_ten_per_pound(self):
        assert week_score(170, 172) == pytest.approx(80)
        assert week_score(170, 168) == pytest.approx(80)

    def test_score_floored(self):
        assert week_score(170, 185) == 0


class TestScoreAdherence:
    """Tests for score_adherence."""

    def test_on_glide_path(self, sample_record):
        weekly = [_entry(1, 177.5), _entry(2, 175), _entry(3, 172.5), _entry(4, 170)]
        report = score_adherence(sample_record, weekly)

        assert report.overall_adherence == 100
        assert [w.score for w in report.weekly_adherence] == [100, 100, 100, 100]
        assert report.streak.current == 4
        assert report.streak.longest == 4
        assert report.consistency_score == 100

    def test_ten_pounds_off(self, sample_record):
        report = score_adherence(sample_record, [_entry(1, 187.5)])

        assert report.weekly_adherence[0].score == 0
        assert report.overall_adherence == 0
        assert report.streak.current == 0

    def test_no_weeks(self, sample_record):
        report = score_adherence(sample_record, [])

        assert report.overall_adherence == 0
        assert report.weekly_adherence == []
        assert report.streak.longest == 0

    def test_low_week_breaks_streak(self, sample_record):
        weekly = [_entry(1, 177.5), _entry(2, 185), _entry(3, 172.5)]
        report = score_adherence(sample_record, weekly)

        assert report.streak.current == 1
        assert report.streak.longest == 1
        assert report.overall_adherence == 67
        assert report.consistency_score == 67

    def test_missing_week_breaks_streak(self, sample_record):
        report = score_adherence(sample_record, [_entry(1, 177.5), _entry(3, 172.5)])

        assert report.streak.current == 1
        assert report.streak.longest == 1

    def test_sorted_by_week(self, sample_record):
        report = score_adherence(sample_record, [_entry(2, 175), _entry(1, 177.5)])
        assert [w.week for w in report.weekly_adherence] == [1, 2]

    def test_expected_rounded(self, sample_record):
        record = replace(sample_record, duration_weeks=3)
        report = score_adherence(record, [_entry(1, 173)])

        assert report.weekly_adherence[0].expected_weight == 173.33
