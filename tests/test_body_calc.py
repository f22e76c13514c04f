"""Tests for the calorie target calculator."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from slimpath.profiles.body_calc import (
    analyze,
    calculate_bmr,
    calculate_daily_deficit,
    calculate_tdee,
    format_weight,
)
from slimpath.tracking.models import ActivityLevel, ValidationError


class TestFormulas:
    """Tests for BMR, TDEE and deficit."""

    def test_bmr_mifflin_st_jeor(self):
        """180 lbs, 70 in, 30 years."""
        assert calculate_bmr(30, 70, 180) == pytest.approx(1782.7156)

    def test_tdee_moderately_active(self):
        assert calculate_tdee(1782.7156, ActivityLevel.MODERATELY_ACTIVE) == pytest.approx(
            2763.20918
        )

    def test_tdee_multipliers_increase(self):
        levels = list(ActivityLevel)
        tdees = [calculate_tdee(1500, level) for level in levels]
        assert tdees == sorted(tdees)
        assert tdees[0] == pytest.approx(1800)
        assert tdees[-1] == pytest.approx(2850)

    def test_deficit(self):
        """20 lbs over 8 weeks is 1250 kcal/day."""
        assert calculate_daily_deficit(180, 160, 8) == pytest.approx(1250)

    def test_deficit_never_negative(self):
        """A goal above the current weight gives no surplus."""
        assert calculate_daily_deficit(150, 160, 8) == 0


class TestAnalyze:
    """Tests for the full analysis."""

    def test_reference_plan(self, plan_biometrics):
        result = analyze(plan_biometrics)

        assert result.bmr == pytest.approx(1782.7156)
        assert result.tdee == pytest.approx(2763.209, abs=1e-3)
        assert result.daily_deficit == pytest.approx(1250)
        assert result.daily_calories == 1513

    def test_meal_distribution(self, plan_biometrics):
        """Moderately active splits 35/40/25."""
        meals = analyze(plan_biometrics).meal_distribution

        assert meals.morning.calories == 530
        assert meals.afternoon.calories == 605
        assert meals.night.calories == 378
        assert meals.total == 1513
        assert abs(meals.slot_total - meals.total) <= 3

    def test_update_caps_morning(self, plan_biometrics):
        meals = analyze(plan_biometrics, is_update=True).meal_distribution

        assert meals.morning.calories == 378
        assert meals.afternoon.calories == 605
        assert meals.total == 1513

    def test_initial_note(self, plan_biometrics):
        now = datetime(2024, 1, 1, 9, 0)
        result = analyze(plan_biometrics, now=now)

        assert len(result.progress_notes) == 1
        assert result.progress_notes[0].note == (
            "Initial tracking started. Goal: 160 lbs over 8 weeks"
        )
        assert result.progress_notes[0].date == now

    def test_metric_inputs_normalized(self, plan_biometrics):
        params = dict(plan_biometrics, current_weight=80, goal_weight=70)
        result = analyze(params)

        assert result.current_weight == pytest.approx(176.3696)
        assert result.goal_weight == pytest.approx(154.3234)

    def test_normalization_off(self, plan_biometrics):
        params = dict(plan_biometrics, current_weight=80, goal_weight=70)
        result = analyze(params, normalize_units=False)

        assert result.current_weight == 80
        assert result.goal_weight == 70

    def test_calories_never_negative(self, plan_biometrics):
        """An aggressive goal clamps the target at zero."""
        params = dict(plan_biometrics, current_weight=300, goal_weight=100, duration_weeks=1)
        result = analyze(params)

        assert result.daily_calories == 0
        assert result.meal_distribution.slot_total == 0


class TestValidation:
    """Tests for input validation."""

    def test_missing_field(self, plan_biometrics):
        params = dict(plan_biometrics)
        del params["height"]

        with pytest.raises(ValidationError) as exc_info:
            analyze(params)
        assert exc_info.value.field == "height"

    def test_none_counts_as_missing(self, plan_biometrics):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, age=None))
        assert exc_info.value.field == "age"

    def test_unknown_activity_level(self, plan_biometrics):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, activity_level="couchPotato"))
        assert exc_info.value.field == "activity_level"

    @pytest.mark.parametrize("weeks", [0, -1, 2.5])
    def test_bad_duration(self, plan_biometrics, weeks):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, duration_weeks=weeks))
        assert exc_info.value.field == "duration_weeks"

    @pytest.mark.parametrize("name", ["current_weight", "goal_weight", "height", "age"])
    def test_non_positive(self, plan_biometrics, name):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, **{name: 0}))
        assert exc_info.value.field == name

    def test_non_numeric(self, plan_biometrics):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, current_weight="180"))
        assert exc_info.value.field == "current_weight"

    def test_bool_rejected(self, plan_biometrics):
        with pytest.raises(ValidationError):
            analyze(dict(plan_biometrics, age=True))

    @pytest.mark.parametrize(
        "name", ["current_weight", "goal_weight", "height", "age", "duration_weeks"]
    )
    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, plan_biometrics, name, value):
        """NaN and infinity are rejected before any arithmetic."""
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, **{name: value}))
        assert exc_info.value.field == name

    def test_fractional_age(self, plan_biometrics):
        with pytest.raises(ValidationError) as exc_info:
            analyze(dict(plan_biometrics, age=30.7))
        assert exc_info.value.field == "age"

    def test_whole_float_age_accepted(self, plan_biometrics):
        assert analyze(dict(plan_biometrics, age=30.0)).daily_calories == 1513


def test_format_weight():
    assert format_weight(160.0) == "160"
    assert format_weight(154.3234) == "154.3"
