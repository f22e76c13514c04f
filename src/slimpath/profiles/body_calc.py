"""Calorie target calculator for weight-loss tracking plans.

Calculates BMR, TDEE and the daily calorie budget needed to move from the
current weight to the goal weight over the plan duration, then splits that
budget across the day.

Uses the Mifflin-St Jeor equation with the male (+5) offset for every user;
the tracking records carry no sex field. One pound of body fat is taken as
3500 kcal.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from slimpath.profiles.units import UnitKind, normalize
from slimpath.tracking.meal_planner import distribute
from slimpath.tracking.models import (
    ActivityLevel,
    MealDistribution,
    ProgressNote,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

KCAL_PER_LB = 3500
KG_PER_LB = 0.453592
CM_PER_INCH = 2.54

REQUIRED_FIELDS = (
    "current_weight",
    "goal_weight",
    "duration_weeks",
    "age",
    "height",
    "activity_level",
)


@dataclass
class AnalysisResult:
    """Calorie budget and meal split for a tracking plan."""

    daily_calories: int
    meal_distribution: MealDistribution
    progress_notes: list[ProgressNote] = field(default_factory=list)

    # Reference values
    bmr: float = 0.0
    tdee: float = 0.0
    daily_deficit: float = 0.0

    # Inputs after unit normalization
    current_weight: float = 0.0
    goal_weight: float = 0.0
    height: float = 0.0


def format_weight(value: float) -> str:
    """Format a weight for notes: one decimal, trailing zeros dropped."""
    return f"{round(value, 1):g}"


def calculate_bmr(age: int, height_inches: float, weight_lbs: float) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        height_inches: Height in inches
        weight_lbs: Weight in pounds

    Returns:
        BMR in calories per day
    """
    weight_kg = weight_lbs * KG_PER_LB
    height_cm = height_inches * CM_PER_INCH

    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Calculate Total Daily Energy Expenditure."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calculate_daily_deficit(
    current_weight: float,
    goal_weight: float,
    duration_weeks: int,
) -> float:
    """Daily deficit needed to reach the goal weight in the plan duration.

    Never negative: a goal above the current weight gives no deficit rather
    than a surplus.
    """
    weight_delta = current_weight - goal_weight
    return max((weight_delta * KCAL_PER_LB) / (duration_weeks * 7), 0)


def validate_analysis_params(params: Mapping[str, Any]) -> ActivityLevel:
    """Check required analysis inputs.

    Returns:
        The parsed activity level

    Raises:
        ValidationError: Naming the first missing or invalid field
    """
    for name in REQUIRED_FIELDS:
        if params.get(name) is None:
            raise ValidationError(f"Missing required parameter: {name}", field=name)

    activity_level = ActivityLevel.parse(params["activity_level"])

    for name in ("current_weight", "goal_weight", "height", "age", "duration_weeks"):
        value = params[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"{name} must be a number, got {value!r}", field=name
            )
        if not math.isfinite(value):
            raise ValidationError(f"{name} must be finite, got {value!r}", field=name)

    if params["current_weight"] <= 0:
        raise ValidationError("current_weight must be positive", field="current_weight")
    if params["goal_weight"] <= 0:
        raise ValidationError("goal_weight must be positive", field="goal_weight")
    if params["height"] <= 0:
        raise ValidationError("height must be positive", field="height")
    if params["age"] <= 0:
        raise ValidationError("age must be positive", field="age")
    if int(params["age"]) != params["age"]:
        raise ValidationError("age must be a whole number of years", field="age")
    if int(params["duration_weeks"]) != params["duration_weeks"] or params["duration_weeks"] < 1:
        raise ValidationError(
            "duration_weeks must be a whole number of at least 1",
            field="duration_weeks",
        )

    return activity_level


def analyze(
    params: Mapping[str, Any],
    normalize_units: bool = True,
    is_update: bool = False,
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """Compute the daily calorie target and meal split for a plan.

    Args:
        params: Mapping with current_weight, goal_weight, duration_weeks, age,
            height and activity_level
        normalize_units: Run the unit heuristic on weights and height. The
            update path passes False for values already stored normalized.
        is_update: Forwarded to the meal planner
        now: Timestamp for the initial progress note (default: now)

    Returns:
        AnalysisResult with the calorie target, meal split and initial note

    Raises:
        ValidationError: If a field is missing or invalid
    """
    activity_level = validate_analysis_params(params)

    current_weight = float(params["current_weight"])
    goal_weight = float(params["goal_weight"])
    height = float(params["height"])
    age = int(params["age"])
    duration_weeks = int(params["duration_weeks"])

    if normalize_units:
        current_weight = normalize(current_weight, UnitKind.WEIGHT)
        goal_weight = normalize(goal_weight, UnitKind.WEIGHT)
        height = normalize(height, UnitKind.HEIGHT)

    bmr = calculate_bmr(age, height, current_weight)
    tdee = calculate_tdee(bmr, activity_level)
    daily_deficit = calculate_daily_deficit(current_weight, goal_weight, duration_weeks)

    daily_calories = max(round(tdee - daily_deficit), 0)
    meal_distribution = distribute(daily_calories, activity_level, is_update=is_update)

    logger.debug(
        "BMR %.1f, TDEE %.1f, deficit %.1f -> %d kcal/day",
        bmr,
        tdee,
        daily_deficit,
        daily_calories,
    )

    note = ProgressNote(
        note=(
            f"Initial tracking started. Goal: {format_weight(goal_weight)} lbs "
            f"over {duration_weeks} weeks"
        ),
        date=now or datetime.now(),
    )

    return AnalysisResult(
        daily_calories=daily_calories,
        meal_distribution=meal_distribution,
        progress_notes=[note],
        bmr=bmr,
        tdee=tdee,
        daily_deficit=daily_deficit,
        current_weight=current_weight,
        goal_weight=goal_weight,
        height=height,
    )
