"""Chart payloads and goal progress for tracking records."""

from __future__ import annotations

from datetime import timedelta

from slimpath.tracking.adherence import expected_weight
from slimpath.tracking.models import (
    CalorieDistributionChart,
    ChartData,
    TrackingRecord,
    TrendPoint,
    WeeklyProgress,
    WeightPoint,
)

SLOT_LABELS = ["Morning", "Afternoon", "Night"]


def build_chart_data(
    record: TrackingRecord,
    weekly_progress: list[WeeklyProgress],
) -> ChartData:
    """Build weight, calorie split and glide-path chart data.

    The weight chart ends with the goal weight at the plan end date, flagged
    as not actual.
    """
    weight_progress = [
        WeightPoint(date=entry.predicted_date, weight=entry.current_weight, is_actual=True)
        for entry in weekly_progress
    ]
    weight_progress.append(
        WeightPoint(
            date=record.anchor_date + timedelta(weeks=record.duration_weeks),
            weight=record.goal_weight,
            is_actual=False,
        )
    )

    meals = record.meal_distribution
    calorie_distribution = CalorieDistributionChart(
        labels=list(SLOT_LABELS),
        data=[meals.morning.calories, meals.afternoon.calories, meals.night.calories],
    )

    progress_trend = [
        TrendPoint(
            week=entry.week,
            actual=entry.current_weight,
            predicted=round(expected_weight(record, entry.week), 2),
        )
        for entry in weekly_progress
    ]

    return ChartData(
        weight_progress=weight_progress,
        calorie_distribution=calorie_distribution,
        progress_trend=progress_trend,
    )


def progress_percentage(record: TrackingRecord) -> float:
    """Share of the initial-to-goal distance covered so far, 0-100.

    A plan whose goal equals its starting weight counts as complete.
    """
    total = record.initial_weight - record.goal_weight
    if total == 0:
        return 100.0

    made = record.initial_weight - record.current_weight
    return round(min(max(made / total * 100, 0.0), 100.0), 1)
