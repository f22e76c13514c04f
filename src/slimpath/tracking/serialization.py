"""Conversion of tracking records to and from JSON-ready dicts.

Dates become ISO strings and the activity level becomes its enum value, so
the output can go straight to json.dumps. The *_from_dict functions accept
that same shape back; they are used to rebuild the JSON columns of a stored
record.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from slimpath.tracking.models import (
    AdherenceReport,
    CalorieDistributionChart,
    ChartData,
    MealDistribution,
    MealSlot,
    ProgressNote,
    ProgressPatterns,
    Recommendations,
    Streak,
    TrackingRecord,
    TrackingView,
    TrendDetails,
    TrendPoint,
    WeeklyAdherence,
    WeeklyProgress,
    WeightPoint,
)


def _jsonable(value: Any) -> Any:
    """Recursively convert dates and enums inside asdict() output."""
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_dict(obj: Any) -> Optional[dict[str, Any]]:
    """Convert a model dataclass (or None) to a JSON-ready dict."""
    if obj is None:
        return None
    return _jsonable(asdict(obj))


def dumps(obj: Any) -> Optional[str]:
    """Serialize a model dataclass, or a list of them, for a JSON column."""
    if obj is None:
        return None
    if isinstance(obj, list):
        return json.dumps([to_dict(item) for item in obj])
    return json.dumps(to_dict(obj))


# Deserialization


def meal_distribution_from_dict(data: Mapping[str, Any]) -> MealDistribution:
    """Rebuild a MealDistribution."""
    return MealDistribution(
        morning=MealSlot(**data["morning"]),
        afternoon=MealSlot(**data["afternoon"]),
        night=MealSlot(**data["night"]),
        total=data["total"],
    )


def weekly_progress_from_dict(data: Mapping[str, Any]) -> WeeklyProgress:
    """Rebuild a WeeklyProgress entry."""
    return WeeklyProgress(
        week=data["week"],
        current_weight=data["current_weight"],
        predicted_date=date.fromisoformat(data["predicted_date"]),
        daily_calories=data["daily_calories"],
        calorie_adjustment=data["calorie_adjustment"],
    )


def progress_note_from_dict(data: Mapping[str, Any]) -> ProgressNote:
    """Rebuild a ProgressNote."""
    return ProgressNote(note=data["note"], date=datetime.fromisoformat(data["date"]))


def progress_patterns_from_dict(data: Mapping[str, Any]) -> ProgressPatterns:
    """Rebuild ProgressPatterns."""
    return ProgressPatterns(
        overall_trend=data["overall_trend"],
        pattern_type=data["pattern_type"],
        consistency_score=data["consistency_score"],
        volatility=data.get("volatility", 0),
        average_weekly_change=data.get("average_weekly_change", 0.0),
        trend_details=TrendDetails(**data.get("trend_details", {})),
    )


def adherence_from_dict(data: Mapping[str, Any]) -> AdherenceReport:
    """Rebuild an AdherenceReport."""
    return AdherenceReport(
        overall_adherence=data["overall_adherence"],
        weekly_adherence=[WeeklyAdherence(**w) for w in data["weekly_adherence"]],
        streak=Streak(**data["streak"]),
        consistency_score=data["consistency_score"],
    )


def chart_data_from_dict(data: Mapping[str, Any]) -> ChartData:
    """Rebuild ChartData."""
    return ChartData(
        weight_progress=[
            WeightPoint(
                date=date.fromisoformat(p["date"]),
                weight=p["weight"],
                is_actual=p["is_actual"],
            )
            for p in data["weight_progress"]
        ],
        calorie_distribution=CalorieDistributionChart(**data["calorie_distribution"]),
        progress_trend=[TrendPoint(**p) for p in data["progress_trend"]],
    )


def recommendations_from_dict(data: Mapping[str, Any]) -> Recommendations:
    """Rebuild Recommendations."""
    return Recommendations(**data)


def _loads(text: Optional[str], builder):
    if text is None:
        return None
    return builder(json.loads(text))


def record_from_row(row: Mapping[str, Any]) -> TrackingRecord:
    """Build a TrackingRecord from a tracking_records row."""
    return TrackingRecord(
        record_id=row["record_id"],
        user_id=row["user_id"],
        current_weight=row["current_weight"],
        initial_weight=row["initial_weight"],
        goal_weight=row["goal_weight"],
        age=row["age"],
        height=row["height"],
        activity_level=row["activity_level"],
        duration_weeks=row["duration_weeks"],
        daily_calories=row["daily_calories"],
        meal_distribution=meal_distribution_from_dict(
            json.loads(row["meal_distribution_json"])
        ),
        weekly_progress=[
            weekly_progress_from_dict(w) for w in json.loads(row["weekly_progress_json"])
        ],
        progress_notes=[
            progress_note_from_dict(n) for n in json.loads(row["progress_notes_json"])
        ],
        progress_patterns=_loads(row["progress_patterns_json"], progress_patterns_from_dict),
        adherence=_loads(row["adherence_json"], adherence_from_dict),
        chart_data=_loads(row["chart_data_json"], chart_data_from_dict),
        recommendations=_loads(row["recommendations_json"], recommendations_from_dict),
        progress_percentage=row["progress_percentage"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def record_to_dict(record: TrackingRecord) -> dict[str, Any]:
    """Convert a TrackingRecord to a JSON-ready dict."""
    return to_dict(record)  # type: ignore[return-value]


def view_to_dict(view: TrackingView) -> dict[str, Any]:
    """Convert a TrackingView to a JSON-ready dict."""
    return {
        "tracking": record_to_dict(view.record),
        "current_week": view.current_week,
        "plan_complete": view.plan_complete,
    }
