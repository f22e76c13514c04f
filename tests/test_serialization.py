"""Tests for record serialization."""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import date, datetime

from slimpath.tracking.models import ProgressNote, TrackingView, WeeklyProgress
from slimpath.tracking.serialization import (
    dumps,
    progress_patterns_from_dict,
    record_from_row,
    record_to_dict,
    view_to_dict,
)


def _as_row(record):
    """Mimic a tracking_records row for record_from_row."""
    return {
        "record_id": record.record_id,
        "user_id": record.user_id,
        "current_weight": record.current_weight,
        "initial_weight": record.initial_weight,
        "goal_weight": record.goal_weight,
        "age": record.age,
        "height": record.height,
        "activity_level": record.activity_level.value,
        "duration_weeks": record.duration_weeks,
        "daily_calories": record.daily_calories,
        "meal_distribution_json": dumps(record.meal_distribution),
        "weekly_progress_json": dumps(record.weekly_progress),
        "progress_notes_json": dumps(record.progress_notes),
        "progress_patterns_json": dumps(record.progress_patterns),
        "adherence_json": dumps(record.adherence),
        "chart_data_json": dumps(record.chart_data),
        "recommendations_json": dumps(record.recommendations),
        "progress_percentage": record.progress_percentage,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


class TestToDict:
    """Tests for JSON-ready dicts."""

    def test_record_fields(self, sample_record):
        data = record_to_dict(sample_record)

        assert data["activity_level"] == "moderatelyActive"
        assert data["created_at"] == "2024-01-01T09:00:00"
        assert data["meal_distribution"]["morning"]["calories"] == 530
        assert data["progress_patterns"] is None
        json.dumps(data)

    def test_view(self, sample_record):
        data = view_to_dict(TrackingView(record=sample_record, current_week=2, plan_complete=False))

        assert set(data) == {"tracking", "current_week", "plan_complete"}
        assert data["current_week"] == 2
        assert data["tracking"]["daily_calories"] == 1513


class TestDumps:
    """Tests for JSON column text."""

    def test_none(self):
        assert dumps(None) is None

    def test_empty_list(self):
        assert dumps([]) == "[]"


class TestRecordFromRow:
    """Tests for rebuilding a record from a row."""

    def test_nested_types_restored(self, sample_record):
        record = replace(
            sample_record,
            weekly_progress=[
                WeeklyProgress(
                    week=1,
                    current_weight=178.0,
                    predicted_date=date(2024, 1, 8),
                    daily_calories=1563,
                    calorie_adjustment=50,
                )
            ],
            progress_notes=[ProgressNote(note="Started", date=datetime(2024, 1, 1, 9, 0))],
        )
        restored = record_from_row(_as_row(record))

        assert restored == record
        assert isinstance(restored.weekly_progress[0].predicted_date, date)
        assert isinstance(restored.progress_notes[0].date, datetime)

    def test_patterns_defaults(self):
        patterns = progress_patterns_from_dict(
            {"overall_trend": "Insufficient data", "pattern_type": "N/A", "consistency_score": 0}
        )

        assert patterns.volatility == 0
        assert patterns.trend_details.positive_changes == 0
