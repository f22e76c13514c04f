"""Pytest fixtures for slimpath tests."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from slimpath.db.connection import DatabaseConnection
from slimpath.tracking.meal_planner import distribute
from slimpath.tracking.models import ActivityLevel, TrackingRecord, UserProfile
from slimpath.tracking.queries import UserQueries

# Fixed plan start so week arithmetic is deterministic
PLAN_START = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def sample_user(temp_db):
    """Insert a user with full fallback biometrics and return its ID."""
    profile = UserProfile(
        user_id=None,
        username="alex",
        email="alex@example.com",
        age=30,
        height=70,
        activity_level="moderatelyActive",
        created_at=PLAN_START,
    )
    with temp_db.get_connection() as conn:
        return UserQueries.create_user(conn, profile)


@pytest.fixture
def bare_user(temp_db):
    """Insert a user with no biometrics and return its ID."""
    profile = UserProfile(user_id=None, username="sam", email="sam@example.com")
    with temp_db.get_connection() as conn:
        return UserQueries.create_user(conn, profile)


@pytest.fixture
def plan_biometrics():
    """Request body for the reference 180 -> 160 lb, 8 week plan."""
    return {
        "current_weight": 180,
        "goal_weight": 160,
        "duration_weeks": 8,
        "age": 30,
        "height": 70,
        "activity_level": "moderatelyActive",
    }


@pytest.fixture
def sample_record():
    """Unsaved 180 -> 160 lb, 8 week record started on PLAN_START."""
    return TrackingRecord(
        record_id=1,
        user_id=1,
        current_weight=180.0,
        initial_weight=180.0,
        goal_weight=160.0,
        age=30,
        height=70.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        duration_weeks=8,
        daily_calories=1513,
        meal_distribution=distribute(1513, ActivityLevel.MODERATELY_ACTIVE),
        created_at=PLAN_START,
        updated_at=PLAN_START,
    )


@pytest.fixture
def plan_start():
    """Fixed plan start timestamp."""
    return PLAN_START
