"""Database queries for users and tracking records."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

from slimpath.tracking.models import TrackingRecord, UserProfile
from slimpath.tracking.serialization import dumps, record_from_row

_TRACKING_COLUMNS = """
    record_id, user_id, current_weight, initial_weight, goal_weight, age, height,
    activity_level, duration_weeks, daily_calories, meal_distribution_json,
    weekly_progress_json, progress_notes_json, progress_patterns_json,
    adherence_json, chart_data_json, recommendations_json, progress_percentage,
    created_at, updated_at
"""


def _user_from_row(row: sqlite3.Row) -> UserProfile:
    return UserProfile(
        user_id=row["user_id"],
        username=row["username"],
        email=row["email"],
        age=row["age"],
        height=row["height"],
        activity_level=row["activity_level"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class UserQueries:
    """Database queries for users."""

    @staticmethod
    def create_user(conn: sqlite3.Connection, profile: UserProfile) -> int:
        """Create a user and return the user_id."""
        created_at = profile.created_at or datetime.now()
        cursor = conn.execute(
            """
            INSERT INTO users (username, email, age, height, activity_level, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                profile.username,
                profile.email,
                profile.age,
                profile.height,
                profile.activity_level,
                created_at.isoformat(),
            ),
        )
        conn.commit()
        return cursor.lastrowid or 0

    @staticmethod
    def get_user(conn: sqlite3.Connection, user_id: int) -> Optional[UserProfile]:
        """Get user by ID."""
        row = conn.execute(
            """
            SELECT user_id, username, email, age, height, activity_level, created_at
            FROM users WHERE user_id = ?
            """,
            (user_id,),
        ).fetchone()

        return _user_from_row(row) if row else None

    @staticmethod
    def get_user_by_email(conn: sqlite3.Connection, email: str) -> Optional[UserProfile]:
        """Get user by email address."""
        row = conn.execute(
            """
            SELECT user_id, username, email, age, height, activity_level, created_at
            FROM users WHERE email = ?
            """,
            (email,),
        ).fetchone()

        return _user_from_row(row) if row else None


class TrackingQueries:
    """Database queries for tracking records."""

    @staticmethod
    def create(conn: sqlite3.Connection, record: TrackingRecord) -> int:
        """Insert a new tracking record and return its record_id."""
        created_at = record.created_at or datetime.now()
        updated_at = record.updated_at or created_at
        cursor = conn.execute(
            """
            INSERT INTO tracking_records (
                user_id, current_weight, initial_weight, goal_weight, age, height,
                activity_level, duration_weeks, daily_calories, meal_distribution_json,
                weekly_progress_json, progress_notes_json, progress_patterns_json,
                adherence_json, chart_data_json, recommendations_json,
                progress_percentage, created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.user_id,
                record.current_weight,
                record.initial_weight,
                record.goal_weight,
                record.age,
                record.height,
                record.activity_level.value,
                record.duration_weeks,
                record.daily_calories,
                dumps(record.meal_distribution),
                dumps(record.weekly_progress),
                dumps(record.progress_notes),
                dumps(record.progress_patterns),
                dumps(record.adherence),
                dumps(record.chart_data),
                dumps(record.recommendations),
                record.progress_percentage,
                created_at.isoformat(),
                updated_at.isoformat(),
            ),
        )
        conn.commit()
        return cursor.lastrowid or 0

    @staticmethod
    def save(conn: sqlite3.Connection, record: TrackingRecord) -> None:
        """Overwrite an existing record with the given state."""
        if record.record_id is None:
            raise ValueError("Cannot save tracking record without record_id")

        updated_at = record.updated_at or datetime.now()
        conn.execute(
            """
            UPDATE tracking_records
            SET current_weight = ?, goal_weight = ?, age = ?, height = ?,
                activity_level = ?, duration_weeks = ?, daily_calories = ?,
                meal_distribution_json = ?, weekly_progress_json = ?,
                progress_notes_json = ?, progress_patterns_json = ?,
                adherence_json = ?, chart_data_json = ?, recommendations_json = ?,
                progress_percentage = ?, updated_at = ?
            WHERE record_id = ?
            """,
            (
                record.current_weight,
                record.goal_weight,
                record.age,
                record.height,
                record.activity_level.value,
                record.duration_weeks,
                record.daily_calories,
                dumps(record.meal_distribution),
                dumps(record.weekly_progress),
                dumps(record.progress_notes),
                dumps(record.progress_patterns),
                dumps(record.adherence),
                dumps(record.chart_data),
                dumps(record.recommendations),
                record.progress_percentage,
                updated_at.isoformat(),
                record.record_id,
            ),
        )
        conn.commit()

    @staticmethod
    def get_by_id(conn: sqlite3.Connection, record_id: int) -> Optional[TrackingRecord]:
        """Get a tracking record by ID."""
        row = conn.execute(
            f"SELECT {_TRACKING_COLUMNS} FROM tracking_records WHERE record_id = ?",
            (record_id,),
        ).fetchone()

        return record_from_row(row) if row else None

    @staticmethod
    def get_latest(conn: sqlite3.Connection, user_id: int) -> Optional[TrackingRecord]:
        """Get the user's most recently created tracking record."""
        row = conn.execute(
            f"""
            SELECT {_TRACKING_COLUMNS} FROM tracking_records
            WHERE user_id = ?
            ORDER BY created_at DESC, record_id DESC
            LIMIT 1
            """,
            (user_id,),
        ).fetchone()

        return record_from_row(row) if row else None

    @staticmethod
    def get_all(conn: sqlite3.Connection, user_id: int) -> list[TrackingRecord]:
        """Get every tracking record for a user, newest first."""
        rows = conn.execute(
            f"""
            SELECT {_TRACKING_COLUMNS} FROM tracking_records
            WHERE user_id = ?
            ORDER BY created_at DESC, record_id DESC
            """,
            (user_id,),
        ).fetchall()

        return [record_from_row(row) for row in rows]

    @staticmethod
    def count_for_user(conn: sqlite3.Connection, user_id: int) -> int:
        """Number of tracking records a user has."""
        row = conn.execute(
            "SELECT COUNT(*) FROM tracking_records WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        return row[0] if row else 0
