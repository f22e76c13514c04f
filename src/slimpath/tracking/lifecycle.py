"""Create, update and read tracking records for a user.

Each operation loads a snapshot from the store, derives a new record with
pure functions, and writes the result back. Derived analytics (weekly
progress, patterns, adherence, charts, recommendations, progress percentage)
are always rebuilt from scratch rather than patched.

There is no locking: two concurrent updates for the same user race and the
last write wins.
"""

from __future__ import annotations

import logging
import math
import sqlite3
import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Generator, Mapping, Optional

from slimpath.profiles.body_calc import analyze, format_weight
from slimpath.profiles.units import UnitKind, normalize
from slimpath.tracking.adherence import score_adherence
from slimpath.tracking.charts import build_chart_data, progress_percentage
from slimpath.tracking.models import (
    BadRequestError,
    DependencyFailure,
    NotFoundError,
    ProgressNote,
    TrackingRecord,
    TrackingView,
    UserProfile,
    ValidationError,
)
from slimpath.tracking.patterns import detect_patterns
from slimpath.tracking.projection import current_plan_week, merge_weekly_progress, project
from slimpath.tracking.queries import TrackingQueries, UserQueries
from slimpath.tracking.recommendations import recommend

logger = logging.getLogger(__name__)

# Biometrics that may come from the user profile when a request omits them
PROFILE_FALLBACK_FIELDS = ("age", "height", "activity_level")


@dataclass
class InitializeResult:
    """Newly created record plus processing time (diagnostic only)."""

    record: TrackingRecord
    processing_time_ms: float


@dataclass
class UpdateResult:
    """Updated record plus processing time (diagnostic only)."""

    record: TrackingRecord
    processing_time_ms: float


@contextmanager
def store_errors(operation: str) -> Generator[None, None, None]:
    """Translate store failures into DependencyFailure with a safe message."""
    try:
        yield
    except sqlite3.Error as e:
        logger.exception("Tracking store failure during %s", operation)
        raise DependencyFailure(f"Tracking {operation} failed") from e


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _require_user(conn: sqlite3.Connection, user_id: int) -> UserProfile:
    user = UserQueries.get_user(conn, user_id)
    if user is None:
        raise NotFoundError(f"User not found: {user_id}")
    return user


def _require_latest(conn: sqlite3.Connection, user_id: int) -> TrackingRecord:
    record = TrackingQueries.get_latest(conn, user_id)
    if record is None:
        raise NotFoundError(f"Tracking data not found for user {user_id}")
    return record


def with_profile_fallbacks(
    biometrics: Mapping[str, Any],
    user: UserProfile,
) -> dict[str, Any]:
    """Fill missing age, height and activity level from the user profile."""
    merged = dict(biometrics)
    for name in PROFILE_FALLBACK_FIELDS:
        if merged.get(name) is None:
            merged[name] = getattr(user, name)
    return merged


def recompute_derived(
    record: TrackingRecord,
    today: date,
) -> tuple[TrackingRecord, int]:
    """Rebuild every derived field of a record for the given date.

    Returns:
        (new record, current plan week). The input record is not modified.
    """
    anchor = record.anchor_date
    week = current_plan_week(anchor, today)

    projected = project(record.user_id, record, anchor, today)
    weekly_progress = merge_weekly_progress(record.weekly_progress, projected)

    updated = replace(record, weekly_progress=weekly_progress)
    updated = replace(
        updated,
        progress_patterns=detect_patterns(weekly_progress),
        adherence=score_adherence(updated, weekly_progress),
        chart_data=build_chart_data(updated, weekly_progress),
        recommendations=recommend(updated),
        progress_percentage=progress_percentage(updated),
    )

    logger.debug(
        "Recomputed user %s week %d: %d weekly entries, trend %s",
        record.user_id,
        week,
        len(weekly_progress),
        updated.progress_patterns.overall_trend,  # type: ignore[union-attr]
    )
    return updated, week


def resolve_height(
    record: TrackingRecord,
    user: UserProfile,
    request_height: Optional[float] = None,
) -> float:
    """Height for an update: request body, then record, then user profile.

    Request and profile heights are raw inputs and get normalized; the
    record's height is already normalized.

    Raises:
        BadRequestError: If no positive height is available anywhere
        ValidationError: If the request height is NaN or infinite
    """
    if request_height is not None and not math.isfinite(request_height):
        raise ValidationError(
            f"height must be finite, got {request_height!r}", field="height"
        )
    if request_height is not None and request_height > 0:
        return normalize(request_height, UnitKind.HEIGHT)
    if record.height is not None and record.height > 0:
        return record.height
    if user.height is not None and user.height > 0:
        return normalize(user.height, UnitKind.HEIGHT)
    raise BadRequestError(
        "Height is required: not found on the record, the user profile or the request",
        field="height",
    )


def apply_weight_update(
    snapshot: TrackingRecord,
    updated_weight: float,
    height: float,
    now: datetime,
) -> TrackingRecord:
    """Derive the post-update record from a loaded snapshot.

    The new weight is a raw input and is normalized; stored values are not.
    Calories and meals are recomputed from the new weight, a progress note is
    appended, and all other derived fields are rebuilt for `now`.

    Raises:
        ValidationError: If the new weight is not a positive finite number
    """
    if isinstance(updated_weight, bool) or not isinstance(updated_weight, (int, float)):
        raise ValidationError(
            f"updated_weight must be a number, got {updated_weight!r}",
            field="updated_weight",
        )
    if not math.isfinite(updated_weight) or updated_weight <= 0:
        raise ValidationError("updated_weight must be a positive finite number", field="updated_weight")

    weight = normalize(updated_weight, UnitKind.WEIGHT)

    analysis = analyze(
        {
            "current_weight": weight,
            "goal_weight": snapshot.goal_weight,
            "duration_weeks": snapshot.duration_weeks,
            "age": snapshot.age,
            "height": height,
            "activity_level": snapshot.activity_level,
        },
        normalize_units=False,
        is_update=True,
        now=now,
    )

    notes = list(snapshot.progress_notes)
    notes.append(ProgressNote(note=f"Weight updated to {format_weight(weight)} lbs", date=now))

    updated = replace(
        snapshot,
        current_weight=weight,
        height=height,
        daily_calories=analysis.daily_calories,
        meal_distribution=analysis.meal_distribution,
        progress_notes=notes,
        updated_at=now,
    )
    updated, _ = recompute_derived(updated, now.date())
    return updated


def initialize(
    conn: sqlite3.Connection,
    user_id: int,
    biometrics: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> InitializeResult:
    """Start a new tracking plan for a user.

    Args:
        conn: Database connection
        user_id: Owning user
        biometrics: current_weight, goal_weight, duration_weeks and optionally
            age, height and activity_level (taken from the profile if omitted)
        now: Creation timestamp (default: now)

    Returns:
        InitializeResult with the stored record

    Raises:
        NotFoundError: If the user does not exist
        ValidationError: If a biometric field is missing or invalid
        DependencyFailure: If the store fails
    """
    start = time.perf_counter()
    now = now or datetime.now()

    with store_errors("initialization"):
        user = _require_user(conn, user_id)
        params = with_profile_fallbacks(biometrics, user)
        analysis = analyze(params, now=now)

        record = TrackingRecord(
            record_id=None,
            user_id=user_id,
            current_weight=analysis.current_weight,
            initial_weight=analysis.current_weight,
            goal_weight=analysis.goal_weight,
            age=int(params["age"]),
            height=analysis.height,
            activity_level=params["activity_level"],
            duration_weeks=int(params["duration_weeks"]),
            daily_calories=analysis.daily_calories,
            meal_distribution=analysis.meal_distribution,
            weekly_progress=[],
            progress_notes=analysis.progress_notes,
            created_at=now,
            updated_at=now,
        )
        record = replace(record, progress_percentage=progress_percentage(record))
        record_id = TrackingQueries.create(conn, record)
        record = replace(record, record_id=record_id)

    logger.info(
        "Initialized tracking %s for user %s: %d kcal/day over %d weeks",
        record_id,
        user_id,
        record.daily_calories,
        record.duration_weeks,
    )
    return InitializeResult(record=record, processing_time_ms=_elapsed_ms(start))


def update(
    conn: sqlite3.Connection,
    user_id: int,
    updated_weight: float,
    height: Optional[float] = None,
    now: Optional[datetime] = None,
) -> UpdateResult:
    """Record a new weight on the user's latest plan and rebuild its analytics.

    Args:
        conn: Database connection
        user_id: Owning user
        updated_weight: New raw weight (normalized like initialization input)
        height: Optional raw height from the request
        now: Update timestamp (default: now)

    Returns:
        UpdateResult with the saved record

    Raises:
        NotFoundError: If the user or their tracking record does not exist
        BadRequestError: If no height can be resolved
        ValidationError: If the new weight is invalid
        DependencyFailure: If the store fails
    """
    start = time.perf_counter()
    now = now or datetime.now()

    with store_errors("update"):
        user = _require_user(conn, user_id)
        snapshot = _require_latest(conn, user_id)
        resolved_height = resolve_height(snapshot, user, height)

        record = apply_weight_update(snapshot, updated_weight, resolved_height, now)
        TrackingQueries.save(conn, record)

    logger.info(
        "Updated tracking %s for user %s: %.1f lbs, %d kcal/day",
        record.record_id,
        user_id,
        record.current_weight,
        record.daily_calories,
    )
    return UpdateResult(record=record, processing_time_ms=_elapsed_ms(start))


def get(
    conn: sqlite3.Connection,
    user_id: int,
    today: Optional[date] = None,
) -> TrackingView:
    """Latest record with analytics recomputed for `today`. Nothing is saved.

    Raises:
        NotFoundError: If the user has no tracking record
        DependencyFailure: If the store fails
    """
    today = today or date.today()

    with store_errors("retrieval"):
        snapshot = _require_latest(conn, user_id)

    record, week = recompute_derived(snapshot, today)
    return TrackingView(
        record=record,
        current_week=week,
        plan_complete=week > record.duration_weeks,
    )


def get_history(conn: sqlite3.Connection, user_id: int) -> list[TrackingRecord]:
    """All of a user's tracking records, newest first, as stored.

    Raises:
        NotFoundError: If the user has no tracking records
        DependencyFailure: If the store fails
    """
    with store_errors("history retrieval"):
        records = TrackingQueries.get_all(conn, user_id)

    if not records:
        raise NotFoundError(f"No tracking history found for user {user_id}")
    return records
