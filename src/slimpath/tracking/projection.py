"""Weekly projection for an active tracking plan."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from slimpath.tracking.models import TrackingRecord, WeeklyProgress

logger = logging.getLogger(__name__)

# (upper bound of percent-through-plan, calorie adjustment). Start generous,
# tighten near the end.
CALORIE_ADJUSTMENT_STEPS = (
    (25, 50),
    (50, 25),
    (75, -25),
)
FINAL_CALORIE_ADJUSTMENT = -50


def current_plan_week(anchor_date: date, today: date) -> int:
    """1-based plan week that `today` falls in. Dates before the anchor are week 1."""
    return max((today - anchor_date).days // 7 + 1, 1)


def calorie_adjustment(week: int, duration_weeks: int) -> int:
    """Step adjustment to the daily target for a plan week."""
    percent_through = week / duration_weeks * 100
    for upper_bound, adjustment in CALORIE_ADJUSTMENT_STEPS:
        if percent_through < upper_bound:
            return adjustment
    return FINAL_CALORIE_ADJUSTMENT


def project(
    user_id: int,
    snapshot: TrackingRecord,
    anchor_date: date,
    today: Optional[date] = None,
) -> list[WeeklyProgress]:
    """Projection entry for the week `today` falls in.

    This is a point query, not a schedule: it returns at most one entry.

    Args:
        user_id: Owner of the record (for logging)
        snapshot: Latest tracking record
        anchor_date: Plan start date
        today: Date to project for (default: today)

    Returns:
        A single WeeklyProgress for the current week, or an empty list once
        the plan duration has passed
    """
    today = today or date.today()
    week = current_plan_week(anchor_date, today)

    if week > snapshot.duration_weeks:
        logger.debug(
            "User %s plan complete (week %d of %d); no projection",
            user_id,
            week,
            snapshot.duration_weeks,
        )
        return []

    adjustment = calorie_adjustment(week, snapshot.duration_weeks)

    return [
        WeeklyProgress(
            week=week,
            current_weight=snapshot.current_weight,
            predicted_date=anchor_date + timedelta(days=week * 7),
            daily_calories=max(snapshot.daily_calories + adjustment, 0),
            calorie_adjustment=adjustment,
        )
    ]


def merge_weekly_progress(
    previous: list[WeeklyProgress],
    projected: list[WeeklyProgress],
) -> list[WeeklyProgress]:
    """Rebuild the weekly sequence with projected entries replacing same-week ones.

    Returns a new list sorted by week; inputs are not modified.
    """
    by_week = {entry.week: entry for entry in previous}
    for entry in projected:
        by_week[entry.week] = entry
    return [by_week[week] for week in sorted(by_week)]
