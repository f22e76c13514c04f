"""Adherence scoring against the linear glide path to the goal weight.

The glide path assumes an even weekly change from the initial weight to the
goal weight across the plan:

    expected_weight(week) = initial - week × (initial - goal) / duration_weeks

Each week scores 100 minus 10 points per pound of deviation, floored at 0.
"""

from __future__ import annotations

from slimpath.tracking.models import (
    AdherenceReport,
    Streak,
    TrackingRecord,
    WeeklyAdherence,
    WeeklyProgress,
)

# Points lost per pound away from the glide path
POINTS_PER_LB = 10

# Weeks scoring at least this count toward a streak
STREAK_THRESHOLD = 80


def expected_weight(record: TrackingRecord, week: int) -> float:
    """Glide-path weight for a plan week."""
    expected_change = (record.initial_weight - record.goal_weight) / record.duration_weeks
    return record.initial_weight - expected_change * week


def week_score(expected: float, actual: float) -> float:
    """Adherence score for one week, 0-100."""
    return max(0.0, 100 - abs(expected - actual) * POINTS_PER_LB)


def _streaks(weekly: list[WeeklyAdherence]) -> Streak:
    longest = 0
    run = 0
    prev_week = None

    for entry in weekly:
        consecutive = prev_week is not None and entry.week == prev_week + 1
        if entry.score >= STREAK_THRESHOLD:
            run = run + 1 if consecutive else 1
        else:
            run = 0
        longest = max(longest, run)
        prev_week = entry.week

    return Streak(current=run, longest=longest)


def score_adherence(
    record: TrackingRecord,
    weekly_progress: list[WeeklyProgress],
) -> AdherenceReport:
    """Score each recorded week against the glide path.

    Args:
        record: Tracking record supplying initial weight, goal and duration
        weekly_progress: Weekly observations

    Returns:
        AdherenceReport with per-week scores, overall mean, streaks and the
        share of weeks at or above the streak threshold
    """
    weekly = []
    for entry in sorted(weekly_progress, key=lambda e: e.week):
        expected = expected_weight(record, entry.week)
        weekly.append(
            WeeklyAdherence(
                week=entry.week,
                expected_weight=round(expected, 2),
                actual_weight=entry.current_weight,
                score=round(week_score(expected, entry.current_weight), 1),
            )
        )

    if not weekly:
        return AdherenceReport(
            overall_adherence=0,
            weekly_adherence=[],
            streak=Streak(),
            consistency_score=0,
        )

    overall = round(sum(w.score for w in weekly) / len(weekly))
    good_weeks = sum(1 for w in weekly if w.score >= STREAK_THRESHOLD)

    return AdherenceReport(
        overall_adherence=overall,
        weekly_adherence=weekly,
        streak=_streaks(weekly),
        consistency_score=round(good_weeks / len(weekly) * 100),
    )
