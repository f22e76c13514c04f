"""Threshold-driven recommendations from the remaining weight to lose."""

from __future__ import annotations

from slimpath.tracking.models import Recommendations, TrackingRecord

NO_DATA_MESSAGE = "No progress data available to generate recommendations."

# Pounds left above which the plan pushes for more activity
ACTIVE_PUSH_THRESHOLD_LBS = 5

# Pounds left below which sleep is reported as helping
POSITIVE_SLEEP_THRESHOLD_LBS = 2


def recommend(record: TrackingRecord) -> Recommendations:
    """Advice for the record's current position relative to its goal."""
    if not record.weekly_progress:
        return Recommendations(message=NO_DATA_MESSAGE)

    weight_left = record.current_weight - record.goal_weight
    far_from_goal = weight_left > ACTIVE_PUSH_THRESHOLD_LBS

    return Recommendations(
        best_days=(
            ["Monday", "Wednesday", "Friday"] if far_from_goal else ["Tuesday", "Thursday"]
        ),
        sleep_correlation=(
            "Positive" if weight_left < POSITIVE_SLEEP_THRESHOLD_LBS else "Negative"
        ),
        focus_areas="Increase physical activity" if far_from_goal else "Maintain consistency",
    )
