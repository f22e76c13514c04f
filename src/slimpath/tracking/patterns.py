"""Trend classification over weekly weight observations."""

from __future__ import annotations

import numpy as np

from slimpath.tracking.models import ProgressPatterns, TrendDetails, WeeklyProgress

MIN_OBSERVATIONS = 3

# Changes within this many pounds count as no change
NEUTRAL_TOLERANCE_LBS = 0.1

INSUFFICIENT_DATA = "Insufficient data"


def _pattern_type(volatility: int) -> str:
    if volatility < 20:
        return "Steady"
    if volatility < 50:
        return "Moderate Fluctuation"
    return "High Fluctuation"


def _overall_trend(details: TrendDetails) -> str:
    counts = {
        "Gradual Gain": details.positive_changes,
        "Steady Decline": details.negative_changes,
        "Stable": details.neutral_changes,
    }
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    (leader, top), (_, runner_up) = ranked[0], ranked[1]
    if top > runner_up:
        return leader
    return "Inconsistent"


def detect_patterns(weekly_progress: list[WeeklyProgress]) -> ProgressPatterns:
    """Classify the weight trend and score its consistency and volatility.

    Args:
        weekly_progress: Weekly observations in week order

    Returns:
        ProgressPatterns. With fewer than three observations the trend is
        "Insufficient data" and the scores are zero.
    """
    if len(weekly_progress) < MIN_OBSERVATIONS:
        return ProgressPatterns(
            overall_trend=INSUFFICIENT_DATA,
            pattern_type="N/A",
            consistency_score=0,
        )

    weights = np.array([entry.current_weight for entry in weekly_progress], dtype=float)
    deltas = np.diff(weights)

    details = TrendDetails(
        positive_changes=int(np.sum(deltas > NEUTRAL_TOLERANCE_LBS)),
        negative_changes=int(np.sum(deltas < -NEUTRAL_TOLERANCE_LBS)),
        neutral_changes=int(np.sum(np.abs(deltas) <= NEUTRAL_TOLERANCE_LBS)),
    )

    mean_change = float(np.mean(deltas))
    mean_abs_deviation = float(np.mean(np.abs(deltas - mean_change)))
    std_dev = float(np.std(deltas))

    consistency_score = int(round(min(100.0, max(0.0, 100 - mean_abs_deviation * 20))))
    volatility = int(round(min(100.0, std_dev * 10)))

    return ProgressPatterns(
        overall_trend=_overall_trend(details),
        pattern_type=_pattern_type(volatility),
        consistency_score=consistency_score,
        volatility=volatility,
        average_weekly_change=round(mean_change, 2),
        trend_details=details,
    )
