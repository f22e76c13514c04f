"""Calorie tracking: plan records, weekly projection and progress analytics.

Orchestration lives in slimpath.tracking.lifecycle; import it from there.
"""

from __future__ import annotations

from slimpath.tracking.models import (
    ActivityLevel,
    BadRequestError,
    DependencyFailure,
    MealDistribution,
    NotFoundError,
    TrackingError,
    TrackingRecord,
    TrackingView,
    UserProfile,
    ValidationError,
    WeeklyProgress,
)

__all__ = [
    "ActivityLevel",
    "BadRequestError",
    "DependencyFailure",
    "MealDistribution",
    "NotFoundError",
    "TrackingError",
    "TrackingRecord",
    "TrackingView",
    "UserProfile",
    "ValidationError",
    "WeeklyProgress",
]
