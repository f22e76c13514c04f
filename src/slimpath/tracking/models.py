"""Data models for calorie tracking records and their derived analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


# Custom exceptions


class TrackingError(Exception):
    """Base exception for tracking errors."""

    pass


class ValidationError(TrackingError):
    """Raised when a biometric field is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class BadRequestError(ValidationError):
    """Raised when a request cannot be served with the data available."""

    pass


class NotFoundError(TrackingError):
    """Raised when a user or tracking record does not exist."""

    pass


class DependencyFailure(TrackingError):
    """Raised when the tracking store fails. Message is safe to show callers."""

    pass


class ActivityLevel(Enum):
    """Activity level buckets for TDEE and meal ratios."""

    SEDENTARY = "sedentary"                 # Little or no exercise
    LIGHTLY_ACTIVE = "lightlyActive"        # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderatelyActive"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "veryActive"              # Hard exercise 6-7 days/week
    EXTRA_ACTIVE = "extraActive"            # Very hard exercise, physical job

    @classmethod
    def parse(cls, value: ActivityLevel | str | None) -> ActivityLevel:
        """Coerce a raw value into an ActivityLevel.

        Raises:
            ValidationError: If the value is not a recognized level
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = tuple(level.value for level in cls)
            raise ValidationError(
                f"activity_level must be one of {valid}, got '{value}'",
                field="activity_level",
            ) from None


@dataclass
class UserProfile:
    """User as seen by the tracking engine.

    Age, height and activity level are fallbacks for tracking requests that
    omit them.
    """

    user_id: Optional[int]
    username: str
    email: str
    age: Optional[int] = None
    height: Optional[float] = None
    activity_level: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.activity_level is not None:
            ActivityLevel.parse(self.activity_level)


@dataclass
class MealSlot:
    """Calories and static guidance for one part of the day."""

    calories: int
    description: str
    recommended_meals: list[str] = field(default_factory=list)


@dataclass
class MealDistribution:
    """Daily calorie target split into morning, afternoon and night."""

    morning: MealSlot
    afternoon: MealSlot
    night: MealSlot
    total: int

    @property
    def slot_total(self) -> int:
        """Sum of the per-slot calories (may drift from total by rounding)."""
        return self.morning.calories + self.afternoon.calories + self.night.calories


@dataclass
class ProgressNote:
    """Free-form note in a record's progress log."""

    note: str
    date: datetime


@dataclass
class WeeklyProgress:
    """Weight observation and calorie target for one plan week."""

    week: int
    current_weight: float
    predicted_date: date
    daily_calories: int
    calorie_adjustment: int


@dataclass
class TrendDetails:
    """Counts of week-over-week change directions."""

    positive_changes: int = 0
    negative_changes: int = 0
    neutral_changes: int = 0


@dataclass
class ProgressPatterns:
    """Classified weight trend with consistency and volatility scores."""

    overall_trend: str
    pattern_type: str
    consistency_score: int
    volatility: int = 0
    average_weekly_change: float = 0.0
    trend_details: TrendDetails = field(default_factory=TrendDetails)


@dataclass
class WeeklyAdherence:
    """Adherence score for a single week against the glide path."""

    week: int
    expected_weight: float
    actual_weight: float
    score: float


@dataclass
class Streak:
    """Runs of consecutive weeks scoring at or above the adherence threshold."""

    current: int = 0
    longest: int = 0


@dataclass
class AdherenceReport:
    """Glide-path adherence across all recorded weeks."""

    overall_adherence: int
    weekly_adherence: list[WeeklyAdherence]
    streak: Streak
    consistency_score: int


@dataclass
class Recommendations:
    """Threshold-driven advice. Only message is set when there is no progress yet."""

    best_days: list[str] = field(default_factory=list)
    sleep_correlation: Optional[str] = None  # 'Positive', 'Negative' or 'Neutral'
    focus_areas: Optional[str] = None
    message: Optional[str] = None


@dataclass
class WeightPoint:
    """Point on the weight-over-time chart."""

    date: date
    weight: float
    is_actual: bool


@dataclass
class TrendPoint:
    """Actual vs glide-path weight for one week."""

    week: int
    actual: float
    predicted: float


@dataclass
class CalorieDistributionChart:
    """Pie-chart payload for the meal distribution."""

    labels: list[str]
    data: list[int]


@dataclass
class ChartData:
    """All chart payloads for a tracking record."""

    weight_progress: list[WeightPoint]
    calorie_distribution: CalorieDistributionChart
    progress_trend: list[TrendPoint]


@dataclass
class TrackingRecord:
    """A user's calorie-tracking plan and everything derived from it.

    Weights are pounds and height is in the normalized target unit.
    """

    record_id: Optional[int]
    user_id: int
    current_weight: float
    initial_weight: float
    goal_weight: float
    age: int
    height: float
    activity_level: ActivityLevel
    duration_weeks: int
    daily_calories: int
    meal_distribution: MealDistribution
    weekly_progress: list[WeeklyProgress] = field(default_factory=list)
    progress_notes: list[ProgressNote] = field(default_factory=list)
    progress_patterns: Optional[ProgressPatterns] = None
    adherence: Optional[AdherenceReport] = None
    chart_data: Optional[ChartData] = None
    recommendations: Optional[Recommendations] = None
    progress_percentage: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.activity_level = ActivityLevel.parse(self.activity_level)
        if self.duration_weeks < 1:
            raise ValidationError(
                f"duration_weeks must be at least 1, got {self.duration_weeks}",
                field="duration_weeks",
            )
        if self.daily_calories < 0:
            raise ValidationError(
                f"daily_calories cannot be negative, got {self.daily_calories}",
                field="daily_calories",
            )

    @property
    def anchor_date(self) -> date:
        """Date the plan started; weekly projections count from here."""
        if self.created_at is None:
            raise ValueError("Record has no created_at; it has not been persisted")
        return self.created_at.date()


@dataclass
class TrackingView:
    """Latest record with derived analytics recomputed for the read date."""

    record: TrackingRecord
    current_week: int
    plan_complete: bool
