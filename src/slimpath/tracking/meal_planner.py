"""Meal distribution for a daily calorie target.

Splits the day's calories into morning, afternoon and night slots using
activity-level ratios, and attaches static guidance to each slot.
"""

from __future__ import annotations

from typing import Any

from slimpath.tracking.models import ActivityLevel, MealDistribution, MealSlot

# Morning / afternoon / night share of daily calories
MEAL_RATIOS: dict[ActivityLevel, tuple[float, float, float]] = {
    ActivityLevel.SEDENTARY: (0.25, 0.35, 0.40),
    ActivityLevel.LIGHTLY_ACTIVE: (0.30, 0.40, 0.30),
    ActivityLevel.MODERATELY_ACTIVE: (0.35, 0.40, 0.25),
    ActivityLevel.VERY_ACTIVE: (0.40, 0.35, 0.25),
    ActivityLevel.EXTRA_ACTIVE: (0.40, 0.30, 0.30),
}

# Morning share ceiling once a plan has been recomputed
UPDATE_MORNING_CAP = 0.25

SLOT_GUIDANCE: dict[str, dict[str, Any]] = {
    "morning": {
        "description": "High-protein breakfast to start the day",
        "recommended_meals": [
            "Greek yogurt with berries",
            "Egg white omelette with spinach",
            "Oatmeal with protein powder",
        ],
    },
    "afternoon": {
        "description": "Balanced lunch with lean protein, whole grains and vegetables",
        "recommended_meals": [
            "Grilled chicken salad",
            "Quinoa bowl with vegetables",
            "Turkey and avocado wrap",
        ],
    },
    "night": {
        "description": "Light dinner focused on recovery",
        "recommended_meals": [
            "Baked salmon with steamed vegetables",
            "Lentil soup",
            "Stir-fried tofu with greens",
        ],
    },
}


def get_meal_ratios(
    activity_level: ActivityLevel | str,
    is_update: bool = False,
) -> tuple[float, float, float]:
    """Morning/afternoon/night ratios for an activity level.

    Args:
        activity_level: Activity level (enum or its string value)
        is_update: Cap the morning ratio for recomputed plans

    Returns:
        (morning, afternoon, night) ratios
    """
    morning, afternoon, night = MEAL_RATIOS[ActivityLevel.parse(activity_level)]
    if is_update:
        morning = min(morning, UPDATE_MORNING_CAP)
    return morning, afternoon, night


def _slot(name: str, calories: int) -> MealSlot:
    guidance = SLOT_GUIDANCE[name]
    return MealSlot(
        calories=calories,
        description=guidance["description"],
        recommended_meals=list(guidance["recommended_meals"]),
    )


def distribute(
    daily_calories: int,
    activity_level: ActivityLevel | str,
    is_update: bool = False,
) -> MealDistribution:
    """Split a daily calorie target across the day.

    Per-slot calories are rounded independently, so their sum may drift a
    few kcal from the total. The total always echoes daily_calories. With
    is_update the morning share is capped and the shortfall is not reassigned.

    Args:
        daily_calories: Daily calorie target
        activity_level: Activity level (enum or its string value)
        is_update: True when recomputing an existing plan

    Returns:
        MealDistribution with morning, afternoon and night slots
    """
    morning, afternoon, night = get_meal_ratios(activity_level, is_update)

    return MealDistribution(
        morning=_slot("morning", round(daily_calories * morning)),
        afternoon=_slot("afternoon", round(daily_calories * afternoon)),
        night=_slot("night", round(daily_calories * night)),
        total=daily_calories,
    )


def format_meal_distribution_text(distribution: MealDistribution) -> str:
    """Format a meal distribution for text/markdown output."""
    lines = [f"## Meal Distribution ({distribution.total} kcal)", ""]

    for name in ("morning", "afternoon", "night"):
        slot: MealSlot = getattr(distribution, name)
        lines.append(f"### {name.title()} ({slot.calories} kcal)")
        lines.append(f"  {slot.description}")
        for meal in slot.recommended_meals:
            lines.append(f"  - {meal}")
        lines.append("")

    return "\n".join(lines)
