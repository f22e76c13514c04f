"""Heuristic unit detection for raw weight and height inputs.

Values carry no unit tag, so the unit is guessed from magnitude:

- weight below 100 is taken as kilograms and converted to pounds
- height below 10 is taken as meters and converted to feet

Everything else passes through unchanged. The guess is wrong for some real
inputs (a 95 lb adult is read as 95 kg, and meters become feet while the
calorie math reads height as inches). That behavior is kept as is; callers that
know their units should pass pounds and inches.
"""

from __future__ import annotations

from enum import Enum

LBS_PER_KG = 2.20462
FEET_PER_METER = 3.28084

# Values below these are assumed to be metric
KG_THRESHOLD = 100
METER_THRESHOLD = 10


class UnitKind(Enum):
    """Kind of biometric value being normalized."""
    WEIGHT = "weight"
    HEIGHT = "height"


def normalize(value: float, kind: UnitKind | str) -> float:
    """Normalize a raw weight or height value.

    Args:
        value: Raw value as supplied by the caller
        kind: UnitKind.WEIGHT / "weight" or UnitKind.HEIGHT / "height"

    Returns:
        Weight in pounds, or height in the target unit

    Example:
        >>> normalize(70, "weight")
        154.3234
        >>> normalize(150, "weight")
        150
    """
    kind = UnitKind(kind)

    if kind == UnitKind.WEIGHT:
        if value < KG_THRESHOLD:
            return value * LBS_PER_KG
        return value

    if value < METER_THRESHOLD:
        return value * FEET_PER_METER
    return value
