"""Biometric normalization and calorie target calculation."""

from __future__ import annotations

from slimpath.profiles.body_calc import AnalysisResult, analyze, calculate_bmr, calculate_tdee
from slimpath.profiles.units import UnitKind, normalize

__all__ = [
    "AnalysisResult",
    "UnitKind",
    "analyze",
    "calculate_bmr",
    "calculate_tdee",
    "normalize",
]
