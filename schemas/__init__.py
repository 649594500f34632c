"""Pydantic schema package for stored documents, requests and responses."""

from .tracking_schema import (
    Macros,
    MealItem,
    StrengthExercise,
    CardioExercise,
    Exercise,
    WorkoutSession,
    DailyLog,
    NutritionPlan,
)
from .profile_schema import UserProfile, WeightRecord, UserStats
from .cycle_schema import CycleData, PeriodRecord, CycleStatus, DayClassification, CalendarDay

__all__ = [
    "Macros",
    "MealItem",
    "StrengthExercise",
    "CardioExercise",
    "Exercise",
    "WorkoutSession",
    "DailyLog",
    "NutritionPlan",
    "UserProfile",
    "WeightRecord",
    "UserStats",
    "CycleData",
    "PeriodRecord",
    "CycleStatus",
    "DayClassification",
    "CalendarDay",
]
