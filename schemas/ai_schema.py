"""Schemas exchanged with the AI estimation service and its endpoints."""

from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel
from .tracking_schema import Exercise, Macros


class NutritionEstimate(CamelModel):
    name: str
    macros: Macros = Field(default_factory=Macros)


class GeneratedExercise(CamelModel):
    """Exercise as returned by the model: untyped, every field optional."""

    name: str
    sets: Optional[int] = None
    reps: Optional[str] = None
    weight: Optional[float] = None
    duration: Optional[float] = None
    distance: Optional[float] = None
    intensity: Optional[str] = None
    notes: Optional[str] = None


class GeneratedWorkout(CamelModel):
    name: str
    exercises: List[GeneratedExercise] = Field(default_factory=list)


class WorkoutPlan(CamelModel):
    """Generated plan after ids and the requested exercise type are assigned."""

    name: str
    exercises: List[Exercise] = Field(default_factory=list)


class EstimateRequest(CamelModel):
    text: str = Field(..., min_length=1, examples=["2 eggs and a slice of toast"])


class WorkoutGenerateRequest(CamelModel):
    prompt: str = Field(..., min_length=1, examples=["45 minute upper body push day"])
    type: Literal["strength", "cardio"] = "strength"
