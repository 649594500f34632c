"""Schemas for meals, workouts and the per-date daily log."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .base import CalendarDate, CamelModel, new_id, now_ms


class Macros(CamelModel):
    """Nutrient quantities; grams except potassium and sodium (mg)."""

    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    potassium: float = Field(0, ge=0)
    sodium: float = Field(0, ge=0)


class MealItem(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, examples=["Greek yogurt with honey"])
    macros: Macros = Field(default_factory=Macros)
    timestamp: int = Field(default_factory=now_ms, description="Epoch milliseconds")


class StrengthExercise(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    type: Literal["strength"] = "strength"
    sets: int = Field(3, ge=0)
    reps: str = Field("10", examples=["10-12", "Failure"])
    weight: float = Field(0, ge=0, description="Load in kg")
    notes: Optional[str] = None


class CardioExercise(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    type: Literal["cardio"] = "cardio"
    distance: float = Field(0, ge=0, description="Distance in km")
    duration: float = Field(0, ge=0, description="Duration in minutes")
    intensity: str = Field("", examples=["Zone 2", "Incline 12"])
    notes: Optional[str] = None


Exercise = Annotated[Union[StrengthExercise, CardioExercise], Field(discriminator="type")]

WorkoutType = Literal["strength", "cardio", "hybrid"]


class WorkoutSession(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    exercises: List[Exercise] = Field(default_factory=list)
    timestamp: int = Field(default_factory=now_ms)
    completed: bool = False
    type: WorkoutType
    duration_minutes: int = Field(0, ge=0)


class DailyLog(CamelModel):
    """Everything logged on one calendar date."""

    date: CalendarDate
    meals: List[MealItem] = Field(default_factory=list)
    workouts: List[WorkoutSession] = Field(default_factory=list)
    water_intake: int = Field(0, ge=0, description="Water in ml")


class NutritionPlan(CamelModel):
    """Template meal list applied to whole weeks; not tied to a date."""

    meals: List[MealItem] = Field(default_factory=list)
    last_updated: int = Field(default_factory=now_ms)


class WaterUpdateRequest(CamelModel):
    amount: int = Field(..., examples=[250, -250], description="Delta in ml; negative removes water")


class NutritionPlanRequest(CamelModel):
    meals: List[MealItem]


class WorkoutCreateRequest(CamelModel):
    type: Literal["strength", "cardio"] = "strength"


class ExerciseRequest(CamelModel):
    """Body for adding or replacing an exercise; omitted adds a placeholder."""

    exercise: Optional[Exercise] = None


class ExerciseMoveRequest(CamelModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class WorkoutToggleRequest(CamelModel):
    duration_minutes: Optional[int] = Field(None, ge=0)
