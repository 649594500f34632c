"""Schemas for the user profile, weight ledger and derived scores."""

from typing import List, Optional

from pydantic import Field, model_validator

from .base import CalendarDate, CamelModel

DEFAULT_CALORIE_GOAL = 1500
DEFAULT_WATER_GOAL = 2500


class WeightRecord(CamelModel):
    date: CalendarDate
    weight: float = Field(..., gt=0)


class UserProfile(CamelModel):
    """Singleton profile; goals drive the stats engine and the water gauge."""

    name: str = "User"
    height: float = Field(175, gt=0, description="Height in cm")
    start_weight: float = 80
    current_weight: float = 80
    target_weight: float = 70
    daily_calorie_goal: float = DEFAULT_CALORIE_GOAL
    daily_water_goal: float = DEFAULT_WATER_GOAL
    weight_history: List[WeightRecord] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fill_missing_goals(cls, data):
        # Profiles saved before goals existed carry no (or zero) goal fields.
        if isinstance(data, dict):
            data = dict(data)
            for snake, camel, default in (
                ("daily_calorie_goal", "dailyCalorieGoal", DEFAULT_CALORIE_GOAL),
                ("daily_water_goal", "dailyWaterGoal", DEFAULT_WATER_GOAL),
            ):
                if not data.get(camel) and not data.get(snake):
                    data.pop(snake, None)
                    data[camel] = default
        return data


class ProfileUpdateRequest(CamelModel):
    """Editable profile fields; omitted fields stay unchanged."""

    name: Optional[str] = Field(None, min_length=1)
    height: Optional[float] = Field(None, gt=0)
    target_weight: Optional[float] = Field(None, gt=0)
    daily_calorie_goal: Optional[float] = Field(None, gt=0)
    daily_water_goal: Optional[float] = Field(None, gt=0)


class WeightLogRequest(CamelModel):
    weight: float = Field(..., gt=0, examples=[78.4])


class ProfileSummary(CamelModel):
    bmi: float
    bmi_category: str
    weight_change: float = Field(..., description="Current minus start weight")
    remaining_to_target: float = Field(..., description="Current minus target weight")
    is_losing: bool = Field(..., description="True when the target is below the start weight")


class UserStats(CamelModel):
    nutrition_score: int = 0
    cardio_score: int = 0
    workout_score: int = 0
    general_average: int = 0
