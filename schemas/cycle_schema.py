"""Schemas for cycle tracking: stored history, settings and derived status."""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .base import CalendarDate, CamelModel

STANDARD_CYCLE_LENGTH = 28
STANDARD_PERIOD_LENGTH = 5

PredictionMode = Literal["standard", "custom"]


class PeriodRecord(CamelModel):
    start_date: CalendarDate
    note: Optional[str] = ""


class CycleData(CamelModel):
    """Singleton cycle document.

    ``history`` is kept newest first and ``last_period_start`` mirrors
    ``history[0].start_date``; both are maintained by the cycle engine.
    """

    last_period_start: Optional[CalendarDate] = None
    cycle_length: int = Field(STANDARD_CYCLE_LENGTH, gt=0)
    period_length: int = Field(STANDARD_PERIOD_LENGTH, gt=0)
    history: List[PeriodRecord] = Field(default_factory=list)
    notifications_enabled: bool = True
    prediction_mode: PredictionMode = "standard"

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_document(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("notificationsEnabled") is None and data.get("notifications_enabled") is None:
            data.pop("notifications_enabled", None)
            data["notificationsEnabled"] = True
        if not data.get("predictionMode") and not data.get("prediction_mode"):
            data.pop("prediction_mode", None)
            cycle_length = data.get("cycleLength", data.get("cycle_length", STANDARD_CYCLE_LENGTH))
            period_length = data.get("periodLength", data.get("period_length", STANDARD_PERIOD_LENGTH))
            is_standard = (
                cycle_length == STANDARD_CYCLE_LENGTH
                and period_length == STANDARD_PERIOD_LENGTH
            )
            data["predictionMode"] = "standard" if is_standard else "custom"
        return data

    @field_validator("history", mode="before")
    @classmethod
    def _upgrade_bare_dates(cls, value):
        # Early versions stored history as a plain list of start dates.
        if isinstance(value, list):
            return [{"startDate": item, "note": ""} if isinstance(item, str) else item for item in value]
        return value


class CycleStatus(CamelModel):
    status: Literal["active", "approaching", "safe", "unknown"]
    days_until_next: int = Field(..., description="Negative when the period is overdue")
    next_date: Optional[CalendarDate] = None
    is_period_now: bool = False


class DayClassification(str, Enum):
    HISTORY = "history"
    PREDICTED = "predicted"
    TODAY = "today"
    NEUTRAL = "neutral"


class CalendarDay(CamelModel):
    date: CalendarDate
    classification: DayClassification


class PeriodLogRequest(CamelModel):
    date: Optional[CalendarDate] = Field(None, description="Defaults to today")
    note: str = ""


class PeriodNoteRequest(CamelModel):
    note: str = ""


class CycleSettingsRequest(CamelModel):
    cycle_length: int = Field(STANDARD_CYCLE_LENGTH, gt=0, le=120)
    period_length: int = Field(STANDARD_PERIOD_LENGTH, gt=0, le=30)
    notifications_enabled: bool = True
    prediction_mode: PredictionMode = "standard"
