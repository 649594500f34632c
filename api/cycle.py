"""Cycle tracking API router."""

from typing import List

from fastapi import APIRouter, Depends

from core.logger import get_logger
from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.cycle_schema import (
    CalendarDay,
    CycleData,
    CycleSettingsRequest,
    CycleStatus,
    PeriodLogRequest,
    PeriodNoteRequest,
)
from services import date_utils
from services.cycle_engine import cycle_engine

logger = get_logger("api.cycle")
router = APIRouter(prefix="/api/cycle", tags=["cycle"])


@router.get("", response_model=CycleData)
def get_cycle_data(repo: KeyValueRepository = Depends(get_repository)):
    return cycle_engine.get_cycle_data(repo)


@router.get("/status", response_model=CycleStatus)
def get_status(repo: KeyValueRepository = Depends(get_repository)):
    """Current phase and days until the next expected period (negative if late)."""
    return cycle_engine.calculate_cycle_status(repo)


@router.post("/periods", response_model=CycleData, status_code=201)
def log_period(payload: PeriodLogRequest, repo: KeyValueRepository = Depends(get_repository)):
    return cycle_engine.log_period_start(repo, payload.date, payload.note)


@router.put("/periods/{start_date}/note", response_model=CycleData)
def update_note(start_date: str, payload: PeriodNoteRequest, repo: KeyValueRepository = Depends(get_repository)):
    date_utils.parse_date(start_date)
    return cycle_engine.update_period_note(repo, start_date, payload.note)


@router.put("/settings", response_model=CycleData)
def update_settings(payload: CycleSettingsRequest, repo: KeyValueRepository = Depends(get_repository)):
    return cycle_engine.update_settings(
        repo,
        cycle_length=payload.cycle_length,
        period_length=payload.period_length,
        notifications_enabled=payload.notifications_enabled,
        prediction_mode=payload.prediction_mode,
    )


@router.get("/calendar/{year}/{month}", response_model=List[CalendarDay])
def get_month_calendar(year: int, month: int, repo: KeyValueRepository = Depends(get_repository)):
    """Classify each day of a month as history, predicted, today or neutral."""
    return cycle_engine.month_calendar(repo, year, month)
