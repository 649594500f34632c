"""Daily log API router.

Exposes the per-date log of meals, workouts and water. Every write returns
the affected day in its current state.
"""

from typing import Dict

from fastapi import APIRouter, Depends

from core.logger import get_logger
from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.tracking_schema import DailyLog, Macros, MealItem, WaterUpdateRequest, WorkoutSession
from services import date_utils
from services.daily_log_store import daily_log_store

logger = get_logger("api.logs")
router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=Dict[str, DailyLog])
def list_logs(repo: KeyValueRepository = Depends(get_repository)):
    """Return every stored day keyed by date."""
    return daily_log_store.all_logs(repo)


@router.get("/{day}", response_model=DailyLog)
def get_log(day: str, repo: KeyValueRepository = Depends(get_repository)):
    return daily_log_store.get_day(repo, day)


@router.get("/{day}/totals", response_model=Macros)
def get_day_totals(day: str, repo: KeyValueRepository = Depends(get_repository)):
    """Summed macros (including fiber, potassium and sodium) for one day."""
    return daily_log_store.day_totals(daily_log_store.get_day(repo, day))


@router.post("/{day}/meals", response_model=DailyLog, status_code=201)
def add_meal(day: str, meal: MealItem, repo: KeyValueRepository = Depends(get_repository)):
    return daily_log_store.add_meal(repo, day, meal)


@router.delete("/{day}/meals/{meal_id}", response_model=DailyLog)
def remove_meal(day: str, meal_id: str, repo: KeyValueRepository = Depends(get_repository)):
    date_utils.parse_date(day)
    return daily_log_store.remove_meal(repo, day, meal_id)


@router.post("/{day}/water", response_model=DailyLog)
def update_water(day: str, payload: WaterUpdateRequest, repo: KeyValueRepository = Depends(get_repository)):
    """Add (or with a negative amount, remove) water; never drops below zero."""
    return daily_log_store.update_water(repo, day, payload.amount)


@router.post("/{day}/workouts", response_model=DailyLog, status_code=201)
def add_workout(day: str, session: WorkoutSession, repo: KeyValueRepository = Depends(get_repository)):
    return daily_log_store.add_workout(repo, day, session)


@router.put("/{day}/workouts/{workout_id}", response_model=DailyLog)
def update_workout(
    day: str,
    workout_id: str,
    session: WorkoutSession,
    repo: KeyValueRepository = Depends(get_repository),
):
    """Replace a stored session; the path id wins over the body id."""
    date_utils.parse_date(day)
    session = session.model_copy(update={"id": workout_id})
    return daily_log_store.update_workout(repo, day, session)
