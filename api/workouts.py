"""Workout API router: AI-generated sessions and in-place session editing."""

from typing import Optional

from fastapi import APIRouter, Depends

from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.ai_schema import WorkoutGenerateRequest
from schemas.tracking_schema import (
    DailyLog,
    ExerciseMoveRequest,
    ExerciseRequest,
    WorkoutCreateRequest,
    WorkoutToggleRequest,
)
from services.ai_client import GeminiClient, get_ai_client, workout_fallback
from services.workout_editor import workout_editor

logger = get_logger("api.workouts")
router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.post("/{day}/generate", response_model=DailyLog, status_code=201)
async def generate_workout(
    day: str,
    payload: WorkoutGenerateRequest,
    repo: KeyValueRepository = Depends(get_repository),
    client: GeminiClient = Depends(get_ai_client),
):
    """Ask the AI for a plan and store it as a new session on `day`.

    On AI failure an empty "Custom Workout"/"Custom Cardio" session is stored
    instead, so the user can fill it in by hand.
    """
    result = await client.generate_workout_plan(payload.prompt, payload.type)
    if not result.ok:
        logger.info("Using empty workout fallback (%s)", result.reason)
    plan = result.unwrap_or(workout_fallback(payload.type))
    return workout_editor.create_from_plan(repo, day, payload.type, plan)


@router.post("/{day}", response_model=DailyLog, status_code=201)
def create_session(day: str, payload: WorkoutCreateRequest, repo: KeyValueRepository = Depends(get_repository)):
    return workout_editor.create_session(repo, day, payload.type)


@router.post("/{day}/{session_id}/exercises", response_model=DailyLog, status_code=201)
def add_exercise(
    day: str,
    session_id: str,
    payload: ExerciseRequest,
    repo: KeyValueRepository = Depends(get_repository),
):
    return workout_editor.add_exercise(repo, day, session_id, payload.exercise)


@router.put("/{day}/{session_id}/exercises/{index}", response_model=DailyLog)
def update_exercise(
    day: str,
    session_id: str,
    index: int,
    payload: ExerciseRequest,
    repo: KeyValueRepository = Depends(get_repository),
):
    if payload.exercise is None:
        raise ValidationError("An exercise body is required", field="exercise")
    return workout_editor.update_exercise(repo, day, session_id, index, payload.exercise)


@router.delete("/{day}/{session_id}/exercises/{index}", response_model=DailyLog)
def remove_exercise(day: str, session_id: str, index: int, repo: KeyValueRepository = Depends(get_repository)):
    return workout_editor.remove_exercise(repo, day, session_id, index)


@router.post("/{day}/{session_id}/exercises/move", response_model=DailyLog)
def move_exercise(
    day: str,
    session_id: str,
    payload: ExerciseMoveRequest,
    repo: KeyValueRepository = Depends(get_repository),
):
    return workout_editor.move_exercise(repo, day, session_id, payload.from_index, payload.to_index)


@router.post("/{day}/{session_id}/toggle", response_model=DailyLog)
def toggle_complete(
    day: str,
    session_id: str,
    payload: Optional[WorkoutToggleRequest] = None,
    repo: KeyValueRepository = Depends(get_repository),
):
    duration = payload.duration_minutes if payload else None
    return workout_editor.toggle_complete(repo, day, session_id, duration)
