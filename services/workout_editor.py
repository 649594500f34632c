"""Editing workout sessions stored inside a day's log.

Every edit loads the session, changes it and writes it back through
`DailyLogStore.update_workout`, so the day's other sessions are untouched.
"""

from typing import Optional

from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import KeyValueRepository
from schemas.ai_schema import WorkoutPlan
from schemas.tracking_schema import CardioExercise, DailyLog, StrengthExercise, WorkoutSession
from services.daily_log_store import daily_log_store

logger = get_logger("services.workout_editor")


def default_exercise(workout_type: str, first: bool = True):
    """Placeholder exercise for a new session (`first`) or a new row."""
    if workout_type == "cardio":
        if first:
            return CardioExercise(name="Treadmill", distance=5, duration=30, intensity="Speed 9.0")
        return CardioExercise(name="New Activity", distance=0, duration=20, intensity="Moderate")
    return StrengthExercise(name="Bench Press" if first else "New Exercise", sets=3, reps="10", weight=0)


class WorkoutEditor:

    def _find_session(self, repo: KeyValueRepository, day: str, session_id: str) -> WorkoutSession:
        log = daily_log_store.get_day(repo, day)
        for session in log.workouts:
            if session.id == session_id:
                return session
        raise NotFoundError("WorkoutSession", session_id)

    def _check_index(self, session: WorkoutSession, index: int) -> None:
        if not 0 <= index < len(session.exercises):
            raise NotFoundError("Exercise", index)

    def create_session(self, repo: KeyValueRepository, day: str, workout_type: str) -> DailyLog:
        """Start a blank session holding one default exercise."""
        session = WorkoutSession(
            name="New Workout" if workout_type == "strength" else "New Cardio",
            exercises=[default_exercise(workout_type)],
            completed=False,
            type=workout_type,
            duration_minutes=0,
        )
        return daily_log_store.add_workout(repo, day, session)

    def create_from_plan(self, repo: KeyValueRepository, day: str, workout_type: str, plan: WorkoutPlan) -> DailyLog:
        session = WorkoutSession(
            name=plan.name,
            exercises=plan.exercises,
            completed=False,
            type=workout_type,
            duration_minutes=0,
        )
        return daily_log_store.add_workout(repo, day, session)

    def add_exercise(
        self, repo: KeyValueRepository, day: str, session_id: str, exercise=None
    ) -> DailyLog:
        session = self._find_session(repo, day, session_id)
        if exercise is None:
            variant = "cardio" if session.type == "cardio" else "strength"
            exercise = default_exercise(variant, first=False)
        session.exercises.append(exercise)
        return daily_log_store.update_workout(repo, day, session)

    def update_exercise(
        self, repo: KeyValueRepository, day: str, session_id: str, index: int, exercise
    ) -> DailyLog:
        session = self._find_session(repo, day, session_id)
        self._check_index(session, index)
        session.exercises[index] = exercise
        return daily_log_store.update_workout(repo, day, session)

    def remove_exercise(self, repo: KeyValueRepository, day: str, session_id: str, index: int) -> DailyLog:
        session = self._find_session(repo, day, session_id)
        self._check_index(session, index)
        del session.exercises[index]
        return daily_log_store.update_workout(repo, day, session)

    def move_exercise(
        self, repo: KeyValueRepository, day: str, session_id: str, from_index: int, to_index: int
    ) -> DailyLog:
        """Move one exercise to a new position, shifting the others."""
        session = self._find_session(repo, day, session_id)
        self._check_index(session, from_index)
        if not 0 <= to_index < len(session.exercises):
            raise ValidationError(f"Target position {to_index} is out of range", field="toIndex")
        exercise = session.exercises.pop(from_index)
        session.exercises.insert(to_index, exercise)
        return daily_log_store.update_workout(repo, day, session)

    def toggle_complete(
        self, repo: KeyValueRepository, day: str, session_id: str, duration_minutes: Optional[int] = None
    ) -> DailyLog:
        session = self._find_session(repo, day, session_id)
        session.completed = not session.completed
        if duration_minutes is not None:
            session.duration_minutes = duration_minutes
        logger.info("Workout %s on %s marked %s", session_id, day, "done" if session.completed else "open")
        return daily_log_store.update_workout(repo, day, session)


workout_editor = WorkoutEditor()
__all__ = ["WorkoutEditor", "workout_editor", "default_exercise"]
