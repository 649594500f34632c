"""Per-date log of meals, workouts and water.

Each mutation is a read-modify-write of the whole ``dailyLogs`` document and
returns the affected day. Days are created lazily on first write.
"""

from typing import Dict

from core.logger import get_logger
from core.repository import KeyValueRepository, load_daily_logs, save_daily_logs
from schemas.tracking_schema import DailyLog, Macros, MealItem, WorkoutSession
from services import date_utils

logger = get_logger("services.daily_log_store")


def empty_log(day: str) -> DailyLog:
    return DailyLog(date=day, meals=[], workouts=[], water_intake=0)


class DailyLogStore:
    """CRUD over DailyLog records keyed by calendar date."""

    def all_logs(self, repo: KeyValueRepository) -> Dict[str, DailyLog]:
        return load_daily_logs(repo)

    def get_day(self, repo: KeyValueRepository, day: str) -> DailyLog:
        """Return the log for `day`, or an unsaved empty one."""
        date_utils.parse_date(day)
        return load_daily_logs(repo).get(day) or empty_log(day)

    def _get_or_create(self, logs: Dict[str, DailyLog], day: str) -> DailyLog:
        date_utils.parse_date(day)
        if day not in logs:
            logs[day] = empty_log(day)
        return logs[day]

    def add_meal(self, repo: KeyValueRepository, day: str, meal: MealItem) -> DailyLog:
        logs = load_daily_logs(repo)
        log = self._get_or_create(logs, day)
        log.meals.append(meal)
        save_daily_logs(repo, logs)
        logger.info("Meal '%s' (%s kcal) added on %s", meal.name, meal.macros.calories, day)
        return log

    def remove_meal(self, repo: KeyValueRepository, day: str, meal_id: str) -> DailyLog:
        logs = load_daily_logs(repo)
        log = logs.get(day)
        if log is None:
            return empty_log(day)
        log.meals = [m for m in log.meals if m.id != meal_id]
        save_daily_logs(repo, logs)
        logger.info("Meal %s removed from %s", meal_id, day)
        return log

    def update_water(self, repo: KeyValueRepository, day: str, delta_ml: int) -> DailyLog:
        """Add `delta_ml` (may be negative) to the day's water, never below zero."""
        logs = load_daily_logs(repo)
        log = self._get_or_create(logs, day)
        log.water_intake = max(0, (log.water_intake or 0) + delta_ml)
        save_daily_logs(repo, logs)
        logger.info("Water on %s is now %s ml", day, log.water_intake)
        return log

    def add_workout(self, repo: KeyValueRepository, day: str, session: WorkoutSession) -> DailyLog:
        logs = load_daily_logs(repo)
        log = self._get_or_create(logs, day)
        log.workouts.append(session)
        save_daily_logs(repo, logs)
        logger.info("Workout '%s' (%s) added on %s", session.name, session.type, day)
        return log

    def update_workout(self, repo: KeyValueRepository, day: str, session: WorkoutSession) -> DailyLog:
        """Replace the stored session with the same id; other sessions are untouched."""
        logs = load_daily_logs(repo)
        log = logs.get(day)
        if log is None:
            return empty_log(day)
        log.workouts = [session if w.id == session.id else w for w in log.workouts]
        save_daily_logs(repo, logs)
        logger.debug("Workout %s updated on %s", session.id, day)
        return log

    def day_totals(self, log: DailyLog) -> Macros:
        """Sum every macro field over the day's meals."""
        totals = {field: 0.0 for field in Macros.model_fields}
        for meal in log.meals:
            for field in totals:
                totals[field] += getattr(meal.macros, field) or 0
        return Macros(**totals)


daily_log_store = DailyLogStore()
__all__ = ["DailyLogStore", "daily_log_store", "empty_log"]
