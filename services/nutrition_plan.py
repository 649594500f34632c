"""Weekly nutrition plan: a saved meal template stamped onto the current week."""

from typing import List, Optional

from core.logger import get_logger
from core.repository import (
    KeyValueRepository,
    load_daily_logs,
    load_nutrition_plan,
    save_daily_logs,
    save_nutrition_plan,
)
from schemas.base import new_id, now_ms
from schemas.tracking_schema import MealItem, NutritionPlan
from services import date_utils
from services.daily_log_store import empty_log

logger = get_logger("services.nutrition_plan")


class NutritionPlanService:

    def get_plan(self, repo: KeyValueRepository) -> Optional[NutritionPlan]:
        return load_nutrition_plan(repo)

    def save_plan(self, repo: KeyValueRepository, meals: List[MealItem]) -> NutritionPlan:
        plan = NutritionPlan(meals=meals, last_updated=now_ms())
        save_nutrition_plan(repo, plan)
        logger.info("Nutrition plan saved with %d meals", len(meals))
        return plan

    def apply_plan_to_week(self, repo: KeyValueRepository, today: Optional[str] = None) -> List[str]:
        """Replace the meals of every day Monday..Sunday of this week with the plan.

        Each day receives its own copies of the template meals with fresh
        ids and timestamps. Workouts and water are left alone.

        Returns:
            The dates that were written; empty if no plan is saved.
        """
        plan = load_nutrition_plan(repo)
        if plan is None:
            logger.info("No nutrition plan saved; nothing to apply")
            return []

        logs = load_daily_logs(repo)
        stamp = now_ms()
        dates = date_utils.week_dates(today or date_utils.today())
        for day in dates:
            copies = [
                meal.model_copy(deep=True, update={"id": new_id(), "timestamp": stamp})
                for meal in plan.meals
            ]
            if day not in logs:
                logs[day] = empty_log(day)
            logs[day].meals = copies

        save_daily_logs(repo, logs)
        logger.info("Applied %d-meal plan to week of %s", len(plan.meals), dates[0])
        return dates


nutrition_plan_service = NutritionPlanService()
__all__ = ["NutritionPlanService", "nutrition_plan_service"]
