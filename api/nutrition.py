"""Nutrition API router: AI macro estimation and the weekly meal plan."""

from typing import Optional

from fastapi import APIRouter, Depends

from core.logger import get_logger
from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.ai_schema import EstimateRequest, NutritionEstimate
from schemas.tracking_schema import DailyLog, MealItem, NutritionPlan, NutritionPlanRequest
from services.ai_client import GeminiClient, get_ai_client, nutrition_fallback
from services.daily_log_store import daily_log_store
from services.nutrition_plan import nutrition_plan_service

logger = get_logger("api.nutrition")
router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.post("/estimate", response_model=NutritionEstimate)
async def estimate(payload: EstimateRequest, client: GeminiClient = Depends(get_ai_client)):
    """Estimate macros for free text; falls back to zero macros on AI failure."""
    result = await client.estimate_nutrition(payload.text)
    if not result.ok:
        logger.info("Using zero-macro fallback for '%s' (%s)", payload.text, result.reason)
    return result.unwrap_or(nutrition_fallback(payload.text))


@router.post("/meals/{day}", response_model=DailyLog, status_code=201)
async def estimate_and_log(
    day: str,
    payload: EstimateRequest,
    repo: KeyValueRepository = Depends(get_repository),
    client: GeminiClient = Depends(get_ai_client),
):
    """Estimate a food description and append it to the day's meals."""
    result = await client.estimate_nutrition(payload.text)
    estimate = result.unwrap_or(nutrition_fallback(payload.text))
    meal = MealItem(name=estimate.name, macros=estimate.macros)
    return daily_log_store.add_meal(repo, day, meal)


@router.get("/plan", response_model=Optional[NutritionPlan])
def get_plan(repo: KeyValueRepository = Depends(get_repository)):
    return nutrition_plan_service.get_plan(repo)


@router.put("/plan", response_model=NutritionPlan)
def save_plan(payload: NutritionPlanRequest, repo: KeyValueRepository = Depends(get_repository)):
    return nutrition_plan_service.save_plan(repo, payload.meals)


@router.post("/plan/apply")
def apply_plan(repo: KeyValueRepository = Depends(get_repository)):
    """Overwrite this week's meals (Monday to Sunday) with the saved plan."""
    dates = nutrition_plan_service.apply_plan_to_week(repo)
    return {"applied": bool(dates), "dates": dates}
