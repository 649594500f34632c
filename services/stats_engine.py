"""Aggregate scoring over all logged days.

Reduces the daily logs and the profile calorie goal to four 0-100 scores.
The thresholds and weights below are tuned product constants; changing them
shifts every user's dashboard.
"""

import math
from typing import Dict, Optional

from core.logger import get_logger
from core.repository import KeyValueRepository, load_daily_logs, load_user_profile
from schemas.profile_schema import DEFAULT_CALORIE_GOAL, UserStats
from schemas.tracking_schema import DailyLog

logger = get_logger("services.stats_engine")

GOAL_LOWER_RATIO = 0.85
GOAL_UPPER_RATIO = 1.15
GOAL_PARTIAL_RATIO = 0.5

ON_TARGET_POINTS = 100
PARTIAL_POINTS = 60
ANY_INTAKE_POINTS = 30

# Expected share of days with a strength / cardio session.
STRENGTH_DAY_RATIO = 0.6
CARDIO_DAY_RATIO = 0.4

NUTRITION_WEIGHT = 0.4
WORKOUT_WEIGHT = 0.3
CARDIO_WEIGHT = 0.3


def round_half_up(value: float) -> int:
    """Round .5 upwards like the dashboard always has; NaN becomes 0."""
    if value is None or math.isnan(value):
        return 0
    return int(math.floor(value + 0.5))


def nutrition_points(daily_calories: float, calorie_goal: float) -> int:
    """Points for one day's intake relative to the calorie goal."""
    if calorie_goal * GOAL_LOWER_RATIO <= daily_calories <= calorie_goal * GOAL_UPPER_RATIO:
        return ON_TARGET_POINTS
    if daily_calories > calorie_goal * GOAL_PARTIAL_RATIO:
        return PARTIAL_POINTS
    if daily_calories > 0:
        return ANY_INTAKE_POINTS
    return 0


def score_logs(logs: Dict[str, DailyLog], calorie_goal: float) -> UserStats:
    """Pure scoring over a date -> DailyLog mapping."""
    active_days = len(logs)
    if active_days == 0:
        return UserStats()

    total_nutrition = 0
    total_strength = 0
    total_cardio = 0
    for log in logs.values():
        daily_calories = sum(m.macros.calories for m in log.meals)
        total_nutrition += nutrition_points(daily_calories, calorie_goal)

        completed = [w for w in log.workouts if w.completed]
        if any(w.type in ("cardio", "hybrid") for w in completed):
            total_cardio += 100
        if any(w.type in ("strength", "hybrid") for w in completed):
            total_strength += 100

    nutrition_score = round_half_up(total_nutrition / active_days)
    workout_score = min(100, round_half_up(total_strength / (active_days * STRENGTH_DAY_RATIO)))
    cardio_score = min(100, round_half_up(total_cardio / (active_days * CARDIO_DAY_RATIO)))
    general_average = round_half_up(
        nutrition_score * NUTRITION_WEIGHT
        + workout_score * WORKOUT_WEIGHT
        + cardio_score * CARDIO_WEIGHT
    )

    return UserStats(
        nutrition_score=nutrition_score,
        cardio_score=cardio_score,
        workout_score=workout_score,
        general_average=general_average,
    )


class StatsEngine:

    def calculate_stats(self, repo: KeyValueRepository, calorie_goal: Optional[float] = None) -> UserStats:
        """Score every stored day against the profile's calorie goal."""
        if calorie_goal is None:
            profile = load_user_profile(repo)
            calorie_goal = profile.daily_calorie_goal if profile else DEFAULT_CALORIE_GOAL
        calorie_goal = calorie_goal or DEFAULT_CALORIE_GOAL

        logs = load_daily_logs(repo)
        stats = score_logs(logs, calorie_goal)
        logger.debug("Stats over %d days (goal %s): %s", len(logs), calorie_goal, stats)
        return stats


stats_engine = StatsEngine()
__all__ = ["StatsEngine", "stats_engine", "score_logs", "nutrition_points", "round_half_up"]
