"""User profile and weight history.

The weight history holds at most one record per date, oldest first; logging
twice on the same day overwrites that day's weight.
"""

from typing import Optional

from core.logger import get_logger
from core.repository import KeyValueRepository, load_user_profile, save_user_profile
from schemas.profile_schema import ProfileSummary, ProfileUpdateRequest, UserProfile, WeightRecord
from services import date_utils

logger = get_logger("services.profile_ledger")


def default_profile(today: str) -> UserProfile:
    """Profile handed out before the user has saved one."""
    return UserProfile(
        name="User",
        height=175,
        start_weight=80,
        current_weight=80,
        target_weight=70,
        daily_calorie_goal=1500,
        daily_water_goal=2500,
        weight_history=[WeightRecord(date=today, weight=80)],
    )


class ProfileLedger:

    def get_profile(self, repo: KeyValueRepository, today: Optional[str] = None) -> UserProfile:
        return load_user_profile(repo) or default_profile(today or date_utils.today())

    def save_profile(self, repo: KeyValueRepository, profile: UserProfile) -> UserProfile:
        save_user_profile(repo, profile)
        return profile

    def update_profile(
        self, repo: KeyValueRepository, changes: ProfileUpdateRequest, today: Optional[str] = None
    ) -> UserProfile:
        """Apply the non-empty fields of `changes` to the stored profile."""
        profile = self.get_profile(repo, today)
        updates = changes.model_dump(exclude_none=True)
        profile = profile.model_copy(update=updates)
        save_user_profile(repo, profile)
        logger.info("Profile updated: %s", sorted(updates))
        return profile

    def add_weight_log(self, repo: KeyValueRepository, weight: float, today: Optional[str] = None) -> UserProfile:
        """Record today's weight (upsert by date) and make it the current weight."""
        today = today or date_utils.today()
        profile = self.get_profile(repo, today)

        existing = next((r for r in profile.weight_history if r.date == today), None)
        if existing is not None:
            existing.weight = weight
        else:
            profile.weight_history.append(WeightRecord(date=today, weight=weight))
        profile.weight_history.sort(key=lambda r: r.date)

        profile.current_weight = weight
        save_user_profile(repo, profile)
        logger.info("Weight %.1f kg logged for %s", weight, today)
        return profile

    def calculate_bmi(self, profile: UserProfile) -> float:
        """Calculate BMI from height in cm and current weight in kg."""
        h_m = profile.height / 100.0
        if h_m <= 0:
            return 0.0
        return profile.current_weight / (h_m * h_m)

    def bmi_category(self, bmi: float) -> str:
        if bmi < 18.5:
            return "underweight"
        if bmi < 25:
            return "normal"
        if bmi < 30:
            return "overweight"
        return "obese"

    def summarize(self, profile: UserProfile) -> ProfileSummary:
        bmi = round(self.calculate_bmi(profile), 1)
        return ProfileSummary(
            bmi=bmi,
            bmi_category=self.bmi_category(bmi),
            weight_change=round(profile.current_weight - profile.start_weight, 1),
            remaining_to_target=round(profile.current_weight - profile.target_weight, 1),
            is_losing=profile.target_weight < profile.start_weight,
        )


profile_ledger = ProfileLedger()
__all__ = ["ProfileLedger", "profile_ledger", "default_profile"]
