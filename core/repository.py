"""Key-value repository over the `stored_documents` table.

The engines never touch SQLAlchemy directly: they receive a repository and
use the typed ``load_*`` / ``save_*`` helpers, which also apply the
backward-compatible defaults when reading older documents.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.exceptions import StorageError
from core.logger import get_logger
from database.models import StoredDocument
from schemas.cycle_schema import CycleData
from schemas.profile_schema import UserProfile
from schemas.tracking_schema import DailyLog, NutritionPlan

logger = get_logger("core.repository")

DAILY_LOGS_KEY = "dailyLogs"
NUTRITION_PLAN_KEY = "nutritionPlan"
USER_PROFILE_KEY = "userProfile"
CYCLE_DATA_KEY = "cycleData"


class KeyValueRepository:
    """Get/set JSON documents keyed by string.

    Attributes:
        session: Database session for executing queries.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded document stored under `key`, or None."""
        row = self.session.get(StoredDocument, key)
        if row is None:
            return None
        try:
            return json.loads(row.value)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Stored document '{key}' is not valid JSON", key=key) from exc

    def set(self, key: str, value: Any) -> None:
        """Insert or replace the document under `key` and commit."""
        encoded = json.dumps(value)
        row = self.session.get(StoredDocument, key)
        if row is None:
            self.session.add(StoredDocument(key=key, value=encoded))
        else:
            row.value = encoded
        self.session.commit()
        logger.debug("Saved document %s (%d bytes)", key, len(encoded))

    def delete(self, key: str) -> bool:
        """Remove the document under `key`; returns False if it was absent."""
        row = self.session.get(StoredDocument, key)
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True

    def keys(self) -> List[str]:
        return [k for (k,) in self.session.query(StoredDocument.key).order_by(StoredDocument.key)]


def _parse(model, key: str, raw: Any):
    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        logger.error("Stored document %s failed validation: %s", key, exc)
        raise StorageError(f"Stored document '{key}' is malformed", key=key) from exc


def load_daily_logs(repo: KeyValueRepository) -> Dict[str, DailyLog]:
    raw = repo.get(DAILY_LOGS_KEY) or {}
    return {date: _parse(DailyLog, DAILY_LOGS_KEY, log) for date, log in raw.items()}


def save_daily_logs(repo: KeyValueRepository, logs: Dict[str, DailyLog]) -> None:
    repo.set(DAILY_LOGS_KEY, {date: log.to_document() for date, log in logs.items()})


def load_nutrition_plan(repo: KeyValueRepository) -> Optional[NutritionPlan]:
    raw = repo.get(NUTRITION_PLAN_KEY)
    return _parse(NutritionPlan, NUTRITION_PLAN_KEY, raw) if raw is not None else None


def save_nutrition_plan(repo: KeyValueRepository, plan: NutritionPlan) -> None:
    repo.set(NUTRITION_PLAN_KEY, plan.to_document())


def load_user_profile(repo: KeyValueRepository) -> Optional[UserProfile]:
    """Return the stored profile, or None so the caller can seed a default."""
    raw = repo.get(USER_PROFILE_KEY)
    return _parse(UserProfile, USER_PROFILE_KEY, raw) if raw is not None else None


def save_user_profile(repo: KeyValueRepository, profile: UserProfile) -> None:
    repo.set(USER_PROFILE_KEY, profile.to_document())


def load_cycle_data(repo: KeyValueRepository) -> CycleData:
    raw = repo.get(CYCLE_DATA_KEY)
    return _parse(CycleData, CYCLE_DATA_KEY, raw) if raw is not None else CycleData()


def save_cycle_data(repo: KeyValueRepository, data: CycleData) -> None:
    repo.set(CYCLE_DATA_KEY, data.to_document())
