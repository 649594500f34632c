"""Dashboard scores router."""

from fastapi import APIRouter, Depends

from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.profile_schema import UserStats
from services.stats_engine import stats_engine

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=UserStats)
def get_stats(repo: KeyValueRepository = Depends(get_repository)):
    return stats_engine.calculate_stats(repo)
