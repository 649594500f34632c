"""Profile and weight API router."""

from fastapi import APIRouter, Depends

from core.logger import get_logger
from core.repository import KeyValueRepository
from database.deps import get_repository
from schemas.profile_schema import ProfileSummary, ProfileUpdateRequest, UserProfile, WeightLogRequest
from services.profile_ledger import profile_ledger

logger = get_logger("api.profile")
router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=UserProfile)
def get_profile(repo: KeyValueRepository = Depends(get_repository)):
    return profile_ledger.get_profile(repo)


@router.put("", response_model=UserProfile)
def update_profile(payload: ProfileUpdateRequest, repo: KeyValueRepository = Depends(get_repository)):
    return profile_ledger.update_profile(repo, payload)


@router.post("/weight", response_model=UserProfile, status_code=201)
def log_weight(payload: WeightLogRequest, repo: KeyValueRepository = Depends(get_repository)):
    """Record today's weight; a second entry on the same day replaces the first."""
    return profile_ledger.add_weight_log(repo, payload.weight)


@router.get("/summary", response_model=ProfileSummary)
def get_summary(repo: KeyValueRepository = Depends(get_repository)):
    return profile_ledger.summarize(profile_ledger.get_profile(repo))
