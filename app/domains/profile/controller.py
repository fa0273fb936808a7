"""Profile controller endpoints."""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_profile
from app.schemas.profile import ProfileResponse
from models import Profile

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_profile: Profile = Depends(get_current_profile)):
    """Get the current authenticated user's profile.

    The profile is created from the token claims on first access.
    """
    return ProfileResponse.model_validate(current_profile)
