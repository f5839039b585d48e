"""User profile API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ...domain.models.user_profile import UserProfile, UserProfileUpdate
from ...domain.services.user_profiles import UserProfileService
from ...infrastructure.dependencies import get_user_profile_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(
    user_id: str,
    profiles: UserProfileService = Depends(get_user_profile_service),
) -> UserProfile:
    """Get a user's profile."""
    profile = profiles.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return profile


@router.put("/{user_id}", response_model=UserProfile)
async def upsert_profile(
    user_id: str,
    update: UserProfileUpdate,
    profiles: UserProfileService = Depends(get_user_profile_service),
) -> UserProfile:
    """Create or update a user's profile.

    Setting ``role`` to ``admin`` enrolls the user in admin notifications.
    """
    return profiles.upsert_profile(user_id, update)
