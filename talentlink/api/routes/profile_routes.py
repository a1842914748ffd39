"""
Profile Routes

GET /profile - Get own profile
PUT /profile - Update own profile (recomputes completion)
GET /profile/completion - Own completion status
GET /profile/{uid}/completion - Completion status of any user
"""

from fastapi import APIRouter, Depends

from talentlink.core.auth import get_current_user
from talentlink.services.user_service import UserService, get_user_service, build_user_response
from talentlink.schemas.schemas import (
    ProfileUpdate, ProfileUpdateResponse, UserResponse, CompletionStatus
)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=UserResponse)
async def get_profile(user: dict = Depends(get_current_user), users: UserService = Depends(get_user_service)):
    """Get own profile."""
    return build_user_response(users.require_user(user["uid"]))


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    data: ProfileUpdate,
    user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service)
):
    """
    Update own profile.

    Only fields belonging to the caller's role are accepted. The profile
    fields and the completion cache are written together.
    """
    doc, status = users.update_profile(user["uid"], data.model_dump(exclude_unset=True))
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=build_user_response(doc),
        completion_status=status
    )


@router.get("/completion", response_model=CompletionStatus)
async def get_own_completion(user: dict = Depends(get_current_user), users: UserService = Depends(get_user_service)):
    return users.get_completion_status(user["uid"])


@router.get("/{uid}/completion", response_model=CompletionStatus)
async def get_completion(
    uid: str,
    user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service)
):
    """Completion for any uid. An unknown uid reports 0%."""
    return users.get_completion_status(uid)
