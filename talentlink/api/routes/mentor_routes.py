"""
Mentor Routes

GET /mentors - Qualified mentors (LinkedIn gate, cached)
GET /mentors/search - Qualified mentors by expertise
GET /mentors/stats - Directory statistics (cached)
GET /mentors/me/requirements - Own visibility requirements (mentor only)
GET /mentors/{uid} - Mentor details
DELETE /mentors/cache - Clear the directory cache
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from talentlink.core.auth import get_current_user, require_role
from talentlink.core.errors import NotFoundError
from talentlink.services import mentor_service
from talentlink.services.mentor_eligibility import (
    get_mentor_profile_requirements, build_visibility_message
)
from talentlink.schemas.schemas import (
    MentorListResponse, MentorResponse, MentorStatsResponse,
    MentorRequirementsResponse, MessageResponse
)

router = APIRouter(prefix="/mentors", tags=["Mentors"])


@router.get("", response_model=MentorListResponse)
async def list_mentors(page_size: int = Query(20, ge=1, le=100)):
    """List mentors visible to students."""
    return mentor_service.fetch_qualified_mentors(page_size)


@router.get("/search", response_model=List[MentorResponse])
async def search_mentors(
    expertise: Optional[str] = Query(None, description="Comma separated expertise areas"),
    page_size: int = Query(20, ge=1, le=100)
):
    areas = [area.strip() for area in (expertise or "").split(",") if area.strip()]
    return mentor_service.fetch_mentors_by_expertise(areas, page_size)


@router.get("/stats", response_model=MentorStatsResponse)
async def mentor_stats():
    return mentor_service.get_mentor_stats()


@router.get("/me/requirements", response_model=MentorRequirementsResponse)
async def my_requirements(user: dict = Depends(require_role("mentor"))):
    """What the signed-in mentor still needs to appear in listings."""
    requirements = get_mentor_profile_requirements(user["uid"])
    return MentorRequirementsResponse(
        requirements=requirements,
        message=build_visibility_message(requirements)
    )


@router.get("/{uid}", response_model=MentorResponse)
async def get_mentor(uid: str):
    mentor = mentor_service.fetch_mentor_by_id(uid)
    if mentor is None:
        raise NotFoundError("Mentor not found")
    return mentor


@router.delete("/cache", response_model=MessageResponse)
async def clear_cache(user: dict = Depends(get_current_user)):
    mentor_service.clear_mentor_cache()
    return MessageResponse(message="Mentor cache cleared")
