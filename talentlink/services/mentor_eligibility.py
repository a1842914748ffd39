"""
Mentor Eligibility Service

A mentor is shown in the public mentor listings if and only if they have a
valid LinkedIn profile URL. This gate is separate from (and stricter than)
profile completion: a 100% complete mentor without LinkedIn stays hidden,
and the completion percentage reported here is the cached value on the
record, not a fresh calculation.
"""

import re
from typing import Any, Mapping, Optional

from talentlink.core.errors import InvalidRoleError, NotFoundError
from talentlink.schemas.schemas import (
    MentorEligibility, MentorRequirements, MentorSummary, Requirement,
    UnmetRequirement, VisibilityAction, VisibilityMessage
)
from talentlink.services.profile_completion import compute_completion
from talentlink.services.user_service import UserService, display_name

URL_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)
LINKEDIN_PATTERN = re.compile(r"linkedin\.com", re.IGNORECASE)

# Completion below this marks unmet visibility requirements as urgent
URGENT_BELOW_PERCENT = 60


def is_valid_linkedin_url(value: Any) -> bool:
    """
    True iff value is a non-blank string that, once trimmed, starts with
    http:// or https:// and mentions linkedin.com (both case-insensitive).

    >>> is_valid_linkedin_url("  https://www.LinkedIn.com/in/y  ")
    True
    >>> is_valid_linkedin_url("linkedin.com/in/x")
    False
    """
    if not isinstance(value, str) or not value.strip():
        return False
    url = value.strip()
    return bool(URL_PATTERN.match(url)) and bool(LINKEDIN_PATTERN.search(url))


def check_mentor_eligibility(mentor: Mapping[str, Any]) -> MentorEligibility:
    requirements = {
        "linkedin_url": Requirement(
            met=is_valid_linkedin_url(mentor.get("linkedin_url")),
            label="LinkedIn profile",
            description="Add a valid LinkedIn profile URL (must include linkedin.com)",
        )
    }
    unmet = [
        UnmetRequirement(key=key, label=req.label, description=req.description)
        for key, req in requirements.items()
        if not req.met
    ]
    return MentorEligibility(
        is_eligible=not unmet,
        requirements=requirements,
        unmet_requirements=unmet,
        completion_percentage=mentor.get("profile_completion_percentage") or 0,
    )


def build_visibility_message(eligibility: MentorEligibility) -> VisibilityMessage:
    """User-facing message for the mentor dashboard alert."""
    if eligibility.is_eligible:
        return VisibilityMessage(
            type="success",
            title="Your profile is visible to students!",
            description="Your mentor profile meets all requirements and is now visible in the Jobs section.",
            actions=[],
        )

    urgent = eligibility.completion_percentage < URGENT_BELOW_PERCENT
    return VisibilityMessage(
        type="warning",
        title="Add LinkedIn profile to appear in mentor listings",
        description="You need to add a valid LinkedIn profile URL to be visible to students.",
        actions=[
            VisibilityAction(key=req.key, label=req.label, description=req.description, urgent=urgent)
            for req in eligibility.unmet_requirements
        ],
        completion_percentage=eligibility.completion_percentage,
    )


def get_mentor_profile_requirements(mentor_id: str, users: Optional[UserService] = None) -> MentorRequirements:
    """
    Eligibility plus detailed completion status for one mentor.

    Raises:
        NotFoundError: no user with this id
        InvalidRoleError: the user is not a mentor
    """
    users = users or UserService()
    mentor = users.get_user(mentor_id)
    if mentor is None:
        raise NotFoundError("Mentor profile not found")
    if mentor.get("role") != "mentor":
        raise InvalidRoleError("User is not registered as a mentor")

    eligibility = check_mentor_eligibility(mentor)
    return MentorRequirements(
        **eligibility.model_dump(),
        profile_status=compute_completion(mentor),
        mentor=MentorSummary(
            name=display_name(mentor),
            role=mentor["role"],
            email=mentor.get("email"),
        ),
    )
