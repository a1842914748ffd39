"""
Profile Completion Service

PURPOSE:
Tell a user how much of their profile is filled in, what is missing,
and what to do next.

HOW IT WORKS:
1. Look up the required fields for the user's role (basic + role-specific)
2. Classify each field as completed or missing
3. percentage = completed / required, rounded half-up to an integer
4. Pick the most important next step from the missing fields

The calculator is pure: it never reads or writes the database. Callers
persist the derived values (see user_service.update_profile).
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from talentlink.schemas.schemas import CompletionStatus


# ============================================================
# FIELD REQUIREMENT CATALOG
# ============================================================

BASIC_FIELDS: Tuple[str, ...] = ("first_name", "last_name", "email")

# Basic fields the profile form may change (email is fixed at signup)
NAME_FIELDS: Tuple[str, ...] = ("first_name", "last_name", "display_name")

ROLE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "user": ("skills", "interests", "experience", "education"),
    "mentor": ("expertise", "mentorship_areas", "experience", "bio", "availability"),
    "organization": ("organization_name", "organization_type", "website", "description", "location"),
}

# Fields a role may submit through the profile form. linkedin_url is editable
# by mentors but is not a completion requirement; it only feeds the
# visibility gate in mentor_eligibility.
EDITABLE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "user": NAME_FIELDS + ROLE_FIELDS["user"],
    "mentor": NAME_FIELDS + ROLE_FIELDS["mentor"] + ("linkedin_url",),
    "organization": NAME_FIELDS + ROLE_FIELDS["organization"],
}

# Role fields that hold sequences of strings
LIST_FIELDS = frozenset({"skills", "interests", "expertise", "mentorship_areas"})

# Empty role-specific fields written at signup
SIGNUP_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "user": {
        "skills": [], "interests": [], "experience": "", "education": "", "projects": []
    },
    "mentor": {
        "expertise": [], "mentorship_areas": [], "experience": "", "bio": "",
        "availability": "", "linkedin_url": "", "mentees": []
    },
    "organization": {
        "organization_name": "", "organization_type": "", "website": "",
        "description": "", "location": "", "size": ""
    },
}

MISSING_RECORD = "All profile data missing"


def required_fields(role: Optional[str]) -> Tuple[str, ...]:
    """basic + role-specific fields. Unknown roles only need the basics."""
    return BASIC_FIELDS + ROLE_FIELDS.get(role, ())


# ============================================================
# COMPLETION CALCULATOR
# ============================================================

def is_filled(value: Any) -> bool:
    """
    A field counts as filled when present and, for strings, non-blank
    after trimming; for sequences, non-empty.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return bool(value)


def percentage(done: int, total: int) -> int:
    """Integer percentage, rounding halves up (7/8 -> 88)."""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


def _next_step(role: Optional[str], missing: List[str]) -> str:
    if not missing:
        return "Profile complete!"

    def any_missing(*names: str) -> bool:
        return any(name in missing for name in names)

    if any_missing("first_name", "last_name"):
        return "Complete basic information"
    if role == "user" and any_missing("skills", "interests"):
        return "Add your skills and interests"
    if role == "mentor" and any_missing("expertise", "bio"):
        return "Complete mentor profile"
    if role == "organization" and any_missing("organization_name", "organization_type"):
        return "Complete organization details"
    return f"Complete remaining fields: {', '.join(missing[:3])}"


def compute_completion(record: Optional[Mapping[str, Any]]) -> CompletionStatus:
    """
    Compute completion for a user record.

    Args:
        record: user document (or None when the record does not exist)

    Returns:
        CompletionStatus with is_complete, completion_percentage,
        missing_fields, completed_fields and next_step

    Example:
        >>> compute_completion(None).completion_percentage
        0
    """
    if record is None:
        return CompletionStatus(
            is_complete=False,
            completion_percentage=0,
            missing_fields=[MISSING_RECORD],
            completed_fields=[],
            next_step="Complete basic profile information",
        )

    role = record.get("role")
    fields = required_fields(role)

    completed = [name for name in fields if is_filled(record.get(name))]
    missing = [name for name in fields if not is_filled(record.get(name))]

    return CompletionStatus(
        is_complete=not missing,
        completion_percentage=percentage(len(completed), len(fields)),
        missing_fields=missing,
        completed_fields=completed,
        next_step=_next_step(role, missing),
    )
