"""
Schemas module - Request/Response schemas for API endpoints and the client.
"""

from talentlink.schemas.schemas import (
    UserRole,
    CompletionStatus,
    MentorEligibility,
    MentorRequirements,
    VisibilityMessage,
    CommentResponse,
    LikeResponse,
)

__all__ = [
    "UserRole",
    "CompletionStatus",
    "MentorEligibility",
    "MentorRequirements",
    "VisibilityMessage",
    "CommentResponse",
    "LikeResponse",
]
