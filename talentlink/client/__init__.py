"""
Async client library for the TalentLink API.

- TalentLinkClient: thin httpx wrapper, server errors come back as the
  matching talentlink.core.errors type
- LikeToggle / CommentThread: optimistic feed interactions
- ViewScope / RequirementsView: fetches that stop committing once the view
  is closed
"""

from talentlink.client.api_client import TalentLinkClient
from talentlink.client.interactions import CommentThread, LikeState, LikeToggle
from talentlink.client.lifecycle import CancelToken, RequirementsView, ViewScope

__all__ = [
    "TalentLinkClient",
    "LikeToggle",
    "LikeState",
    "CommentThread",
    "CancelToken",
    "ViewScope",
    "RequirementsView",
]
