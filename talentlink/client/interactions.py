"""
Optimistic feed interactions.

LikeToggle flips the local like state before the server answers and then
either adopts the server's numbers or rolls back to exactly what it showed
before. Only one request per (post, viewer) is in flight at a time; clicks
during a request are ignored.

CommentThread only appends comments the server has accepted.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol

from talentlink.core.errors import RemoteFailure, TalentLinkError, ValidationError

logger = logging.getLogger(__name__)


class LikeState(str, Enum):
    UNLIKED = "unliked"
    LIKED = "liked"
    PENDING_LIKED = "pending_liked"
    PENDING_UNLIKED = "pending_unliked"


class LikeRemote(Protocol):
    async def add_like(self, post_id: str) -> Mapping[str, Any]: ...

    async def remove_like(self, post_id: str) -> Mapping[str, Any]: ...


class CommentRemote(Protocol):
    async def add_comment(self, post_id: str, text: str) -> Mapping[str, Any]: ...


class LikeToggle:
    """
    Usage:
        toggle = LikeToggle.from_post(post, viewer_id, client)
        await toggle.toggle()
        toggle.liked, toggle.like_count
    """

    def __init__(self, post_id: str, viewer_id: Optional[str], liked: bool, like_count: int, remote: LikeRemote):
        self.post_id = post_id
        self.viewer_id = viewer_id
        self.liked = liked
        self.like_count = like_count
        self._remote = remote
        self._in_flight = False

    @classmethod
    def from_post(cls, post: Mapping[str, Any], viewer_id: Optional[str], remote: LikeRemote) -> "LikeToggle":
        return cls(
            post_id=post["id"],
            viewer_id=viewer_id,
            liked=viewer_id in (post.get("likes") or []),
            like_count=post.get("like_count") or 0,
            remote=remote,
        )

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def state(self) -> LikeState:
        if self._in_flight:
            return LikeState.PENDING_LIKED if self.liked else LikeState.PENDING_UNLIKED
        return LikeState.LIKED if self.liked else LikeState.UNLIKED

    async def toggle(self) -> bool:
        """
        Flip the like. Returns False (and does nothing) while a previous
        toggle is still in flight or when there is no signed-in viewer.

        Raises:
            RemoteFailure: the server call failed; local state is restored
        """
        if self._in_flight or not self.viewer_id:
            return False

        previous = (self.liked, self.like_count)
        target = not self.liked
        self._in_flight = True
        self.liked = target
        self.like_count += 1 if target else -1

        try:
            if target:
                result = await self._remote.add_like(self.post_id)
            else:
                result = await self._remote.remove_like(self.post_id)
        except asyncio.CancelledError:
            self.liked, self.like_count = previous
            raise
        except TalentLinkError as exc:
            self.liked, self.like_count = previous
            logger.warning("Like toggle on %s failed: %s", self.post_id, exc)
            if isinstance(exc, RemoteFailure):
                raise
            raise RemoteFailure(exc.detail) from exc
        except Exception as exc:
            self.liked, self.like_count = previous
            logger.warning("Like toggle on %s failed: %s", self.post_id, exc)
            raise RemoteFailure(f"Could not update like: {exc}") from exc
        finally:
            self._in_flight = False

        self.liked = bool(result["liked"])
        self.like_count = int(result["like_count"])
        return True


class CommentThread:
    def __init__(self, post_id: str, remote: CommentRemote, comments: Optional[List[Dict[str, Any]]] = None):
        self.post_id = post_id
        self.comments: List[Dict[str, Any]] = list(comments or [])
        self._remote = remote

    async def add(self, text: Optional[str]) -> Dict[str, Any]:
        """
        Post a comment and append the server's copy.

        Raises:
            ValidationError: blank text (nothing is sent)
        """
        if text is None or not text.strip():
            raise ValidationError("Comment text is required")

        comment = dict(await self._remote.add_comment(self.post_id, text.strip()))
        self.comments.append(comment)
        return comment
