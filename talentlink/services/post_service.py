"""
Post Service - the social feed.

Likes live inside the post document as a list of uids plus a like_count.
Both are changed by the same conditional update, so like_count always
equals len(likes) no matter how many viewers click at once:

    like:   {_id, likes: {$ne: uid}} -> $addToSet likes, $inc like_count +1
    unlike: {_id, likes: uid}        -> $pull likes,     $inc like_count -1

A request that does not match (already liked / not liked) changes nothing.
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ReturnDocument

from talentlink.core.errors import NotFoundError, ValidationError, remote_call
from talentlink.services.mongo_service import (
    CollectionService, serialize_doc, to_object_id, utcnow
)

logger = logging.getLogger(__name__)

HASHTAG_PATTERN = re.compile(r"#\w+")
MENTION_PATTERN = re.compile(r"@\w+")


def extract_hashtags(text: str) -> List[str]:
    """
    >>> extract_hashtags("Hiring #Python devs #remote")
    ['#python', '#remote']
    """
    return [tag.lower() for tag in HASHTAG_PATTERN.findall(text or "")]


def extract_mentions(text: str) -> List[str]:
    return [mention.lower() for mention in MENTION_PATTERN.findall(text or "")]


def _clean_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationError("Post content is required")
    return content.strip()


class PostService(CollectionService):
    collection_name = "posts"
    owner_field = "author_id"
    label = "Post"
    plural = "posts"

    def create(self, content: Optional[str], author: Dict[str, Any]) -> dict:
        """
        Publish a post.

        Args:
            content: post text (required, trimmed)
            author: session identity with uid, role and display_name
        """
        text = _clean_content(content)
        if not author.get("uid"):
            raise ValidationError("Author ID is required")

        now = utcnow()
        doc = {
            "content": text,
            "author": author.get("display_name") or "Anonymous",
            "author_id": author["uid"],
            "role": author.get("role") or "user",
            "hashtags": extract_hashtags(text),
            "mentions": extract_mentions(text),
            "likes": [],
            "like_count": 0,
            "comments": [],
            "comment_count": 0,
            "created_at": now,
            "updated_at": now,
            "is_active": True,
            "is_edited": False,
        }
        with remote_call("Failed to create post"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Post %s created by %s", result.inserted_id, author["uid"])
        return serialize_doc(doc)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Active posts, newest first. Filters: role, author_id, limit."""
        filters = filters or {}
        query: Dict[str, Any] = {"is_active": True}
        for field in ("role", "author_id"):
            if filters.get(field):
                query[field] = filters[field]

        with remote_call("Failed to fetch posts"):
            return self._find_sorted(query, filters.get("limit"))

    def list_by_author(self, author_id: str) -> List[dict]:
        """An author's active posts."""
        return self.list({"author_id": author_id})

    def update(self, post_id: str, content: Optional[str], author_id: str) -> dict:
        doc = self._get_owned(post_id, author_id, "update")
        text = _clean_content(content)

        with remote_call("Failed to update post"):
            updated = self.collection.find_one_and_update(
                {"_id": doc["_id"]},
                {"$set": {
                    "content": text,
                    "hashtags": extract_hashtags(text),
                    "mentions": extract_mentions(text),
                    "updated_at": utcnow(),
                    "is_edited": True,
                }},
                return_document=ReturnDocument.AFTER
            )
        if updated is None:
            raise NotFoundError("Post not found")
        return serialize_doc(updated)

    # ============================================================
    # LIKES
    # ============================================================

    def _like_state(self, oid, user_id: str) -> Tuple[bool, int]:
        """Current (liked, like_count) for a post that the update did not match."""
        doc = self.collection.find_one({"_id": oid, "is_active": True}, {"likes": 1, "like_count": 1})
        if doc is None:
            raise NotFoundError("Post not found")
        return user_id in (doc.get("likes") or []), doc.get("like_count") or 0

    def add_like(self, post_id: str, user_id: str) -> Tuple[bool, int]:
        """
        Like a post. Liking twice is a no-op.

        Returns:
            (liked, like_count) as stored after the update
        """
        oid = to_object_id(post_id, self.label)
        with remote_call("Failed to like post"):
            doc = self.collection.find_one_and_update(
                {"_id": oid, "is_active": True, "likes": {"$ne": user_id}},
                {"$addToSet": {"likes": user_id}, "$inc": {"like_count": 1}},
                projection={"like_count": 1},
                return_document=ReturnDocument.AFTER
            )
            if doc is None:
                return self._like_state(oid, user_id)
        return True, doc["like_count"]

    def remove_like(self, post_id: str, user_id: str) -> Tuple[bool, int]:
        """Unlike a post. Unliking a post you have not liked is a no-op."""
        oid = to_object_id(post_id, self.label)
        with remote_call("Failed to unlike post"):
            doc = self.collection.find_one_and_update(
                {"_id": oid, "is_active": True, "likes": user_id},
                {"$pull": {"likes": user_id}, "$inc": {"like_count": -1}},
                projection={"like_count": 1},
                return_document=ReturnDocument.AFTER
            )
            if doc is None:
                return self._like_state(oid, user_id)
        return False, doc["like_count"]

    def toggle_like(self, post_id: str, user_id: str) -> Tuple[bool, int]:
        oid = to_object_id(post_id, self.label)
        with remote_call("Failed to toggle like"):
            liked, _ = self._like_state(oid, user_id)
        if liked:
            return self.remove_like(post_id, user_id)
        return self.add_like(post_id, user_id)

    # ============================================================
    # COMMENTS
    # ============================================================

    def add_comment(self, post_id: str, text: Optional[str], author: Dict[str, Any]) -> dict:
        """
        Append a comment. The server assigns the id and timestamp.

        Returns:
            The stored comment
        """
        if text is None or not text.strip():
            raise ValidationError("Comment text is required")

        oid = to_object_id(post_id, self.label)
        comment = {
            "id": uuid.uuid4().hex,
            "author": author.get("display_name") or "Anonymous",
            "author_id": author["uid"],
            "text": text.strip(),
            "created_at": utcnow(),
        }
        with remote_call("Failed to add comment"):
            result = self.collection.update_one(
                {"_id": oid, "is_active": True},
                {"$push": {"comments": comment}, "$inc": {"comment_count": 1}}
            )
        if result.matched_count == 0:
            raise NotFoundError("Post not found")
        return comment

    def statistics(self, author_id: str) -> Dict[str, Any]:
        posts = self.list_by_author(author_id)
        total_likes = sum(post.get("like_count") or 0 for post in posts)
        total_comments = sum(post.get("comment_count") or 0 for post in posts)
        return {
            "total_posts": len(posts),
            "total_likes": total_likes,
            "total_comments": total_comments,
            "engagement_rate": round((total_likes + total_comments) / len(posts), 2) if posts else 0.0,
            "recent_posts": posts[:5],
        }


def get_post_service() -> PostService:
    return PostService()
