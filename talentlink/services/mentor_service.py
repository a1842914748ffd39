"""
Mentor Directory Service

Public listing of mentors for students. Only mentors passing the LinkedIn
gate (see mentor_eligibility) are listed. Results are cached in-process:
- listings: settings.mentor_cache_seconds (default 5 minutes), per page size
- statistics: settings.mentor_stats_cache_seconds (default 10 minutes)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pymongo.errors import PyMongoError

from talentlink.core.config import get_settings
from talentlink.core.errors import remote_call
from talentlink.db.mongodb import get_collection, COLLECTIONS
from talentlink.services.cache import ExpiringCache
from talentlink.services.mentor_eligibility import is_valid_linkedin_url
from talentlink.services.profile_completion import percentage

logger = logging.getLogger(__name__)
settings = get_settings()

mentor_cache = ExpiringCache(ttl_seconds=settings.mentor_cache_seconds)

STATS_CACHE_KEY = "mentor_stats"


def transform_mentor(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Raw user document -> public mentor card."""
    name = doc.get("display_name") or f"{doc.get('first_name') or ''} {doc.get('last_name') or ''}".strip()
    return {
        "id": str(doc["_id"]),
        "name": name or "Anonymous Mentor",
        "email": doc.get("email") or "",
        "expertise": doc.get("expertise") or [],
        "mentorship_areas": doc.get("mentorship_areas") or [],
        "experience": doc.get("experience") or "",
        "bio": doc.get("bio") or "",
        "availability": doc.get("availability") or "",
        "linkedin_url": doc.get("linkedin_url") or "",
        "profile_complete": doc.get("profile_complete") or False,
        "profile_completion_percentage": doc.get("profile_completion_percentage") or 0,
        "photo_url": doc.get("photo_url") or "",
        "created_at": doc.get("created_at"),
        "last_updated": doc.get("last_updated"),
    }


def _users():
    return get_collection(COLLECTIONS["users"])


def fetch_qualified_mentors(page_size: int = 20) -> Dict[str, Any]:
    """
    List mentors that pass the LinkedIn gate.

    Over-fetches page_size * 2 mentor records because some are filtered out,
    then trims to page_size.

    Returns:
        {"mentors": [...], "has_more": bool, "total": int}
    """
    cache_key = f"mentors_{page_size}"
    cached = mentor_cache.get(cache_key)
    if cached is not None:
        return cached

    with remote_call("Failed to fetch qualified mentors"):
        docs = list(_users().find({"role": "mentor"}).limit(page_size * 2))

    qualified = [transform_mentor(doc) for doc in docs if is_valid_linkedin_url(doc.get("linkedin_url"))]
    page = qualified[:page_size]
    result = {
        "mentors": page,
        "has_more": len(qualified) > page_size,
        "total": len(page),
    }
    mentor_cache.set(cache_key, result)
    return result


def fetch_mentors_by_expertise(areas: Optional[Sequence[str]], page_size: int = 20) -> List[Dict[str, Any]]:
    """Qualified mentors whose expertise contains any of the given areas."""
    areas = [area.strip() for area in (areas or []) if area and area.strip()]
    if not areas:
        return fetch_qualified_mentors(page_size)["mentors"]

    with remote_call("Failed to fetch mentors with specified expertise"):
        docs = list(
            _users().find({"role": "mentor", "expertise": {"$in": areas}}).limit(page_size)
        )
    return [transform_mentor(doc) for doc in docs if is_valid_linkedin_url(doc.get("linkedin_url"))]


def fetch_mentor_by_id(mentor_id: str) -> Optional[Dict[str, Any]]:
    """Mentor card, or None when the user is missing or not a mentor."""
    with remote_call("Failed to fetch mentor details"):
        doc = _users().find_one({"_id": mentor_id})
    if doc is None or doc.get("role") != "mentor":
        return None
    return transform_mentor(doc)


def get_mentor_stats() -> Dict[str, int]:
    """
    Totals for the mentor directory. A store failure yields zeros
    rather than an error so the directory page still renders.
    """
    cached = mentor_cache.get(STATS_CACHE_KEY)
    if cached is not None:
        return cached

    try:
        docs = list(_users().find({"role": "mentor"}, {"linkedin_url": 1}))
    except PyMongoError as e:
        logger.warning("Error fetching mentor stats: %s", e)
        return {"total_mentors": 0, "qualified_mentors": 0, "qualification_rate": 0}

    total = len(docs)
    qualified = sum(1 for doc in docs if is_valid_linkedin_url(doc.get("linkedin_url")))
    stats = {
        "total_mentors": total,
        "qualified_mentors": qualified,
        "qualification_rate": percentage(qualified, total),
    }
    mentor_cache.set(STATS_CACHE_KEY, stats, ttl=settings.mentor_stats_cache_seconds)
    return stats


def clear_mentor_cache() -> None:
    mentor_cache.clear()
    logger.info("Mentor cache cleared")
