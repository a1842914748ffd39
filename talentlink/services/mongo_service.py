"""
MongoDB Service - shared CRUD plumbing for the document collections.

Collections in this database:
1. users       - accounts and role-specific profile data
2. jobs        - job postings (organizations)
3. courses     - course postings (mentors)
4. enrollments - course enrollments
5. posts       - social feed posts

Listings never physically delete anything: a record is retired by flipping
is_active to False (soft delete) and every listing query filters on it.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from talentlink.core.errors import NotFoundError, PermissionDeniedError, remote_call
from talentlink.db.mongodb import get_collection, COLLECTIONS

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS: ids, timestamps and JSON-friendly documents
# ============================================================

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to a dict with a string "id" instead of "_id"."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(record_id: str, label: str = "Record") -> ObjectId:
    """Parse a path id; malformed ids are reported as missing records."""
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        raise NotFoundError(f"{label} not found")


# ============================================================
# BASE SERVICE
# Shared by jobs, courses and posts
# ============================================================

class CollectionService:
    """
    Base class for a soft-deletable, owner-scoped collection.

    Subclasses set:
        collection_name: key in COLLECTIONS
        owner_field: document field holding the owner's uid
        label: singular name used in messages ("Job")
        plural: plural name used in messages ("job postings")
    """

    collection_name: str = None
    owner_field: str = None
    label: str = "Record"
    plural: str = "records"

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS[self.collection_name])

    def _find_raw(self, record_id: str) -> dict:
        """Fetch the raw document or raise NotFoundError."""
        oid = to_object_id(record_id, self.label)
        with remote_call(f"Failed to fetch {self.label.lower()}"):
            doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError(f"{self.label} not found")
        return doc

    def get_by_id(self, record_id: str, active_only: bool = False) -> dict:
        doc = self._find_raw(record_id)
        if active_only and not doc.get("is_active", True):
            raise NotFoundError(f"{self.label} not found")
        return serialize_doc(doc)

    def _get_owned(self, record_id: str, owner_id: str, action: str) -> dict:
        """Fetch a document and verify the caller owns it."""
        doc = self._find_raw(record_id)
        if doc.get(self.owner_field) != owner_id:
            raise PermissionDeniedError(
                f"Unauthorized: You can only {action} your own {self.plural}"
            )
        return doc

    def _find_sorted(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[dict]:
        """Newest first, optionally limited."""
        cursor = self.collection.find(query).sort("created_at", DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return serialize_docs(list(cursor))

    def list_by_owner(self, owner_id: str) -> List[dict]:
        """All records of one owner, including soft-deleted ones."""
        with remote_call(f"Failed to fetch {self.plural}"):
            return self._find_sorted({self.owner_field: owner_id})

    def soft_delete(self, record_id: str, owner_id: str) -> None:
        """Deactivate a record. The document stays in the collection."""
        doc = self._get_owned(record_id, owner_id, "delete")
        now = utcnow()
        with remote_call(f"Failed to delete {self.label.lower()}"):
            self.collection.update_one(
                {"_id": doc["_id"]},
                {"$set": {"is_active": False, "updated_at": now, "deleted_at": now}}
            )
        logger.info("%s %s deactivated by %s", self.label, record_id, owner_id)

    def increment_views(self, record_id: str) -> None:
        """Best-effort view counter. Failures are logged, never raised."""
        try:
            self.collection.update_one({"_id": ObjectId(record_id), "is_active": True}, {"$inc": {"views": 1}})
        except (InvalidId, TypeError, PyMongoError) as e:
            logger.warning("Could not increment views for %s %s: %s", self.label, record_id, e)
