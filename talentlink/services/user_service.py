"""
User Service - accounts and profile data in the users collection.

Each user document is keyed by its uid and carries:
- identity: email, first_name, last_name, display_name, role
- role-specific profile fields (see profile_completion.SIGNUP_DEFAULTS)
- a denormalized completion cache: profile_complete and
  profile_completion_percentage

The completion cache is always written in the SAME update as the profile
fields it was computed from, so the two never diverge.
"""

import logging
import uuid
from typing import Any, Dict, Optional, Tuple

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from talentlink.core.auth import hash_password, verify_password
from talentlink.core.errors import (
    AuthenticationError, InvalidRoleError, NotFoundError, ValidationError, remote_call
)
from talentlink.db.mongodb import get_collection, COLLECTIONS
from talentlink.schemas.schemas import CompletionStatus, UserResponse
from talentlink.services.mongo_service import serialize_doc, utcnow
from talentlink.services.profile_completion import (
    EDITABLE_FIELDS, LIST_FIELDS, SIGNUP_DEFAULTS, compute_completion
)

logger = logging.getLogger(__name__)

ROLE_NAMES = {"user": "User", "mentor": "Mentor", "organization": "Organization"}


def split_list(value: Any) -> list:
    """Turn "a, b ,," or ["a", " b", ""] into ["a", "b"]."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]


def normalize_profile_payload(role: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Clean a profile form submission for storage.

    - "name" is split into first_name / last_name and kept as display_name
    - list fields accept comma separated text
    - string fields are trimmed
    - fields outside the role's editable set are rejected
    """
    data = {key: value for key, value in payload.items() if value is not None}

    name = data.pop("name", None)
    if name is not None and name.strip():
        parts = name.strip().split()
        data.setdefault("first_name", parts[0])
        data.setdefault("last_name", " ".join(parts[1:]))
        data.setdefault("display_name", name.strip())

    allowed = EDITABLE_FIELDS.get(role, ())
    rejected = sorted(key for key in data if key not in allowed)
    if rejected:
        raise ValidationError(
            f"Fields not editable for role {role}: {', '.join(rejected)}"
        )

    clean = {}
    for key, value in data.items():
        if key in LIST_FIELDS:
            clean[key] = split_list(value)
        elif isinstance(value, str):
            clean[key] = value.strip()
        else:
            clean[key] = value
    return clean


def display_name(doc: Dict[str, Any], fallback: str = "") -> str:
    name = doc.get("display_name") or f"{doc.get('first_name') or ''} {doc.get('last_name') or ''}".strip()
    return name or fallback


def redirect_path(role: str, user: Optional[dict], is_new_user: bool = False) -> str:
    """Where the UI should go after signup/login."""
    if is_new_user or (user and not user.get("profile_complete")):
        return f"/profile/complete?role={role}"
    return "/feed"


def build_user_response(doc: dict) -> UserResponse:
    role = doc.get("role")
    profile_keys = list(SIGNUP_DEFAULTS.get(role, {}))
    return UserResponse(
        uid=doc.get("uid") or doc.get("id"),
        email=doc.get("email", ""),
        first_name=doc.get("first_name"),
        last_name=doc.get("last_name"),
        display_name=doc.get("display_name"),
        role=role,
        profile_complete=doc.get("profile_complete", False),
        profile_completion_percentage=doc.get("profile_completion_percentage", 0),
        profile={key: doc.get(key) for key in profile_keys},
        created_at=doc["created_at"],
        last_updated=doc.get("last_updated"),
    )


class UserService:
    """
    Handles user accounts and profile writes.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def register(self, email: str, password: str, first_name: str, last_name: str, role: str) -> dict:
        """
        Create the account document with empty role-specific fields.

        Returns:
            The stored user document (serialized)
        """
        email = email.strip().lower()
        with remote_call("Failed to create account"):
            if self.collection.find_one({"email": email}):
                raise ValidationError("An account with this email already exists")

            uid = uuid.uuid4().hex
            now = utcnow()
            doc = {
                "_id": uid,
                "uid": uid,
                "email": email,
                "password_hash": hash_password(password),
                "first_name": first_name.strip(),
                "last_name": last_name.strip(),
                "display_name": f"{first_name.strip()} {last_name.strip()}",
                "role": role,
                "created_at": now,
                "last_updated": now,
                **SIGNUP_DEFAULTS.get(role, {}),
            }
            status = compute_completion(doc)
            doc["profile_complete"] = status.is_complete
            doc["profile_completion_percentage"] = status.completion_percentage
            try:
                self.collection.insert_one(doc)
            except DuplicateKeyError:
                raise ValidationError("An account with this email already exists")

        logger.info("Registered %s account %s", role, uid)
        return serialize_doc(doc)

    def authenticate(self, email: str, password: str, role: str) -> dict:
        """
        Verify credentials and the login portal.

        Raises:
            AuthenticationError: unknown email or wrong password
            InvalidRoleError: account registered under another role
        """
        with remote_call("Failed to login"):
            doc = self.collection.find_one({"email": email.strip().lower()})

        if not doc or not verify_password(password, doc.get("password_hash", "")):
            raise AuthenticationError("Invalid email or password")

        if doc.get("role") != role:
            actual = ROLE_NAMES.get(doc.get("role"), doc.get("role"))
            raise InvalidRoleError(
                f"You are registered as a {actual}. Please use the {actual} login portal instead."
            )
        return serialize_doc(doc)

    def get_user(self, uid: str) -> Optional[dict]:
        """Fetch a user document, or None."""
        with remote_call("Failed to fetch user data"):
            doc = self.collection.find_one({"_id": uid})
        return serialize_doc(doc)

    def require_user(self, uid: str) -> dict:
        doc = self.get_user(uid)
        if doc is None:
            raise NotFoundError("User profile not found")
        return doc

    def get_completion_status(self, uid: str) -> CompletionStatus:
        """Completion for a uid; a missing record is 0% complete."""
        return compute_completion(self.get_user(uid))

    def update_profile(self, uid: str, payload: Dict[str, Any]) -> Tuple[dict, CompletionStatus]:
        """
        Merge profile fields and persist them together with the recomputed
        completion cache in one update.

        Returns:
            (updated user document, completion status)
        """
        current = self.require_user(uid)
        changes = normalize_profile_payload(current.get("role"), payload)
        if not changes:
            raise ValidationError("No fields to update")

        status = compute_completion({**current, **changes})
        update = {
            **changes,
            "profile_complete": status.is_complete,
            "profile_completion_percentage": status.completion_percentage,
            "last_updated": utcnow(),
        }
        with remote_call("Failed to update profile"):
            doc = self.collection.find_one_and_update(
                {"_id": uid},
                {"$set": update},
                return_document=ReturnDocument.AFTER
            )
        if doc is None:
            raise NotFoundError("User profile not found")

        logger.info("Profile %s updated (%s%% complete)", uid, status.completion_percentage)
        return serialize_doc(doc), status

    def refresh_completion(self, uid: str) -> CompletionStatus:
        """Recompute and store the completion cache from the current fields."""
        current = self.require_user(uid)
        status = compute_completion(current)
        with remote_call("Failed to update profile completion status"):
            self.collection.update_one(
                {"_id": uid},
                {"$set": {
                    "profile_complete": status.is_complete,
                    "profile_completion_percentage": status.completion_percentage,
                    "last_updated": utcnow(),
                }}
            )
        return status


def get_user_service() -> UserService:
    return UserService()
