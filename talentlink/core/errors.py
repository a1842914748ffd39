"""
Error taxonomy shared by services, routes and the client library.

Every error carries the HTTP status it maps to, a short machine-readable
code, and a message that is safe to show to the user as-is.
"""

import logging
from contextlib import contextmanager

from fastapi import status
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class TalentLinkError(Exception):
    """Base class for all TalentLink errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    detail: str = "Request failed"

    def __init__(self, detail: str = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class NotFoundError(TalentLinkError):
    """Referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    detail = "Record not found"


class InvalidRoleError(TalentLinkError):
    """The record's role disqualifies it from the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "invalid_role"
    detail = "Operation not allowed for this role"


class PermissionDeniedError(TalentLinkError):
    """Caller does not own the record it tries to change."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"
    detail = "Permission denied"


class ValidationError(TalentLinkError):
    """Malformed input to a mutating operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    detail = "Invalid input"


class AuthenticationError(TalentLinkError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_failed"
    detail = "Invalid or expired token"


class RemoteFailure(TalentLinkError):
    """The backend call itself failed (network, permission, quota)."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "remote_failure"
    detail = "The data service is unavailable. Please try again."


# code -> error class, used by the client library to rebuild server errors
ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        NotFoundError, InvalidRoleError, PermissionDeniedError,
        ValidationError, AuthenticationError, RemoteFailure
    )
}


@contextmanager
def remote_call(action: str):
    """
    Convert store errors raised inside the block into RemoteFailure.

    Usage:
        with remote_call("Failed to create post"):
            collection.insert_one(doc)
    """
    try:
        yield
    except PyMongoError as exc:
        logger.error("%s: %s", action, exc)
        raise RemoteFailure(f"{action}: {exc}") from exc
