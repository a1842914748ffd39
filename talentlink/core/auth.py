"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies exposing the read-only session identity
  (uid, email, role, display_name) to protected routes
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from talentlink.core.config import get_settings
from talentlink.core.errors import AuthenticationError, InvalidRoleError, remote_call
from talentlink.db.mongodb import get_collection, COLLECTIONS

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (auto_error off so a missing header is a 401, not a 403)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise AuthenticationError()

    # Verify user exists
    with remote_call("Failed to load session"):
        user = get_collection(COLLECTIONS["users"]).find_one(
            {"_id": payload["sub"]},
            {"email": 1, "role": 1, "display_name": 1, "first_name": 1, "last_name": 1}
        )

    if not user:
        raise AuthenticationError()

    name = user.get("display_name") or f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
    return {
        "uid": user["_id"],
        "email": user.get("email"),
        "role": user.get("role"),
        "display_name": name,
    }


def require_role(*roles: str):
    """
    Dependency factory - Require one of the given roles.

    Usage:
        @router.post("", dependencies=[Depends(require_role("organization"))])
    """
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in roles:
            allowed = " or ".join(f"{role}s" for role in roles)
            raise InvalidRoleError(f"Only {allowed} can do this")
        return user
    return dependency
