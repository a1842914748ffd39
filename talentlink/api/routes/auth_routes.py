"""
Authentication Routes

POST /auth/register - Create account and get JWT token
POST /auth/login - Login through a role portal and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, Depends

from talentlink.core.auth import create_access_token, get_current_user
from talentlink.services.user_service import (
    UserService, get_user_service, build_user_response, redirect_path
)
from talentlink.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new account.

    The account starts with empty role-specific profile fields, so the
    response points the UI at the profile completion page.
    """
    user = users.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        role=request.role.value,
    )
    token = create_access_token(data={"sub": user["id"], "role": user["role"]})

    return TokenResponse(
        access_token=token, uid=user["id"], role=user["role"], is_new_user=True,
        redirect_path=redirect_path(user["role"], user, is_new_user=True)
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, users: UserService = Depends(get_user_service)):
    """
    Login and receive JWT access token.

    The role must match the portal the account was registered under.
    Include token in requests: Authorization: Bearer <token>
    """
    user = users.authenticate(request.email, request.password, request.role.value)
    token = create_access_token(data={"sub": user["id"], "role": user["role"]})

    return TokenResponse(
        access_token=token, uid=user["id"], role=user["role"],
        redirect_path=redirect_path(user["role"], user)
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user), users: UserService = Depends(get_user_service)):
    """Get current authenticated user's info."""
    return build_user_response(users.require_user(user["uid"]))
