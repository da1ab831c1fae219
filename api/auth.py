"""
Auth API routes — signup, login, check.

Route prefix: /auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_auth_service, get_current_user
from auth.models import (
    AccessTokenResponse,
    LoginRequest,
    SignupRequest,
    UserPublic,
)
from auth.service import AuthService
from auth.validation import ensure_valid, validate_login, validate_signup

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """Register a new user."""
    ensure_valid(validate_signup(req))
    return await service.signup(req)


@router.post("/login", response_model=AccessTokenResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AccessTokenResponse:
    """Login with email + password."""
    ensure_valid(validate_login(req))
    return await service.login(req)


@router.get("/check", response_model=UserPublic, dependencies=[Depends(get_current_user)])
async def check(request: Request) -> UserPublic:
    """Return the identity attached by the access guard."""
    return UserPublic.model_validate(request.state.user.model_dump())
