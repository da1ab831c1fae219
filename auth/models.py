"""
Pydantic schemas shared by the auth flows and the HTTP layer.

Request bodies accept anything for each field so that shape checks are
reported by ``auth.validation`` as an ordered issue list rather than by
pydantic's own errors.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationIssue(BaseModel):
    field: str
    rule: str
    message: str


# ── Requests ───────────────────────────────────────────────────────────


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    email: Any = None
    password: Any = None
    password_confirm: Any = Field(default=None, alias="passwordConfirm")


class LoginRequest(BaseModel):
    email: Any = None
    password: Any = None


# ── Responses / claims ─────────────────────────────────────────────────


class UserPublic(BaseModel):
    """User record without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str


class TokenClaims(UserPublic):
    """Identity snapshot embedded in an access token."""


class AccessTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
