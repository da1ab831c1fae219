"""
JWT access token creation and verification.

Tokens are HS256-signed JWTs carrying the ``{id, email, name}`` identity
snapshot plus ``iat`` / ``exp``.  The signing secret is injected at
construction time (``config.jwt_secret`` in the running app).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
from pydantic import ValidationError

from auth.errors import ConfigurationError
from auth.models import TokenClaims

DEFAULT_EXPIRY_SECONDS = 3600


class TokenError(Exception):
    """Token failed signature, expiry or payload checks."""


class TokenService:
    """Issues and verifies access tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigurationError("JWT secret is not configured (set JWT_SECRET)")
        self._secret = secret
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    def issue(self, claims: TokenClaims) -> str:
        """Create a signed token containing the identity claims and expiry."""
        now = datetime.now(timezone.utc)
        payload = {
            **claims.model_dump(),
            "iat": now,
            "exp": now + timedelta(seconds=self.expiry_seconds),
        }
        return pyjwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify ``token`` and return its identity claims.

        Raises ``TokenError`` on a bad signature, an expired token or a
        payload that does not carry ``{id, email, name}``.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenError("Token has expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise TokenError(f"Invalid token: {exc}") from exc

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise TokenError("Token payload is missing identity claims") from exc
