"""
Access guard for protected requests.

Reads the ``Authorization`` header, verifies the bearer token and attaches
the decoded identity to the request context under ``state.user``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from auth.errors import AuthorizationRejected, AuthzInvalid, AuthzMalformed, AuthzMissing
from auth.jwt import TokenError, TokenService
from auth.models import TokenClaims

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the token half of a ``Bearer <token>`` header value.

    The value must split on single spaces into exactly two non-empty parts
    and the scheme must be ``Bearer`` (case-sensitive).
    """
    if authorization is None:
        raise AuthzMissing()
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise AuthzMalformed()
    return parts[1]


class AccessGuard:
    """One verification per request; no retries."""

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, headers: Mapping[str, str]) -> TokenClaims:
        token = extract_bearer_token(headers.get("authorization"))
        try:
            return self._tokens.verify(token)
        except TokenError as exc:
            raise AuthzInvalid() from exc

    def check(self, request: Any) -> TokenClaims:
        """
        Authorize ``request`` (anything with ``headers`` and ``state``).

        On success the identity is stored as ``request.state.user`` and
        returned; otherwise an ``AuthorizationRejected`` subclass is raised.
        """
        try:
            identity = self.authenticate(request.headers)
        except AuthorizationRejected as exc:
            logger.debug("Rejected request: %s authorization", exc.reason.value)
            raise
        request.state.user = identity
        return identity
