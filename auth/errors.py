"""
Error taxonomy for the auth flows.

``AuthError`` subclasses are user-facing and are mapped to HTTP responses
in ``api.middleware``.  ``ConfigurationError`` is an internal failure and
is not part of that hierarchy.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from auth.models import ValidationIssue


class AuthError(Exception):
    """Base class for user-facing auth failures."""

    message = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class ValidationFailed(AuthError):
    """Input rejected before any store or crypto work."""

    message = "Validation failed"

    def __init__(self, issues: List[ValidationIssue]) -> None:
        super().__init__()
        self.issues = issues


class ConflictError(AuthError):
    message = "Conflict"


class UserAlreadyExistsError(ConflictError):
    message = "User already exists"


class UnauthorizedError(AuthError):
    message = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    """Unknown email or wrong password; the two are indistinguishable."""

    message = "Invalid credentials"


class RejectReason(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    INVALID = "invalid"


class AuthorizationRejected(UnauthorizedError):
    """
    Raised by the access guard.  Every subclass carries the same outward
    message; ``reason`` is for logs and tests only.
    """

    reason: RejectReason


class AuthzMissing(AuthorizationRejected):
    reason = RejectReason.MISSING


class AuthzMalformed(AuthorizationRejected):
    reason = RejectReason.MALFORMED


class AuthzInvalid(AuthorizationRejected):
    reason = RejectReason.INVALID


class ConfigurationError(Exception):
    """Startup-fatal misconfiguration (e.g. empty signing secret)."""
