"""
Input validation for the signup and login payloads.

Each field has an ordered list of rules; evaluation of a field stops at
its first failing rule, so the result holds at most one issue per field,
in declaration order.
"""

from __future__ import annotations

import operator
import re
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from email_validator import EmailNotValidError, validate_email

from auth.errors import ValidationFailed
from auth.models import LoginRequest, SignupRequest, ValidationIssue

Check = Callable[[Any, Mapping[str, Any]], bool]


class Rule(NamedTuple):
    name: str
    check: Check
    message: str  # formatted with ``field``


Schema = Sequence[Tuple[str, Sequence[Rule]]]


# ── Rule factories ─────────────────────────────────────────────────────


def is_string() -> Rule:
    return Rule("is_string", lambda v, _: isinstance(v, str), "{field} must be a string")


def min_length(n: int) -> Rule:
    return Rule(
        "min_length",
        lambda v, _: isinstance(v, str) and len(v) >= n,
        f"{{field}} must be longer than or equal to {n} characters",
    )


def max_length(n: int) -> Rule:
    return Rule(
        "max_length",
        lambda v, _: isinstance(v, str) and len(v) <= n,
        f"{{field}} must be shorter than or equal to {n} characters",
    )


def _looks_like_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_email() -> Rule:
    return Rule("is_email", lambda v, _: _looks_like_email(v), "{field} must be an email")


def is_not_empty() -> Rule:
    return Rule("is_not_empty", lambda v, _: v is not None and v != "", "{field} should not be empty")


_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def is_strong_password(
    min_len: int = 8,
    min_lower: int = 1,
    min_upper: int = 1,
    min_digits: int = 1,
    min_symbols: int = 1,
) -> Rule:
    def check(value: Any, _: Mapping[str, Any]) -> bool:
        if not isinstance(value, str) or len(value) < min_len:
            return False
        return (
            len(_LOWER.findall(value)) >= min_lower
            and len(_UPPER.findall(value)) >= min_upper
            and len(_DIGIT.findall(value)) >= min_digits
            and len(_SYMBOL.findall(value)) >= min_symbols
        )

    return Rule("is_strong_password", check, "{field} is not strong enough")


def match(
    other: str,
    equals: Callable[[Any, Any], bool] = operator.eq,
    message: Optional[str] = None,
) -> Rule:
    """
    Cross-field rule: the value must equal the sibling field ``other``.

    Both absent passes, both present and equal passes, anything else fails.
    """

    def check(value: Any, data: Mapping[str, Any]) -> bool:
        sibling = data.get(other)
        if value is None and sibling is None:
            return True
        if value is None or sibling is None:
            return False
        return equals(value, sibling)

    return Rule("match", check, message or f"{{field}} must match {other}")


# ── Schemas ────────────────────────────────────────────────────────────


SIGNUP_SCHEMA: Schema = (
    ("name", (is_string(), min_length(4), max_length(20))),
    ("email", (is_email(),)),
    ("password", (is_strong_password(),)),
    ("passwordConfirm", (match("password"),)),
)

LOGIN_SCHEMA: Schema = (
    ("email", (is_email(),)),
    ("password", (is_not_empty(),)),
)


def validate(data: Mapping[str, Any], schema: Schema) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for field, rules in schema:
        value = data.get(field)
        for rule in rules:
            if not rule.check(value, data):
                issues.append(
                    ValidationIssue(
                        field=field,
                        rule=rule.name,
                        message=rule.message.format(field=field),
                    )
                )
                break
    return issues


def validate_signup(req: SignupRequest) -> List[ValidationIssue]:
    return validate(req.model_dump(by_alias=True), SIGNUP_SCHEMA)


def validate_login(req: LoginRequest) -> List[ValidationIssue]:
    return validate(req.model_dump(by_alias=True), LOGIN_SCHEMA)


def ensure_valid(issues: List[ValidationIssue]) -> None:
    """Raise ``ValidationFailed`` if ``issues`` is non-empty."""
    if issues:
        raise ValidationFailed(issues)
