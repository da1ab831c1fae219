"""
Global middleware and error mapping.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import (
    AuthError,
    AuthorizationRejected,
    ConflictError,
    UnauthorizedError,
    ValidationFailed,
)
from auth.models import ValidationIssue

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Map ``AuthError`` subclasses and request body errors to JSON error responses."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        headers = None
        if isinstance(exc, ValidationFailed):
            code = status.HTTP_400_BAD_REQUEST
            detail = [issue.model_dump() for issue in exc.issues]
        elif isinstance(exc, ConflictError):
            code = status.HTTP_409_CONFLICT
            detail = exc.message
        elif isinstance(exc, UnauthorizedError):
            code = status.HTTP_401_UNAUTHORIZED
            detail = exc.message
            if isinstance(exc, AuthorizationRejected):
                headers = {"WWW-Authenticate": "Bearer"}
        else:
            code = status.HTTP_400_BAD_REQUEST
            detail = exc.message
        return JSONResponse(status_code=code, content={"detail": detail}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report body shape errors (e.g. a non-object body) like ``ValidationFailed``."""
        issues = []
        for error in exc.errors():
            names = [str(part) for part in error.get("loc", ()) if part != "body"]
            issues.append(
                ValidationIssue(
                    field=names[-1] if names else "body",
                    rule=error.get("type", "invalid"),
                    message=error.get("msg", "Invalid request body"),
                ).model_dump()
            )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": issues})
