"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import TokenClaims
from auth.service import AuthService
from database.session import get_db_session
from database.store import SqlAlchemyUserStore


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> AuthService:
    state = request.app.state
    return AuthService(SqlAlchemyUserStore(session), state.hasher, state.tokens)


def get_current_user(request: Request) -> TokenClaims:
    """
    Run the access guard on the request.  The identity is also left on
    ``request.state.user`` for handlers that prefer reading it from there.
    """
    return request.app.state.guard.check(request)
