"""
User persistence adapter.

``UserStore`` is the contract the auth flows depend on;
``SqlAlchemyUserStore`` implements it over an async session.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import UserAlreadyExistsError
from database.models import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def create(self, name: str, email: str, password_hash: str) -> User: ...


class SqlAlchemyUserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a user and flush so ``id`` is assigned.

        The unique constraint on ``email`` settles concurrent signups; the
        loser gets ``UserAlreadyExistsError``.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            logger.info("Unique constraint rejected signup for an existing email")
            raise UserAlreadyExistsError() from exc
        return user
