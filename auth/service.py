"""
Signup and login flows.

Composes the user store, password hasher and token service.  Input is
expected to have passed ``auth.validation`` already.
"""

from __future__ import annotations

import asyncio
import logging

from auth.errors import InvalidCredentialsError, UserAlreadyExistsError
from auth.jwt import TokenService
from auth.models import (
    AccessTokenResponse,
    LoginRequest,
    SignupRequest,
    TokenClaims,
    UserPublic,
)
from auth.password import PasswordHasher
from database.store import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def signup(self, req: SignupRequest) -> UserPublic:
        """
        Register a new user and return its public view.

        No token is issued here; clients log in afterwards.
        """
        if await self.store.find_by_email(req.email) is not None:
            logger.info("Signup rejected: email already registered")
            raise UserAlreadyExistsError()

        password_hash = await asyncio.to_thread(self.hasher.hash, req.password)

        # password_confirm is never persisted
        user = await self.store.create(
            name=req.name,
            email=req.email,
            password_hash=password_hash,
        )
        logger.info("Registered user %s", user.id)
        return UserPublic(id=user.id, email=user.email, name=user.name)

    async def login(self, req: LoginRequest) -> AccessTokenResponse:
        """Check credentials and issue an access token."""
        user = await self.store.find_by_email(req.email)
        if user is None:
            logger.debug("Login failed: unknown email")
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(self.hasher.verify, req.password, user.password_hash)
        if not valid:
            logger.debug("Login failed: password mismatch for user %s", user.id)
            raise InvalidCredentialsError()

        token = self.tokens.issue(TokenClaims(id=user.id, name=user.name, email=user.email))
        logger.info("Login: user %s", user.id)
        return AccessTokenResponse(access_token=token)
