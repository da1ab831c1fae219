"""
Tests for the signup / login flows with mocked collaborators.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from auth.errors import InvalidCredentialsError, UserAlreadyExistsError
from auth.jwt import TokenService
from auth.models import AccessTokenResponse, LoginRequest, SignupRequest, TokenClaims, UserPublic
from auth.password import PasswordHasher
from auth.service import AuthService

SIGNUP = SignupRequest(
    name="Tarantino Tester",
    email="tarantino@tester.com",
    password="Str0ngP@ss",
    password_confirm="Str0ngP@ss",
)

LOGIN = LoginRequest(email="tarantino@tester.com", password="Str0ngP@ss")


def _existing_user():
    now = datetime.now(timezone.utc)
    return SimpleNamespace(
        id=1,
        name="Tarantino Tester",
        email="tarantino@tester.com",
        password_hash="hashedPassword",
        created_at=now,
        updated_at=now,
    )


class TestAuthService:
    def setup_method(self):
        self.store = MagicMock()
        self.store.find_by_email = AsyncMock()
        self.store.create = AsyncMock()
        self.hasher = MagicMock(spec=PasswordHasher)
        self.tokens = MagicMock(spec=TokenService)
        self.service = AuthService(self.store, self.hasher, self.tokens)


class TestSignup(TestAuthService):
    @pytest.mark.asyncio
    async def test_existing_email_is_a_conflict(self):
        self.store.find_by_email.return_value = _existing_user()

        with pytest.raises(UserAlreadyExistsError, match="User already exists"):
            await self.service.signup(SIGNUP)

        self.store.find_by_email.assert_awaited_once_with("tarantino@tester.com")
        self.store.create.assert_not_called()
        self.hasher.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_user_and_returns_public_view(self):
        self.store.find_by_email.return_value = None
        self.hasher.hash.return_value = "hash3dP@ss"
        self.store.create.return_value = _existing_user()

        result = await self.service.signup(SIGNUP)

        assert result == UserPublic(id=1, email="tarantino@tester.com", name="Tarantino Tester")
        assert "password_hash" not in result.model_dump()
        self.hasher.hash.assert_called_once_with("Str0ngP@ss")
        self.store.create.assert_awaited_once_with(
            name="Tarantino Tester",
            email="tarantino@tester.com",
            password_hash="hash3dP@ss",
        )

    @pytest.mark.asyncio
    async def test_does_not_issue_a_token(self):
        self.store.find_by_email.return_value = None
        self.hasher.hash.return_value = "hash3dP@ss"
        self.store.create.return_value = _existing_user()

        await self.service.signup(SIGNUP)

        self.tokens.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_conflict_propagates(self):
        self.store.find_by_email.return_value = None
        self.hasher.hash.return_value = "hash3dP@ss"
        self.store.create.side_effect = UserAlreadyExistsError()

        with pytest.raises(UserAlreadyExistsError):
            await self.service.signup(SIGNUP)


class TestLogin(TestAuthService):
    @pytest.mark.asyncio
    async def test_valid_credentials_return_access_token(self):
        self.store.find_by_email.return_value = _existing_user()
        self.hasher.verify.return_value = True
        self.tokens.issue.return_value = "mock.jwt.token"

        result = await self.service.login(LOGIN)

        assert result == AccessTokenResponse(access_token="mock.jwt.token")
        self.store.find_by_email.assert_awaited_once_with("tarantino@tester.com")
        self.hasher.verify.assert_called_once_with("Str0ngP@ss", "hashedPassword")
        self.tokens.issue.assert_called_once_with(
            TokenClaims(id=1, name="Tarantino Tester", email="tarantino@tester.com")
        )

    @pytest.mark.asyncio
    async def test_unknown_email(self):
        self.store.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            await self.service.login(LOGIN)

        self.hasher.verify.assert_not_called()
        self.tokens.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        self.store.find_by_email.return_value = _existing_user()
        self.hasher.verify.return_value = False

        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            await self.service.login(LOGIN)

        self.tokens.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_failures_are_indistinguishable(self):
        self.store.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login(LOGIN)

        self.store.find_by_email.return_value = _existing_user()
        self.hasher.verify.return_value = False
        with pytest.raises(InvalidCredentialsError) as mismatch:
            await self.service.login(LOGIN)

        assert type(unknown.value) is type(mismatch.value)
        assert unknown.value.message == mismatch.value.message


class TestLoginIssuesGuardableToken:
    @pytest.mark.asyncio
    async def test_token_decodes_to_user(self):
        hasher = PasswordHasher(rounds=4)
        tokens = TokenService(secret="test-secret-key-with-at-least-32-bytes!!")
        user = _existing_user()
        user.password_hash = hasher.hash("Str0ngP@ss")
        store = MagicMock()
        store.find_by_email = AsyncMock(return_value=user)

        result = await AuthService(store, hasher, tokens).login(LOGIN)

        assert tokens.verify(result.access_token) == TokenClaims(
            id=1, email="tarantino@tester.com", name="Tarantino Tester"
        )
