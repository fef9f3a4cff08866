# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for AuthService."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from src.core.errors import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    NoRolesError,
    UserInactiveError,
)
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService, touch_last_login
from src.models.auth import ActiveContext, LoginRequest
from tests.fakes import (
    FakeRoleRepository,
    FakeUserRepository,
    FakeUserRoleRepository,
    make_grant,
    make_role,
    make_school,
    make_user,
)

PASSWORD = "correct-horse-battery"


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def roles() -> FakeRoleRepository:
    return FakeRoleRepository()


@pytest.fixture
def user_roles(roles: FakeRoleRepository) -> FakeUserRoleRepository:
    return FakeUserRoleRepository(roles)


@pytest.fixture
def logins() -> list:
    return []


@pytest.fixture
def service(users, user_roles, jwt_manager, password_hasher, logins) -> AuthService:
    return AuthService(users, user_roles, jwt_manager, password_hasher, on_login=logins.append)


@pytest.fixture
def school():
    return make_school()


@pytest.fixture
def user(users, password_hasher: PasswordHasher, school):
    account = make_user(password_hash=password_hasher.hash(PASSWORD), school_id=school.id)
    users.items[account.id] = account
    return account


def grant(user_roles: FakeUserRoleRepository, user, name: str, permissions: list[str], **kwargs):
    role = make_role(name, scope="school")
    user_roles.roles.items[role.id] = role
    user_roles.role_permissions[role.id] = permissions
    row = make_grant(user, role, school_id=kwargs.pop("school_id", user.school_id), **kwargs)
    user_roles.items[row.id] = row
    return role


class TestLogin:
    """Tests for password login."""

    @pytest.mark.asyncio
    async def test_login_returns_tokens_and_context(
        self, service: AuthService, user_roles, user, jwt_manager: JWTManager, logins
    ) -> None:
        role = grant(user_roles, user, "school_admin", ["units:read", "schools:read"])

        response = await service.login(LoginRequest(email="Ada@Acme.edu", password=PASSWORD))

        assert response.token_type == "Bearer"
        assert response.expires_in == 900
        assert response.user.email == "ada@acme.edu"
        assert response.user.full_name == "Ada Lovelace"
        assert response.active_context.role_name == "school_admin"
        assert response.active_context.role_id == str(role.id)
        assert response.active_context.permissions == ["schools:read", "units:read"]
        assert logins == [user.id]

        claims = jwt_manager.decode_token(response.access_token)
        assert claims.sub == str(user.id)
        assert claims.active_context == response.active_context

    @pytest.mark.asyncio
    async def test_unknown_email_burns_a_verification(
        self, users, user_roles, jwt_manager
    ) -> None:
        hasher = AsyncMock(spec=PasswordHasher)
        service = AuthService(users, user_roles, jwt_manager, hasher)

        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="ghost@acme.edu", password="whatever"))

        hasher.burn_verification.assert_awaited_once_with("whatever")

    @pytest.mark.asyncio
    async def test_wrong_password_is_indistinguishable(
        self, service: AuthService, user_roles, user
    ) -> None:
        grant(user_roles, user, "teacher", ["units:read"])

        with pytest.raises(InvalidCredentialsError) as wrong:
            await service.login(LoginRequest(email=user.email, password="nope-nope"))
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login(LoginRequest(email="ghost@acme.edu", password="nope-nope"))

        assert wrong.value.to_dict() == unknown.value.to_dict()

    @pytest.mark.asyncio
    async def test_inactive_user_is_refused(self, service: AuthService, user_roles, user) -> None:
        grant(user_roles, user, "teacher", ["units:read"])
        user.is_active = False

        with pytest.raises(UserInactiveError):
            await service.login(LoginRequest(email=user.email, password=PASSWORD))

    @pytest.mark.asyncio
    async def test_user_without_roles_fails(self, service: AuthService, user, logins) -> None:
        with pytest.raises(NoRolesError):
            await service.login(LoginRequest(email=user.email, password=PASSWORD))

        assert logins == []


class TestActiveContext:
    """Tests for primary role and permission resolution."""

    @pytest.mark.asyncio
    async def test_earliest_grant_is_primary(self, service: AuthService, user_roles, user) -> None:
        grant(user_roles, user, "teacher", ["units:read"], granted_offset=10)
        first = grant(user_roles, user, "coordinator", ["subjects:read"], granted_offset=0)

        context = await service.build_active_context(user)

        assert context.role_id == str(first.id)
        assert context.role_name == "coordinator"

    @pytest.mark.asyncio
    async def test_permissions_are_union_sorted_and_unique(
        self, service: AuthService, user_roles, user
    ) -> None:
        grant(user_roles, user, "teacher", ["units:read", "subjects:read"])
        grant(user_roles, user, "coordinator", ["subjects:read", "memberships:read"], granted_offset=1)

        context = await service.build_active_context(user)

        assert context.permissions == ["memberships:read", "subjects:read", "units:read"]
        assert context.school_id == str(user.school_id)

    @pytest.mark.asyncio
    async def test_grants_outside_home_school_are_ignored(
        self, service: AuthService, user_roles, user
    ) -> None:
        grant(user_roles, user, "teacher", ["units:read"], school_id=uuid4())

        with pytest.raises(NoRolesError):
            await service.build_active_context(user)

    @pytest.mark.asyncio
    async def test_revoked_grants_are_ignored(self, service: AuthService, user_roles, user) -> None:
        grant(user_roles, user, "teacher", ["units:read"], is_active=False)
        grant(user_roles, user, "viewer", ["schools:read"], granted_offset=5)

        context = await service.build_active_context(user)

        assert context.role_name == "viewer"
        assert context.permissions == ["schools:read"]


class TestVerifyToken:
    def _context(self) -> ActiveContext:
        return ActiveContext(role_id=str(uuid4()), role_name="teacher", permissions=["units:read"])

    def test_valid_token(self, service: AuthService, jwt_manager: JWTManager) -> None:
        user_id = uuid4()
        pair = jwt_manager.create_token_pair(user_id, "ada@acme.edu", self._context())

        result = service.verify_token(pair.access_token)

        assert result.valid is True
        assert result.user_id == str(user_id)
        assert result.email == "ada@acme.edu"
        assert result.active_context.permissions == ["units:read"]
        assert result.error is None

    def test_empty_token(self, service: AuthService) -> None:
        result = service.verify_token("")

        assert result.valid is False
        assert result.error == "token is required"

    def test_invalid_token(self, service: AuthService) -> None:
        result = service.verify_token("garbage")

        assert result.valid is False
        assert result.error == "invalid token"
        assert result.user_id is None


class TestRefreshAndLogout:
    @pytest.mark.asyncio
    async def test_refresh_is_always_rejected(self, service: AuthService) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh("anything")

    @pytest.mark.asyncio
    async def test_logout_is_a_noop(self, service: AuthService) -> None:
        assert await service.logout(str(uuid4())) is None


class TestTouchLastLogin:
    @pytest.mark.asyncio
    async def test_timeout_is_swallowed(self) -> None:
        @asynccontextmanager
        async def _slow_session():
            await asyncio.sleep(1)
            yield None

        with patch("src.domains.auth.service.get_session", _slow_session):
            await touch_last_login(uuid4(), timeout=0.01)

    @pytest.mark.asyncio
    async def test_uninitialized_database_is_swallowed(self) -> None:
        # get_session raises DatabaseError when no engine exists
        await touch_last_login(uuid4(), timeout=0.5)

    @pytest.mark.asyncio
    async def test_connection_error_is_swallowed(self) -> None:
        @asynccontextmanager
        async def _broken_session():
            raise OSError("connection refused")
            yield None

        with patch("src.domains.auth.service.get_session", _broken_session):
            await touch_last_login(uuid4(), timeout=0.5)
