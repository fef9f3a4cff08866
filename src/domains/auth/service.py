# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for login and token verification.

This module provides the main AuthService that orchestrates:
- Password login with active context resolution
- Stateless token verification for this and sibling services
- Logout (a logged no-op, tokens are stateless)
- Refresh (not honored, always rejected)

Example:
    >>> auth_service = AuthService(users, user_roles, jwt_manager, hasher)
    >>> response = await auth_service.login(request)
    >>> result = auth_service.verify_token(response.access_token)
"""

import asyncio
import logging
from typing import Callable
from uuid import UUID

from src.core.errors import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    NoRolesError,
    UserInactiveError,
)
from src.domains.auth.jwt import InvalidTokenError, JWTManager, TokenExpiredError
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.connection import get_session
from src.infrastructure.database.models.auth import User
from src.infrastructure.database.repositories.user import UserRepository
from src.infrastructure.database.repositories.user_role import UserRoleRepository
from src.models.auth import (
    ActiveContext,
    LoginRequest,
    LoginResponse,
    UserInfo,
    VerifyTokenResponse,
)

logger = logging.getLogger(__name__)

LAST_LOGIN_TOUCH_TIMEOUT = 5.0

# Strong references to in-flight touches; the event loop only keeps weak ones.
_background_tasks: set[asyncio.Task] = set()


class AuthService:
    """Authentication service.

    Attributes:
        _users: User repository.
        _user_roles: Role grant repository.
        _jwt_manager: Token manager.
        _password_hasher: Password KDF.
        _on_login: Called with the user id after a successful login.

    Example:
        >>> service = AuthService(users, user_roles, jwt_manager, hasher,
        ...                       on_login=schedule_last_login_touch)
        >>> response = await service.login(LoginRequest(email=..., password=...))
    """

    def __init__(
        self,
        users: UserRepository,
        user_roles: UserRoleRepository,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher,
        on_login: Callable[[UUID], None] | None = None,
    ) -> None:
        self._users = users
        self._user_roles = user_roles
        self._jwt_manager = jwt_manager
        self._password_hasher = password_hasher
        self._on_login = on_login

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Authenticate with email and password.

        Args:
            request: Login credentials.

        Returns:
            Token pair, user info and the active context.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            UserInactiveError: The account is disabled.
            NoRolesError: The user has no active role grant in scope.
        """
        email = request.email.strip().lower()
        user = await self._users.get_by_email(email)

        if user is None:
            await self._password_hasher.burn_verification(request.password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.info("Login refused for inactive user: %s", user.id)
            raise UserInactiveError()

        if not await self._password_hasher.verify_async(request.password, user.password_hash):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        context = await self.build_active_context(user)
        tokens = self._jwt_manager.create_token_pair(user.id, user.email, context)

        if self._on_login is not None:
            self._on_login(user.id)

        logger.info("User logged in: %s (role=%s)", user.id, context.role_name)

        return LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
            token_type=tokens.token_type,
            user=UserInfo(
                id=str(user.id),
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                full_name=user.full_name,
                school_id=str(user.school_id) if user.school_id else None,
            ),
            active_context=context,
        )

    async def build_active_context(self, user: User) -> ActiveContext:
        """Resolve the primary role and permission set of a user.

        The scope is the user's home school with no academic unit. The first
        grant by (granted_at, role_id) is the primary role; permissions are
        the union over all active grants in the scope.

        Raises:
            NoRolesError: If the user has no active grant in scope.
        """
        grants = await self._user_roles.find_active_in_scope(user.id, user.school_id, None)
        if not grants:
            logger.error("User %s has no active roles", user.id)
            raise NoRolesError(user.id)

        _, primary_role = grants[0]
        role_ids = list(dict.fromkeys(role.id for _, role in grants))
        names = await self._user_roles.permission_names_for_roles(role_ids)

        return ActiveContext(
            role_id=str(primary_role.id),
            role_name=primary_role.name,
            school_id=str(user.school_id) if user.school_id else None,
            permissions=sorted(set(names)),
        )

    def verify_token(self, token: str) -> VerifyTokenResponse:
        """Check a token without raising.

        Args:
            token: Raw access token.

        Returns:
            VerifyTokenResponse with valid=False and an error tag on failure.
        """
        if not token:
            return VerifyTokenResponse(valid=False, error="token is required")

        try:
            payload = self._jwt_manager.decode_token(token)
        except TokenExpiredError:
            return VerifyTokenResponse(valid=False, error="token expired")
        except InvalidTokenError as e:
            logger.debug("Token verification failed: %s", str(e))
            return VerifyTokenResponse(valid=False, error="invalid token")

        return VerifyTokenResponse(
            valid=True,
            user_id=payload.sub,
            email=payload.email,
            school_id=payload.active_context.school_id,
            expires_at=payload.expires_at,
            active_context=payload.active_context,
        )

    async def logout(self, user_id: str) -> None:
        logger.info("User logged out: %s", user_id)

    async def refresh(self, refresh_token: str) -> LoginResponse:
        """Refresh tokens.

        Refresh tokens are minted for client compatibility but no store
        backs them, so every attempt is rejected.

        Raises:
            InvalidRefreshTokenError: Always.
        """
        logger.info("Refresh attempted; refresh tokens are not honored")
        raise InvalidRefreshTokenError()


# =============================================================================
# Last-login touch
# =============================================================================


async def touch_last_login(user_id: UUID, timeout: float = LAST_LOGIN_TOUCH_TIMEOUT) -> None:
    """Bump the user's updated_at in an independent session.

    Failures and timeouts are logged and swallowed.
    """
    async def _touch() -> None:
        async with get_session() as session:
            await UserRepository(session).touch(user_id)

    try:
        await asyncio.wait_for(_touch(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Last-login update timed out for user %s", user_id)
    except Exception as e:
        logger.warning("Last-login update failed for user %s: %s", user_id, str(e))


def schedule_last_login_touch(user_id: UUID) -> None:
    """Run touch_last_login detached from the calling request."""
    task = asyncio.create_task(touch_last_login(user_id))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
