# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for platform user management.

This module provides the UserService that handles:
- User CRUD operations
- Password hashing on create
- User status management and soft deletion

Example:
    >>> user_service = UserService(users, schools, password_hasher)
    >>> user = await user_service.create_user(request)
    >>> page = await user_service.list_users(is_active=True, limit=20)
"""

import logging
from uuid import uuid4

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models.auth import User
from src.infrastructure.database.repositories.school import SchoolRepository
from src.infrastructure.database.repositories.user import UserRepository
from src.models.user import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserService:
    """Service for managing users.

    Attributes:
        _users: User repository.
        _schools: School repository, for the home school check.
        _password_hasher: Password KDF.

    Example:
        >>> service = UserService(users, schools, hasher)
        >>> user = await service.create_user(create_request)
        >>> await service.delete_user(user.id)
    """

    def __init__(
        self,
        users: UserRepository,
        schools: SchoolRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._schools = schools
        self._password_hasher = password_hasher

    async def create_user(self, request: UserCreateRequest) -> UserResponse:
        """Create a new user.

        Args:
            request: User creation request.

        Returns:
            Created user response.

        Raises:
            ValidationError: If the password is too short.
            AlreadyExistsError: If email already exists.
            NotFoundError: If the home school does not exist.
        """
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        email = request.email.strip().lower()
        if await self._users.exists_by_email(email):
            raise AlreadyExistsError("user", "email", email)

        school_id = parse_optional_uuid(request.school_id, "school_id")
        if school_id is not None and await self._schools.get_by_id(school_id) is None:
            raise NotFoundError("school", school_id)

        password_hash = await self._password_hasher.hash_async(request.password)

        now = utc_now()
        user = User(
            id=uuid4(),
            email=email,
            password_hash=password_hash,
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            is_active=True,
            school_id=school_id,
            created_at=now,
            updated_at=now,
        )

        await self._users.add(user)

        logger.info("User created: %s", user.id)

        return self._to_response(user)

    async def get_user(self, user_id: str) -> UserResponse:
        """Get a live user by ID.

        Raises:
            NotFoundError: If user not found.
        """
        user = await self._get(user_id)
        return self._to_response(user)

    async def list_users(
        self,
        is_active: bool | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> UserListResponse:
        """List users with optional filtering.

        Args:
            is_active: Filter by active status.
            search: Search by email or name.
            limit: Maximum results.
            offset: Pagination offset.
        """
        users, total = await self._users.find_all(
            is_active=is_active,
            search=search,
            limit=limit,
            offset=offset,
        )
        return UserListResponse(
            items=[self._to_response(user) for user in users],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def update_user(self, user_id: str, request: UserUpdateRequest) -> UserResponse:
        """Update a user's names or active flag.

        Raises:
            NotFoundError: If user not found.
        """
        user = await self._get(user_id)

        if request.first_name is not None:
            user.first_name = request.first_name.strip()
        if request.last_name is not None:
            user.last_name = request.last_name.strip()
        if request.is_active is not None:
            user.is_active = request.is_active

        user.updated_at = utc_now()
        await self._users.save(user)

        logger.info("User updated: %s", user.id)

        return self._to_response(user)

    async def delete_user(self, user_id: str) -> None:
        """Soft delete a user.

        Raises:
            NotFoundError: If user not found.
        """
        user = await self._get(user_id)

        now = utc_now()
        user.deleted_at = now
        user.is_active = False
        user.updated_at = now
        await self._users.save(user)

        logger.info("User deleted: %s", user.id)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, user_id: str) -> User:
        user = await self._users.get_by_id(parse_uuid(user_id, "user_id"))
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _to_response(self, user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            school_id=str(user.school_id) if user.school_id else None,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
