# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User management API endpoints.

This module provides endpoints for user management:
- POST / - Create a new user
- GET / - List users with filtering
- GET /{user_id} - Get user details
- PATCH /{user_id} - Update user
- DELETE /{user_id} - Soft delete user
- GET /{user_id}/memberships - User memberships
- GET /{user_id}/roles - Active role grants
- POST /{user_id}/roles - Grant a role
- DELETE /{user_id}/roles/{role_id} - Revoke a role

Example:
    POST /api/v1/users
    {
        "email": "teacher@acme.edu",
        "password": "a-long-password",
        "first_name": "Ada",
        "last_name": "Lovelace"
    }
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import (
    MembershipServiceDep,
    RequirePermission,
    RoleServiceDep,
    UserServiceDep,
)
from src.api.middleware.auth import CurrentUser
from src.models.iam import GrantRoleRequest, UserRoleResponse, UserRolesResponse
from src.models.membership import MembershipResponse
from src.models.user import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    data: UserCreateRequest,
    service: UserServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:update")),
) -> UserResponse:
    """Create a new user.

    The email is stored lower-cased and the password is hashed with bcrypt.
    """
    logger.info("Creating user by=%s", current_user.id)
    return await service.create_user(data)


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
)
async def list_users(
    service: UserServiceDep,
    is_active: Annotated[bool | None, Query(description="Filter by active status")] = None,
    search: Annotated[str | None, Query(description="Search by email or name")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    current_user: CurrentUser = Depends(RequirePermission("users:read")),
) -> UserListResponse:
    return await service.list_users(is_active=is_active, search=search, limit=limit, offset=offset)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: str,
    service: UserServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:read")),
) -> UserResponse:
    return await service.get_user(user_id)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: str,
    data: UserUpdateRequest,
    service: UserServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:update")),
) -> UserResponse:
    return await service.update_user(user_id, data)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
)
async def delete_user(
    user_id: str,
    service: UserServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:update")),
) -> Response:
    logger.info("Deleting user: %s, by=%s", user_id, current_user.id)
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================================================================
# Memberships and roles of a user
# =========================================================================


@router.get(
    "/{user_id}/memberships",
    response_model=list[MembershipResponse],
    summary="List user memberships",
)
async def list_user_memberships(
    user_id: str,
    service: MembershipServiceDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    current_user: CurrentUser = Depends(RequirePermission("memberships:read")),
) -> list[MembershipResponse]:
    return await service.list_by_user(user_id, limit=limit, offset=offset)


@router.get(
    "/{user_id}/roles",
    response_model=UserRolesResponse,
    summary="List user roles",
)
async def list_user_roles(
    user_id: str,
    service: RoleServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:read")),
) -> UserRolesResponse:
    return await service.list_user_roles(user_id)


@router.post(
    "/{user_id}/roles",
    response_model=UserRoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Grant role",
    description="Takes effect on the user's next login.",
)
async def grant_role(
    user_id: str,
    data: GrantRoleRequest,
    service: RoleServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:update")),
) -> UserRoleResponse:
    logger.info("Granting role %s to user %s, by=%s", data.role_id, user_id, current_user.id)
    return await service.grant_role(user_id, data, granted_by=current_user.id)


@router.delete(
    "/{user_id}/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke role",
)
async def revoke_role(
    user_id: str,
    role_id: str,
    service: RoleServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("users:update")),
) -> Response:
    logger.info("Revoking role %s from user %s, by=%s", role_id, user_id, current_user.id)
    await service.revoke_role(user_id, role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
