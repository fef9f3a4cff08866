# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role, permission, resource and menu endpoints.

This module provides the IAM catalog and the navigation menu:
- GET /roles?scope= - List roles
- GET /roles/{role_id} - Get role
- GET /permissions - List permissions
- GET /permissions/{permission_id} - Get permission
- GET /resources - List resources
- GET /resources/{resource_id} - Get resource
- POST /resources - Register a resource
- PUT /resources/{resource_id} - Update a resource
- GET /menu - Menu for the caller's permissions
- GET /menu/full - Complete menu
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    AuthenticatedUser,
    MenuServiceDep,
    PermissionServiceDep,
    RequirePermission,
    ResourceServiceDep,
    RoleServiceDep,
)
from src.api.middleware.auth import CurrentUser
from src.models.iam import (
    PermissionResponse,
    PermissionsResponse,
    ResourceCreateRequest,
    ResourceResponse,
    ResourcesResponse,
    ResourceUpdateRequest,
    RoleResponse,
    RolesResponse,
    Scope,
)
from src.models.menu import MenuResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# =========================================================================
# Roles and permissions
# =========================================================================


@router.get("/roles", response_model=RolesResponse, summary="List roles", tags=["Roles"])
async def list_roles(
    service: RoleServiceDep,
    scope: Annotated[Scope | None, Query(description="Filter by scope")] = None,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> RolesResponse:
    return await service.list_roles(scope=scope)


@router.get("/roles/{role_id}", response_model=RoleResponse, summary="Get role", tags=["Roles"])
async def get_role(
    role_id: str,
    service: RoleServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> RoleResponse:
    return await service.get_role(role_id)


@router.get(
    "/permissions",
    response_model=PermissionsResponse,
    summary="List permissions",
    tags=["Permissions"],
)
async def list_permissions(
    service: PermissionServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> PermissionsResponse:
    return await service.list_permissions()


@router.get(
    "/permissions/{permission_id}",
    response_model=PermissionResponse,
    summary="Get permission",
    tags=["Permissions"],
)
async def get_permission(
    permission_id: str,
    service: PermissionServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> PermissionResponse:
    return await service.get_permission(permission_id)


# =========================================================================
# Resources
# =========================================================================


@router.get(
    "/resources",
    response_model=ResourcesResponse,
    summary="List resources",
    tags=["Resources"],
)
async def list_resources(
    service: ResourceServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> ResourcesResponse:
    return await service.list_resources()


@router.get(
    "/resources/{resource_id}",
    response_model=ResourceResponse,
    summary="Get resource",
    tags=["Resources"],
)
async def get_resource(
    resource_id: str,
    service: ResourceServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> ResourceResponse:
    return await service.get_resource(resource_id)


@router.post(
    "/resources",
    response_model=ResourceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create resource",
    tags=["Resources"],
)
async def create_resource(
    data: ResourceCreateRequest,
    service: ResourceServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:update")),
) -> ResourceResponse:
    logger.info("Creating resource: key=%s, by=%s", data.key, current_user.id)
    return await service.create_resource(data)


@router.put(
    "/resources/{resource_id}",
    response_model=ResourceResponse,
    summary="Update resource",
    tags=["Resources"],
)
async def update_resource(
    resource_id: str,
    data: ResourceUpdateRequest,
    service: ResourceServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:update")),
) -> ResourceResponse:
    return await service.update_resource(resource_id, data)


# =========================================================================
# Menu
# =========================================================================


@router.get("/menu", response_model=MenuResponse, summary="User menu", tags=["Menu"])
async def get_menu(current_user: AuthenticatedUser, service: MenuServiceDep) -> MenuResponse:
    """Menu entries the caller's permissions unlock."""
    return await service.get_menu_for_user(current_user.permissions)


@router.get("/menu/full", response_model=MenuResponse, summary="Full menu", tags=["Menu"])
async def get_full_menu(
    service: MenuServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> MenuResponse:
    return await service.get_full_menu()
