# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role, permission, resource and role-grant models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Scope = Literal["system", "school", "unit"]


class RoleResponse(BaseModel):
    id: str
    name: str
    display_name: str
    description: str | None = None
    scope: str
    is_active: bool


class RolesResponse(BaseModel):
    roles: list[RoleResponse]


class PermissionResponse(BaseModel):
    id: str
    name: str
    display_name: str
    description: str | None = None
    resource_id: str | None = None
    action: str
    scope: str


class PermissionsResponse(BaseModel):
    permissions: list[PermissionResponse]


class ResourceCreateRequest(BaseModel):
    key: str = Field(..., min_length=2, max_length=100)
    display_name: str = Field(..., min_length=2, max_length=255)
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None
    sort_order: int = 0
    is_menu_visible: bool = True
    scope: Scope = "system"


class ResourceUpdateRequest(BaseModel):
    display_name: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None
    sort_order: int | None = None
    is_menu_visible: bool | None = None
    scope: Scope | None = None
    is_active: bool | None = None


class ResourceResponse(BaseModel):
    id: str
    key: str
    display_name: str
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None
    sort_order: int
    is_menu_visible: bool
    scope: str
    is_active: bool


class ResourcesResponse(BaseModel):
    resources: list[ResourceResponse]
    total: int


class GrantRoleRequest(BaseModel):
    role_id: str
    school_id: str | None = None
    academic_unit_id: str | None = None


class UserRoleResponse(BaseModel):
    id: str
    user_id: str
    role_id: str
    role_name: str
    school_id: str | None = None
    academic_unit_id: str | None = None
    is_active: bool
    granted_at: datetime
    granted_by: str | None = None


class UserRolesResponse(BaseModel):
    roles: list[UserRoleResponse]
