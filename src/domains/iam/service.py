# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""IAM catalog services.

This module provides:
- RoleService: role lookups plus granting and revoking roles to users
- PermissionService: read-only permission catalog
- ResourceService: resource registry maintenance

Granted roles feed the active context computed at login, so a grant or
revoke takes effect on the user's next token.
"""

import logging
from uuid import UUID, uuid4

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.infrastructure.database.models.auth import UserRole
from src.infrastructure.database.models.iam import Permission, Resource, Role
from src.infrastructure.database.repositories.iam import (
    PermissionRepository,
    ResourceRepository,
    RoleRepository,
)
from src.infrastructure.database.repositories.user import UserRepository
from src.infrastructure.database.repositories.user_role import UserRoleRepository
from src.models.iam import (
    GrantRoleRequest,
    PermissionResponse,
    PermissionsResponse,
    ResourceCreateRequest,
    ResourceResponse,
    ResourcesResponse,
    ResourceUpdateRequest,
    RoleResponse,
    RolesResponse,
    UserRoleResponse,
    UserRolesResponse,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)


class RoleService:
    """Role catalog and user role grants.

    Attributes:
        _roles: Role repository.
        _user_roles: Grant repository.
        _users: User repository.
    """

    def __init__(
        self,
        roles: RoleRepository,
        user_roles: UserRoleRepository,
        users: UserRepository,
    ) -> None:
        self._roles = roles
        self._user_roles = user_roles
        self._users = users

    async def list_roles(self, scope: str | None = None) -> RolesResponse:
        roles = await self._roles.find_all(scope=scope)
        return RolesResponse(roles=[_role_response(role) for role in roles])

    async def get_role(self, role_id: str) -> RoleResponse:
        role = await self._get_role(parse_uuid(role_id, "role_id"))
        return _role_response(role)

    async def list_user_roles(self, user_id: str) -> UserRolesResponse:
        grants = await self._user_roles.list_by_user(parse_uuid(user_id, "user_id"))
        return UserRolesResponse(roles=[_grant_response(grant, role) for grant, role in grants])

    async def grant_role(
        self,
        user_id: str,
        request: GrantRoleRequest,
        granted_by: str | None = None,
    ) -> UserRoleResponse:
        """Grant a role to a user in a (school, unit) context.

        Raises:
            NotFoundError: If the user or role does not exist.
            AlreadyExistsError: If the same grant is already active.
        """
        user_uuid = parse_uuid(user_id, "user_id")
        role_uuid = parse_uuid(request.role_id, "role_id")
        school_id = parse_optional_uuid(request.school_id, "school_id")
        unit_id = parse_optional_uuid(request.academic_unit_id, "academic_unit_id")

        if await self._users.get_by_id(user_uuid) is None:
            raise NotFoundError("user", user_id)
        role = await self._get_role(role_uuid)

        if await self._user_roles.exists_active(user_uuid, role_uuid, school_id, unit_id):
            raise AlreadyExistsError("user_role", "role_id", role_uuid)

        grant = UserRole(
            id=uuid4(),
            user_id=user_uuid,
            role_id=role_uuid,
            school_id=school_id,
            academic_unit_id=unit_id,
            is_active=True,
            granted_at=utc_now(),
            granted_by=parse_optional_uuid(granted_by, "granted_by"),
        )
        await self._user_roles.add(grant)

        logger.info("Role %s granted to user %s", role.name, user_uuid)

        return _grant_response(grant, role)

    async def revoke_role(self, user_id: str, role_id: str) -> None:
        """Remove every grant of a role to a user.

        Raises:
            NotFoundError: If the user holds no such grant.
        """
        user_uuid = parse_uuid(user_id, "user_id")
        role_uuid = parse_uuid(role_id, "role_id")

        grants = await self._user_roles.find_by_user_and_role(user_uuid, role_uuid)
        if not grants:
            raise NotFoundError("user_role", role_id)

        for grant in grants:
            await self._user_roles.delete(grant)

        logger.info("Role %s revoked from user %s", role_uuid, user_uuid)

    async def _get_role(self, role_id: UUID) -> Role:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise NotFoundError("role", role_id)
        return role


class PermissionService:
    def __init__(self, permissions: PermissionRepository) -> None:
        self._permissions = permissions

    async def list_permissions(self) -> PermissionsResponse:
        permissions = await self._permissions.find_all()
        return PermissionsResponse(permissions=[_permission_response(p) for p in permissions])

    async def get_permission(self, permission_id: str) -> PermissionResponse:
        permission = await self._permissions.get_by_id(parse_uuid(permission_id, "permission_id"))
        if permission is None:
            raise NotFoundError("permission", permission_id)
        return _permission_response(permission)


class ResourceService:
    """Resource registry. Resources are the vertices of the menu tree."""

    def __init__(self, resources: ResourceRepository) -> None:
        self._resources = resources

    async def list_resources(self) -> ResourcesResponse:
        resources = await self._resources.find_all()
        return ResourcesResponse(
            resources=[_resource_response(r) for r in resources],
            total=len(resources),
        )

    async def get_resource(self, resource_id: str) -> ResourceResponse:
        resource = await self._get(parse_uuid(resource_id, "resource_id"))
        return _resource_response(resource)

    async def create_resource(self, request: ResourceCreateRequest) -> ResourceResponse:
        """Register a resource.

        Raises:
            ValidationError: If the parent does not exist.
            AlreadyExistsError: If the key is taken.
        """
        parent_id = parse_optional_uuid(request.parent_id, "parent_id")
        if parent_id is not None:
            await self._require_parent(parent_id)

        now = utc_now()
        resource = Resource(
            id=uuid4(),
            key=request.key.strip(),
            display_name=request.display_name.strip(),
            description=request.description,
            icon=request.icon,
            parent_id=parent_id,
            sort_order=request.sort_order,
            is_menu_visible=request.is_menu_visible,
            scope=request.scope,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        await self._resources.add(resource)

        logger.info("Resource created: %s (key=%s)", resource.id, resource.key)

        return _resource_response(resource)

    async def update_resource(
        self, resource_id: str, request: ResourceUpdateRequest
    ) -> ResourceResponse:
        """Update a resource.

        Raises:
            NotFoundError: If the resource does not exist.
            ValidationError: If the new parent is missing or is the resource.
        """
        resource = await self._get(parse_uuid(resource_id, "resource_id"))

        if request.parent_id is not None:
            if request.parent_id == "":
                resource.parent_id = None
            else:
                parent_id = parse_uuid(request.parent_id, "parent_id")
                if parent_id == resource.id:
                    raise ValidationError("resource cannot be its own parent", field="parent_id")
                await self._require_parent(parent_id)
                resource.parent_id = parent_id
        if request.display_name is not None:
            resource.display_name = request.display_name.strip()
        if request.description is not None:
            resource.description = request.description
        if request.icon is not None:
            resource.icon = request.icon
        if request.sort_order is not None:
            resource.sort_order = request.sort_order
        if request.is_menu_visible is not None:
            resource.is_menu_visible = request.is_menu_visible
        if request.scope is not None:
            resource.scope = request.scope
        if request.is_active is not None:
            resource.is_active = request.is_active

        resource.updated_at = utc_now()
        await self._resources.save(resource)

        logger.info("Resource updated: %s", resource.id)

        return _resource_response(resource)

    async def _get(self, resource_id: UUID) -> Resource:
        resource = await self._resources.get_by_id(resource_id)
        if resource is None:
            raise NotFoundError("resource", resource_id)
        return resource

    async def _require_parent(self, parent_id: UUID) -> None:
        if await self._resources.get_by_id(parent_id) is None:
            raise ValidationError("parent resource does not exist", field="parent_id")


# =============================================================================
# Response mapping
# =============================================================================


def _role_response(role: Role) -> RoleResponse:
    return RoleResponse(
        id=str(role.id),
        name=role.name,
        display_name=role.display_name,
        description=role.description,
        scope=role.scope,
        is_active=role.is_active,
    )


def _grant_response(grant: UserRole, role: Role) -> UserRoleResponse:
    return UserRoleResponse(
        id=str(grant.id),
        user_id=str(grant.user_id),
        role_id=str(grant.role_id),
        role_name=role.name,
        school_id=str(grant.school_id) if grant.school_id else None,
        academic_unit_id=str(grant.academic_unit_id) if grant.academic_unit_id else None,
        is_active=grant.is_active,
        granted_at=grant.granted_at,
        granted_by=str(grant.granted_by) if grant.granted_by else None,
    )


def _permission_response(permission: Permission) -> PermissionResponse:
    return PermissionResponse(
        id=str(permission.id),
        name=permission.name,
        display_name=permission.display_name,
        description=permission.description,
        resource_id=str(permission.resource_id) if permission.resource_id else None,
        action=permission.action,
        scope=permission.scope,
    )


def _resource_response(resource: Resource) -> ResourceResponse:
    return ResourceResponse(
        id=str(resource.id),
        key=resource.key,
        display_name=resource.display_name,
        description=resource.description,
        icon=resource.icon,
        parent_id=str(resource.parent_id) if resource.parent_id else None,
        sort_order=resource.sort_order,
        is_menu_visible=resource.is_menu_visible,
        scope=resource.scope,
        is_active=resource.is_active,
    )
