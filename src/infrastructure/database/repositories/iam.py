# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role, permission and resource catalog persistence."""

from sqlalchemy import select

from src.infrastructure.database.models.iam import Permission, Resource, Role
from src.infrastructure.database.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    model_class = Role
    resource_name = "role"
    unique_field = "name"

    async def find_all(self, scope: str | None = None) -> list[Role]:
        stmt = select(Role).where(Role.is_active.is_(True))
        if scope:
            stmt = stmt.where(Role.scope == scope)
        return await self._scalars(stmt.order_by(Role.name.asc()))


class PermissionRepository(BaseRepository[Permission]):
    model_class = Permission
    resource_name = "permission"
    unique_field = "name"

    async def find_all(self) -> list[Permission]:
        stmt = select(Permission).where(Permission.is_active.is_(True))
        return await self._scalars(stmt.order_by(Permission.name.asc()))


class ResourceRepository(BaseRepository[Resource]):
    model_class = Resource
    resource_name = "resource"
    unique_field = "key"

    async def find_all(self) -> list[Resource]:
        stmt = select(Resource).where(Resource.is_active.is_(True))
        return await self._scalars(stmt.order_by(Resource.sort_order.asc(), Resource.key.asc()))

    async def list_menu_visible(self) -> list[Resource]:
        stmt = select(Resource).where(
            Resource.is_active.is_(True),
            Resource.is_menu_visible.is_(True),
        )
        return await self._scalars(stmt.order_by(Resource.sort_order.asc(), Resource.key.asc()))
