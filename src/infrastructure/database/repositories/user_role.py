# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role grants and the permission lookups behind the active context."""

import uuid

from sqlalchemy import select

from src.infrastructure.database.models.auth import UserRole
from src.infrastructure.database.models.iam import Permission, Role, RolePermission
from src.infrastructure.database.repositories.base import BaseRepository


def _scope_filter(column, value: uuid.UUID | None):
    # NULL means "no scope", so it has to match NULL rather than anything
    return column.is_(None) if value is None else column == value


class UserRoleRepository(BaseRepository[UserRole]):
    model_class = UserRole
    resource_name = "user_role"
    unique_field = "role_id"

    async def find_active_in_scope(
        self,
        user_id: uuid.UUID,
        school_id: uuid.UUID | None,
        academic_unit_id: uuid.UUID | None = None,
    ) -> list[tuple[UserRole, Role]]:
        """Active grants of a user in exactly one (school, unit) context.

        Ordered by granted_at then role_id, so the first row is the
        deterministic primary role.
        """
        stmt = (
            select(UserRole, Role)
            .join(Role, Role.id == UserRole.role_id)
            .where(
                UserRole.user_id == user_id,
                UserRole.is_active.is_(True),
                _scope_filter(UserRole.school_id, school_id),
                _scope_filter(UserRole.academic_unit_id, academic_unit_id),
            )
            .order_by(UserRole.granted_at.asc(), UserRole.role_id.asc())
        )
        return [(row[0], row[1]) for row in await self._rows(stmt)]

    async def permission_names_for_roles(self, role_ids: list[uuid.UUID]) -> list[str]:
        if not role_ids:
            return []
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(
                RolePermission.role_id.in_(role_ids),
                Permission.is_active.is_(True),
            )
            .distinct()
        )
        return await self._scalars(stmt)

    async def list_by_user(self, user_id: uuid.UUID) -> list[tuple[UserRole, Role]]:
        stmt = (
            select(UserRole, Role)
            .join(Role, Role.id == UserRole.role_id)
            .where(UserRole.user_id == user_id, UserRole.is_active.is_(True))
            .order_by(UserRole.granted_at.asc(), UserRole.role_id.asc())
        )
        return [(row[0], row[1]) for row in await self._rows(stmt)]

    async def exists_active(
        self,
        user_id: uuid.UUID,
        role_id: uuid.UUID,
        school_id: uuid.UUID | None,
        academic_unit_id: uuid.UUID | None,
    ) -> bool:
        stmt = select(UserRole.id).where(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
            UserRole.is_active.is_(True),
            _scope_filter(UserRole.school_id, school_id),
            _scope_filter(UserRole.academic_unit_id, academic_unit_id),
        )
        return await self._exists(stmt)

    async def find_by_user_and_role(
        self, user_id: uuid.UUID, role_id: uuid.UUID
    ) -> list[UserRole]:
        stmt = select(UserRole).where(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
        )
        return await self._scalars(stmt)
