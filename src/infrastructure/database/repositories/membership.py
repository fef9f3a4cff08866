# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership persistence."""

import uuid

from sqlalchemy import select

from src.infrastructure.database.models.academic import Membership
from src.infrastructure.database.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[Membership]):
    model_class = Membership
    resource_name = "membership"

    async def list_by_unit(
        self, unit_id: uuid.UUID, limit: int = 50, offset: int = 0
    ) -> list[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.academic_unit_id == unit_id)
            .order_by(Membership.enrolled_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return await self._scalars(stmt)

    async def list_by_unit_and_role(
        self, unit_id: uuid.UUID, role: str, limit: int = 50, offset: int = 0
    ) -> list[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.academic_unit_id == unit_id, Membership.role == role)
            .order_by(Membership.enrolled_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return await self._scalars(stmt)

    async def list_by_user(
        self, user_id: uuid.UUID, limit: int = 50, offset: int = 0
    ) -> list[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.user_id == user_id)
            .order_by(Membership.enrolled_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return await self._scalars(stmt)
