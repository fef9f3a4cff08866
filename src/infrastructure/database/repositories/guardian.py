# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Guardian relation persistence."""

import uuid

from sqlalchemy import select

from src.infrastructure.database.models.academic import GuardianRelation
from src.infrastructure.database.repositories.base import BaseRepository


class GuardianRelationRepository(BaseRepository[GuardianRelation]):
    model_class = GuardianRelation
    resource_name = "guardian_relation"
    unique_field = "student_id"

    async def exists_active(self, guardian_id: uuid.UUID, student_id: uuid.UUID) -> bool:
        stmt = select(GuardianRelation.id).where(
            GuardianRelation.guardian_id == guardian_id,
            GuardianRelation.student_id == student_id,
            GuardianRelation.is_active.is_(True),
        )
        return await self._exists(stmt)

    async def list_by_guardian(self, guardian_id: uuid.UUID) -> list[GuardianRelation]:
        stmt = (
            select(GuardianRelation)
            .where(
                GuardianRelation.guardian_id == guardian_id,
                GuardianRelation.is_active.is_(True),
            )
            .order_by(GuardianRelation.created_at.asc())
        )
        return await self._scalars(stmt)

    async def list_by_student(self, student_id: uuid.UUID) -> list[GuardianRelation]:
        stmt = (
            select(GuardianRelation)
            .where(
                GuardianRelation.student_id == student_id,
                GuardianRelation.is_active.is_(True),
            )
            .order_by(GuardianRelation.created_at.asc())
        )
        return await self._scalars(stmt)
