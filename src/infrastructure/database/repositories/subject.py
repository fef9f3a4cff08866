# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject persistence. Inactive subjects count as deleted."""

import uuid

from sqlalchemy import select

from src.infrastructure.database.models.academic import Subject
from src.infrastructure.database.repositories.base import BaseRepository


class SubjectRepository(BaseRepository[Subject]):
    model_class = Subject
    resource_name = "subject"
    unique_field = "name"

    async def get_by_id(self, subject_id: uuid.UUID) -> Subject | None:
        stmt = select(Subject).where(Subject.id == subject_id, Subject.is_active.is_(True))
        return await self._scalar_one_or_none(stmt)

    async def exists_by_name(
        self,
        school_id: uuid.UUID,
        name: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        stmt = select(Subject.id).where(
            Subject.school_id == school_id,
            Subject.name == name,
            Subject.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(Subject.id != exclude_id)
        return await self._exists(stmt)

    async def find_all(self, school_id: uuid.UUID | None = None) -> list[Subject]:
        stmt = select(Subject).where(Subject.is_active.is_(True))
        if school_id is not None:
            stmt = stmt.where(Subject.school_id == school_id)
        return await self._scalars(stmt.order_by(Subject.name.asc()))
