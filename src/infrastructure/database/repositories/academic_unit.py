# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic unit persistence."""

import uuid

from sqlalchemy import select

from src.infrastructure.database.models.academic import AcademicUnit
from src.infrastructure.database.repositories.base import BaseRepository


class AcademicUnitRepository(BaseRepository[AcademicUnit]):
    model_class = AcademicUnit
    resource_name = "academic_unit"
    unique_field = "code"

    async def get_by_id(
        self, unit_id: uuid.UUID, include_deleted: bool = False
    ) -> AcademicUnit | None:
        stmt = select(AcademicUnit).where(AcademicUnit.id == unit_id)
        if not include_deleted:
            stmt = stmt.where(AcademicUnit.deleted_at.is_(None))
        return await self._scalar_one_or_none(stmt)

    async def list_by_school(
        self, school_id: uuid.UUID, include_deleted: bool = False
    ) -> list[AcademicUnit]:
        """Units of a school, roots first then by creation time.

        Creation order keeps parents ahead of children for units that were
        never re-parented; the tree builder does not rely on it.
        """
        stmt = select(AcademicUnit).where(AcademicUnit.school_id == school_id)
        if not include_deleted:
            stmt = stmt.where(AcademicUnit.deleted_at.is_(None))
        stmt = stmt.order_by(
            AcademicUnit.parent_unit_id.asc().nulls_first(),
            AcademicUnit.created_at.asc(),
            AcademicUnit.display_name.asc(),
        )
        return await self._scalars(stmt)

    async def list_by_type(self, school_id: uuid.UUID, unit_type: str) -> list[AcademicUnit]:
        stmt = (
            select(AcademicUnit)
            .where(
                AcademicUnit.school_id == school_id,
                AcademicUnit.type == unit_type,
                AcademicUnit.deleted_at.is_(None),
            )
            .order_by(AcademicUnit.display_name.asc())
        )
        return await self._scalars(stmt)

    async def exists_by_code(self, school_id: uuid.UUID, code: str) -> bool:
        stmt = select(AcademicUnit.id).where(
            AcademicUnit.school_id == school_id,
            AcademicUnit.code == code,
            AcademicUnit.deleted_at.is_(None),
        )
        return await self._exists(stmt)
