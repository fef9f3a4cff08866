# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School (tenant) persistence."""

import uuid

from sqlalchemy import or_, select

from src.infrastructure.database.models.academic import School
from src.infrastructure.database.repositories.base import BaseRepository


class SchoolRepository(BaseRepository[School]):
    model_class = School
    resource_name = "school"
    unique_field = "code"

    async def get_by_id(
        self, school_id: uuid.UUID, include_deleted: bool = False
    ) -> School | None:
        stmt = select(School).where(School.id == school_id)
        if not include_deleted:
            stmt = stmt.where(School.deleted_at.is_(None))
        return await self._scalar_one_or_none(stmt)

    async def get_by_code(self, code: str) -> School | None:
        stmt = select(School).where(School.code == code, School.deleted_at.is_(None))
        return await self._scalar_one_or_none(stmt)

    async def exists_by_code(self, code: str) -> bool:
        # The unique index covers tombstoned rows too
        return await self._exists(select(School.id).where(School.code == code))

    async def find_all(
        self,
        is_active: bool | None = None,
        subscription_tier: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[School], int]:
        stmt = select(School).where(School.deleted_at.is_(None))
        if is_active is not None:
            stmt = stmt.where(School.is_active == is_active)
        if subscription_tier:
            stmt = stmt.where(School.subscription_tier == subscription_tier)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    School.name.ilike(pattern),
                    School.code.ilike(pattern),
                    School.city.ilike(pattern),
                )
            )

        total = await self._count(stmt)
        stmt = stmt.order_by(School.name.asc()).limit(limit).offset(offset)
        return await self._scalars(stmt), total
