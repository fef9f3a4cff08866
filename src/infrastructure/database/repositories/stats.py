# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Global counters computed in a single round trip."""

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import DatabaseError
from src.infrastructure.database.models.academic import GuardianRelation, School, Subject
from src.infrastructure.database.models.auth import User


@dataclass(frozen=True)
class GlobalCounts:
    total_users: int
    total_active_users: int
    total_schools: int
    total_subjects: int
    total_guardian_relations: int


class StatsRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def global_counts(self) -> GlobalCounts:
        live_users = select(func.count()).select_from(User).where(User.deleted_at.is_(None))
        stmt = select(
            live_users.scalar_subquery().label("total_users"),
            live_users.where(User.is_active.is_(True)).scalar_subquery().label("active_users"),
            select(func.count())
            .select_from(School)
            .where(School.deleted_at.is_(None))
            .scalar_subquery()
            .label("schools"),
            select(func.count())
            .select_from(Subject)
            .where(Subject.is_active.is_(True))
            .scalar_subquery()
            .label("subjects"),
            select(func.count())
            .select_from(GuardianRelation)
            .where(GuardianRelation.is_active.is_(True))
            .scalar_subquery()
            .label("guardian_relations"),
        )
        try:
            row = (await self._session.execute(stmt)).one()
        except SQLAlchemyError as e:
            raise DatabaseError("global stats", e) from e

        return GlobalCounts(
            total_users=row.total_users,
            total_active_users=row.active_users,
            total_schools=row.schools,
            total_subjects=row.subjects,
            total_guardian_relations=row.guardian_relations,
        )
