# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User persistence."""

import uuid

from sqlalchemy import or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from src.core.errors import DatabaseError
from src.infrastructure.database.models.auth import User
from src.infrastructure.database.repositories.base import BaseRepository
from src.utils.datetime import utc_now


class UserRepository(BaseRepository[User]):
    model_class = User
    resource_name = "user"
    unique_field = "email"

    async def get_by_id(
        self, user_id: uuid.UUID, include_deleted: bool = False
    ) -> User | None:
        stmt = select(User).where(User.id == user_id)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        return await self._scalar_one_or_none(stmt)

    async def get_by_email(self, email: str) -> User | None:
        """Look up a live user by case-folded email."""
        stmt = select(User).where(
            User.email == email.strip().lower(),
            User.deleted_at.is_(None),
        )
        return await self._scalar_one_or_none(stmt)

    async def exists_by_email(self, email: str) -> bool:
        return await self._exists(select(User.id).where(User.email == email.strip().lower()))

    async def find_all(
        self,
        is_active: bool | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        stmt = select(User).where(User.deleted_at.is_(None))
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    User.email.ilike(pattern),
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                )
            )

        total = await self._count(stmt)
        stmt = stmt.order_by(User.last_name.asc(), User.first_name.asc()).limit(limit).offset(offset)
        return await self._scalars(stmt), total

    async def touch(self, user_id: uuid.UUID) -> None:
        """Bump updated_at; used as the last-login marker."""
        try:
            await self._session.execute(
                update(User).where(User.id == user_id).values(updated_at=utc_now())
            )
        except SQLAlchemyError as e:
            raise DatabaseError("touch user", e) from e
