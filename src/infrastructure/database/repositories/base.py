# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base repository with common async SQLAlchemy operations.

Repositories are thin: one statement per logical read or write. Every
SQLAlchemy failure is wrapped in DatabaseError so nothing untagged crosses
into the services. A unique-constraint violation on flush becomes
AlreadyExistsError, which keeps the database the authority for uniqueness
when two requests race past a service-level existence check.
"""

import logging
import uuid
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import AlreadyExistsError, DatabaseError
from src.infrastructure.database.models.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Common CRUD plumbing shared by all repositories.

    Subclasses set model_class, and optionally unique_field to name the
    column reported when an insert hits a unique constraint.

    Attributes:
        model_class: ORM class handled by the repository.
        resource_name: Name used in error messages.
        unique_field: Column reported in AlreadyExistsError details.
    """

    model_class: ClassVar[type[Base]]
    resource_name: ClassVar[str] = "entity"
    unique_field: ClassVar[str | None] = None

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelType | None:
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        return await self._scalar_one_or_none(stmt)

    async def add(self, instance: ModelType) -> ModelType:
        """Insert a new row and flush it.

        Raises:
            AlreadyExistsError: If a unique constraint rejects the row.
            DatabaseError: On any other database failure.
        """
        self._session.add(instance)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if self.unique_field:
                raise AlreadyExistsError(
                    self.resource_name,
                    self.unique_field,
                    getattr(instance, self.unique_field),
                ) from e
            raise DatabaseError(f"create {self.resource_name}", e) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise DatabaseError(f"create {self.resource_name}", e) from e

        logger.debug("Created %s: %s", self.resource_name, getattr(instance, "id", None))
        return instance

    async def save(self, instance: ModelType) -> ModelType:
        """Flush pending changes of an already loaded instance."""
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if self.unique_field:
                raise AlreadyExistsError(
                    self.resource_name,
                    self.unique_field,
                    getattr(instance, self.unique_field),
                ) from e
            raise DatabaseError(f"update {self.resource_name}", e) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise DatabaseError(f"update {self.resource_name}", e) from e
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Hard delete a row."""
        try:
            await self._session.delete(instance)
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise DatabaseError(f"delete {self.resource_name}", e) from e

    # =========================================================================
    # Statement helpers
    # =========================================================================

    async def _scalar_one_or_none(self, stmt: Select) -> Any:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"find {self.resource_name}", e) from e
        return result.scalar_one_or_none()

    async def _scalars(self, stmt: Select) -> list[Any]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"list {self.resource_name}", e) from e
        return list(result.scalars().all())

    async def _rows(self, stmt: Select) -> list[Any]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"list {self.resource_name}", e) from e
        return list(result.all())

    async def _count(self, stmt: Select) -> int:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        try:
            result = await self._session.execute(count_stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"count {self.resource_name}", e) from e
        return result.scalar() or 0

    async def _exists(self, stmt: Select) -> bool:
        try:
            result = await self._session.execute(select(stmt.exists()))
        except SQLAlchemyError as e:
            raise DatabaseError(f"check {self.resource_name}", e) from e
        return bool(result.scalar())
