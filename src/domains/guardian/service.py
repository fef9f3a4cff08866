# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Guardian relation service.

This module provides the GuardianRelationService that handles:
- Creating guardian to student links
- Listing a guardian's students and a student's guardians
- Updating and deactivating relations

Example:
    >>> service = GuardianRelationService(relations, users)
    >>> relation = await service.create_relation(request, created_by=admin_id)
"""

import logging
from uuid import uuid4

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.infrastructure.database.models.academic import GuardianRelation
from src.infrastructure.database.repositories.guardian import GuardianRelationRepository
from src.infrastructure.database.repositories.user import UserRepository
from src.models.guardian import (
    GuardianRelationCreateRequest,
    GuardianRelationResponse,
    GuardianRelationUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)


class GuardianRelationService:
    """Service for guardian to student relations.

    Attributes:
        _relations: Guardian relation repository.
        _users: User repository.
    """

    def __init__(self, relations: GuardianRelationRepository, users: UserRepository) -> None:
        self._relations = relations
        self._users = users

    async def create_relation(
        self,
        request: GuardianRelationCreateRequest,
        created_by: str | None = None,
    ) -> GuardianRelationResponse:
        """Link a guardian to a student.

        Args:
            request: Guardian, student and relationship type.
            created_by: ID of the admin creating the relation.

        Raises:
            ValidationError: If ids are malformed or equal, or the type is empty.
            NotFoundError: If either user does not exist.
            AlreadyExistsError: If an active relation already links the pair.
        """
        guardian_id = parse_uuid(request.guardian_id, "guardian_id")
        student_id = parse_uuid(request.student_id, "student_id")
        relationship_type = request.relationship_type.strip()

        if not relationship_type:
            raise ValidationError("relationship_type is required", field="relationship_type")
        if guardian_id == student_id:
            raise ValidationError("guardian and student must differ", field="student_id")

        if await self._users.get_by_id(guardian_id) is None:
            raise NotFoundError("user", guardian_id)
        if await self._users.get_by_id(student_id) is None:
            raise NotFoundError("user", student_id)

        if await self._relations.exists_active(guardian_id, student_id):
            raise AlreadyExistsError("guardian_relation", "student_id", student_id)

        now = utc_now()
        relation = GuardianRelation(
            id=uuid4(),
            guardian_id=guardian_id,
            student_id=student_id,
            relationship_type=relationship_type,
            is_active=True,
            created_by=parse_optional_uuid(created_by, "created_by"),
            created_at=now,
            updated_at=now,
        )
        await self._relations.add(relation)

        logger.info(
            "Guardian relation created: guardian=%s, student=%s, type=%s",
            guardian_id,
            student_id,
            relationship_type,
        )

        return self._to_response(relation)

    async def get_relation(self, relation_id: str) -> GuardianRelationResponse:
        relation = await self._get(relation_id)
        return self._to_response(relation)

    async def list_for_guardian(self, guardian_id: str) -> list[GuardianRelationResponse]:
        relations = await self._relations.list_by_guardian(parse_uuid(guardian_id, "guardian_id"))
        return [self._to_response(r) for r in relations]

    async def list_for_student(self, student_id: str) -> list[GuardianRelationResponse]:
        relations = await self._relations.list_by_student(parse_uuid(student_id, "student_id"))
        return [self._to_response(r) for r in relations]

    async def update_relation(
        self, relation_id: str, request: GuardianRelationUpdateRequest
    ) -> GuardianRelationResponse:
        """Update the relationship type or active flag.

        Raises:
            NotFoundError: If the relation does not exist.
            AlreadyExistsError: If reactivating would duplicate an active pair.
        """
        relation = await self._get(relation_id)

        if request.relationship_type is not None:
            relationship_type = request.relationship_type.strip()
            if not relationship_type:
                raise ValidationError("relationship_type is required", field="relationship_type")
            relation.relationship_type = relationship_type
        if request.is_active is not None and request.is_active != relation.is_active:
            if request.is_active and await self._relations.exists_active(
                relation.guardian_id, relation.student_id
            ):
                raise AlreadyExistsError("guardian_relation", "student_id", relation.student_id)
            relation.is_active = request.is_active

        relation.updated_at = utc_now()
        await self._relations.save(relation)

        logger.info("Guardian relation updated: %s", relation.id)

        return self._to_response(relation)

    async def delete_relation(self, relation_id: str) -> None:
        """Deactivate a relation. The row is kept."""
        relation = await self._get(relation_id)

        relation.is_active = False
        relation.updated_at = utc_now()
        await self._relations.save(relation)

        logger.info("Guardian relation deactivated: %s", relation.id)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, relation_id: str) -> GuardianRelation:
        relation = await self._relations.get_by_id(parse_uuid(relation_id, "relation_id"))
        if relation is None:
            raise NotFoundError("guardian_relation", relation_id)
        return relation

    def _to_response(self, relation: GuardianRelation) -> GuardianRelationResponse:
        return GuardianRelationResponse(
            id=str(relation.id),
            guardian_id=str(relation.guardian_id),
            student_id=str(relation.student_id),
            relationship_type=relation.relationship_type,
            is_active=relation.is_active,
            created_by=str(relation.created_by) if relation.created_by else None,
            created_at=relation.created_at,
            updated_at=relation.updated_at,
        )
