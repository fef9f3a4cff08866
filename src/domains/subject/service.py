# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject service.

Subjects belong to a school and optionally to an academic unit. Names are
unique among the active subjects of a school; deleting a subject only
deactivates it.
"""

import logging
from uuid import UUID, uuid4

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.infrastructure.database.models.academic import Subject
from src.infrastructure.database.repositories.school import SchoolRepository
from src.infrastructure.database.repositories.subject import SubjectRepository
from src.models.subject import (
    SubjectCreateRequest,
    SubjectResponse,
    SubjectUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2


class SubjectService:
    def __init__(self, subjects: SubjectRepository, schools: SchoolRepository) -> None:
        self._subjects = subjects
        self._schools = schools

    async def create_subject(self, request: SubjectCreateRequest) -> SubjectResponse:
        """Create a subject.

        Raises:
            ValidationError: If the name is too short or an id is malformed.
            NotFoundError: If the school does not exist.
            AlreadyExistsError: If the school already has an active subject
                with this name.
        """
        school_id = parse_uuid(request.school_id, "school_id")
        name = self._validate_name(request.name)

        if await self._schools.get_by_id(school_id) is None:
            raise NotFoundError("school", school_id)

        if await self._subjects.exists_by_name(school_id, name):
            raise AlreadyExistsError("subject", "name", name)

        now = utc_now()
        subject = Subject(
            id=uuid4(),
            school_id=school_id,
            academic_unit_id=parse_optional_uuid(request.academic_unit_id, "academic_unit_id"),
            name=name,
            code=request.code,
            description=request.description,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        await self._subjects.add(subject)

        logger.info("Subject created: %s (school=%s)", subject.id, school_id)

        return self._to_response(subject)

    async def get_subject(self, subject_id: str) -> SubjectResponse:
        subject = await self._get(subject_id)
        return self._to_response(subject)

    async def list_subjects(self, school_id: str | None = None) -> list[SubjectResponse]:
        subjects = await self._subjects.find_all(parse_optional_uuid(school_id, "school_id"))
        return [self._to_response(subject) for subject in subjects]

    async def update_subject(
        self, subject_id: str, request: SubjectUpdateRequest
    ) -> SubjectResponse:
        """Update a subject.

        Raises:
            NotFoundError: If the subject does not exist.
            AlreadyExistsError: If the new name is taken in the school.
        """
        subject = await self._get(subject_id)

        if request.name is not None:
            name = self._validate_name(request.name)
            if name != subject.name and await self._subjects.exists_by_name(
                subject.school_id, name, exclude_id=subject.id
            ):
                raise AlreadyExistsError("subject", "name", name)
            subject.name = name
        if request.academic_unit_id is not None:
            subject.academic_unit_id = parse_optional_uuid(
                request.academic_unit_id, "academic_unit_id"
            )
        if request.code is not None:
            subject.code = request.code
        if request.description is not None:
            subject.description = request.description

        subject.updated_at = utc_now()
        await self._subjects.save(subject)

        logger.info("Subject updated: %s", subject.id)

        return self._to_response(subject)

    async def delete_subject(self, subject_id: str) -> None:
        subject = await self._get(subject_id)

        subject.is_active = False
        subject.updated_at = utc_now()
        await self._subjects.save(subject)

        logger.info("Subject deactivated: %s", subject.id)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, subject_id: str | UUID) -> Subject:
        subject = await self._subjects.get_by_id(parse_uuid(subject_id, "subject_id"))
        if subject is None:
            raise NotFoundError("subject", subject_id)
        return subject

    @staticmethod
    def _validate_name(raw: str) -> str:
        name = raw.strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"name must be at least {MIN_NAME_LENGTH} characters", field="name"
            )
        return name

    def _to_response(self, subject: Subject) -> SubjectResponse:
        return SubjectResponse(
            id=str(subject.id),
            school_id=str(subject.school_id),
            academic_unit_id=str(subject.academic_unit_id) if subject.academic_unit_id else None,
            name=subject.name,
            code=subject.code,
            description=subject.description,
            is_active=subject.is_active,
            created_at=subject.created_at,
            updated_at=subject.updated_at,
        )
