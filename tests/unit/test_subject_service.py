# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for SubjectService."""

from uuid import uuid4

import pytest

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.domains.subject.service import SubjectService
from src.models.subject import SubjectCreateRequest, SubjectUpdateRequest
from tests.fakes import FakeSchoolRepository, FakeSubjectRepository, make_school, make_subject


@pytest.fixture
def subjects() -> FakeSubjectRepository:
    return FakeSubjectRepository()


@pytest.fixture
def school(schools):
    row = make_school()
    schools.items[row.id] = row
    return row


@pytest.fixture
def schools() -> FakeSchoolRepository:
    return FakeSchoolRepository()


@pytest.fixture
def service(subjects, schools) -> SubjectService:
    return SubjectService(subjects, schools)


class TestSubjectService:
    @pytest.mark.asyncio
    async def test_create(self, service: SubjectService, school) -> None:
        result = await service.create_subject(
            SubjectCreateRequest(school_id=str(school.id), name=" Mathematics ", code="MATH")
        )

        assert result.name == "Mathematics"
        assert result.code == "MATH"
        assert result.is_active is True

    @pytest.mark.asyncio
    async def test_unknown_school(self, service: SubjectService) -> None:
        with pytest.raises(NotFoundError):
            await service.create_subject(SubjectCreateRequest(school_id=str(uuid4()), name="Art"))

    @pytest.mark.asyncio
    async def test_name_too_short(self, service: SubjectService, school) -> None:
        with pytest.raises(ValidationError) as exc:
            await service.create_subject(SubjectCreateRequest(school_id=str(school.id), name="A"))

        assert exc.value.field == "name"

    @pytest.mark.asyncio
    async def test_duplicate_active_name(self, service: SubjectService, school, subjects) -> None:
        existing = make_subject(school.id, "Mathematics")
        subjects.items[existing.id] = existing

        with pytest.raises(AlreadyExistsError):
            await service.create_subject(
                SubjectCreateRequest(school_id=str(school.id), name="Mathematics")
            )

    @pytest.mark.asyncio
    async def test_name_of_deactivated_subject_can_be_reused(
        self, service: SubjectService, school, subjects
    ) -> None:
        old = make_subject(school.id, "Mathematics", is_active=False)
        subjects.items[old.id] = old

        result = await service.create_subject(
            SubjectCreateRequest(school_id=str(school.id), name="Mathematics")
        )

        assert result.id != str(old.id)

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, service: SubjectService, school, subjects) -> None:
        math = make_subject(school.id, "Mathematics")
        art = make_subject(school.id, "Art")
        subjects.items.update({math.id: math, art.id: art})

        with pytest.raises(AlreadyExistsError):
            await service.update_subject(str(art.id), SubjectUpdateRequest(name="Mathematics"))

    @pytest.mark.asyncio
    async def test_rename_to_same_name(self, service: SubjectService, school, subjects) -> None:
        math = make_subject(school.id, "Mathematics")
        subjects.items[math.id] = math

        result = await service.update_subject(
            str(math.id), SubjectUpdateRequest(name="Mathematics", description="Numbers")
        )

        assert result.description == "Numbers"

    @pytest.mark.asyncio
    async def test_delete_deactivates(self, service: SubjectService, school, subjects) -> None:
        math = make_subject(school.id, "Mathematics")
        subjects.items[math.id] = math

        await service.delete_subject(str(math.id))

        assert math.is_active is False
        with pytest.raises(NotFoundError):
            await service.get_subject(str(math.id))

    @pytest.mark.asyncio
    async def test_list_by_school(self, service: SubjectService, school, subjects) -> None:
        mine = make_subject(school.id, "Mathematics")
        other = make_subject(uuid4(), "History")
        subjects.items.update({mine.id: mine, other.id: other})

        scoped = await service.list_subjects(str(school.id))
        everything = await service.list_subjects()

        assert [s.name for s in scoped] == ["Mathematics"]
        assert len(everything) == 2
