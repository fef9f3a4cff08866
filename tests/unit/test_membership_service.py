# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for MembershipService."""

from uuid import uuid4

import pytest

from src.core.errors import NotFoundError, ValidationError
from src.domains.membership.service import MembershipService
from src.models.membership import MembershipCreateRequest, MembershipUpdateRequest
from tests.fakes import (
    FakeAcademicUnitRepository,
    FakeMembershipRepository,
    FakeUserRepository,
    make_membership,
    make_unit,
    make_user,
)


@pytest.fixture
def memberships() -> FakeMembershipRepository:
    return FakeMembershipRepository()


@pytest.fixture
def units() -> FakeAcademicUnitRepository:
    return FakeAcademicUnitRepository()


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def service(memberships, units, users) -> MembershipService:
    return MembershipService(memberships, units, users)


@pytest.fixture
def unit(units):
    row = make_unit(uuid4(), "Section A")
    units.items[row.id] = row
    return row


@pytest.fixture
def student(users):
    row = make_user(email="student@acme.edu")
    users.items[row.id] = row
    return row


class TestCreateMembership:
    @pytest.mark.asyncio
    async def test_school_comes_from_unit(self, service: MembershipService, unit, student) -> None:
        result = await service.create_membership(
            MembershipCreateRequest(user_id=str(student.id), unit_id=str(unit.id), role="student")
        )

        assert result.school_id == str(unit.school_id)
        assert result.unit_id == str(unit.id)
        assert result.is_active is True
        assert result.withdrawn_at is None

    @pytest.mark.asyncio
    async def test_unknown_unit(self, service: MembershipService, student) -> None:
        with pytest.raises(NotFoundError):
            await service.create_membership(
                MembershipCreateRequest(user_id=str(student.id), unit_id=str(uuid4()), role="student")
            )

    @pytest.mark.asyncio
    async def test_unknown_user(self, service: MembershipService, unit) -> None:
        with pytest.raises(NotFoundError):
            await service.create_membership(
                MembershipCreateRequest(user_id=str(uuid4()), unit_id=str(unit.id), role="student")
            )

    @pytest.mark.asyncio
    async def test_blank_role(self, service: MembershipService, unit, student) -> None:
        with pytest.raises(ValidationError) as exc:
            await service.create_membership(
                MembershipCreateRequest(user_id=str(student.id), unit_id=str(unit.id), role="  ")
            )

        assert exc.value.field == "role"

    @pytest.mark.asyncio
    async def test_malformed_user_id(self, service: MembershipService, unit) -> None:
        with pytest.raises(ValidationError) as exc:
            await service.create_membership(
                MembershipCreateRequest(user_id="abc", unit_id=str(unit.id), role="student")
            )

        assert exc.value.field == "user_id"


class TestMembershipLifecycle:
    @pytest.mark.asyncio
    async def test_expire_withdraws_and_deactivates(
        self, service: MembershipService, memberships, unit, student
    ) -> None:
        membership = make_membership(student, unit)
        memberships.items[membership.id] = membership

        result = await service.expire_membership(str(membership.id))

        assert result.is_active is False
        assert result.withdrawn_at is not None

    @pytest.mark.asyncio
    async def test_update_role(self, service: MembershipService, memberships, unit, student) -> None:
        membership = make_membership(student, unit)
        memberships.items[membership.id] = membership

        result = await service.update_membership(
            str(membership.id), MembershipUpdateRequest(role="assistant", metadata={"seat": 3})
        )

        assert result.role == "assistant"
        assert result.metadata == {"seat": 3}

    @pytest.mark.asyncio
    async def test_update_rejects_blank_role(
        self, service: MembershipService, memberships, unit, student
    ) -> None:
        membership = make_membership(student, unit, "student")
        memberships.items[membership.id] = membership

        with pytest.raises(ValidationError) as exc_info:
            await service.update_membership(str(membership.id), MembershipUpdateRequest(role="   "))

        assert exc_info.value.field == "role"
        assert memberships.items[membership.id].role == "student"

    @pytest.mark.asyncio
    async def test_delete_is_hard(self, service: MembershipService, memberships, unit, student) -> None:
        membership = make_membership(student, unit)
        memberships.items[membership.id] = membership

        await service.delete_membership(str(membership.id))

        assert membership.id not in memberships.items
        with pytest.raises(NotFoundError):
            await service.get_membership(str(membership.id))


class TestListing:
    @pytest.mark.asyncio
    async def test_list_by_unit_and_role(
        self, service: MembershipService, memberships, unit, student, users
    ) -> None:
        teacher = make_user(email="teacher@acme.edu")
        users.items[teacher.id] = teacher
        for row in (make_membership(student, unit), make_membership(teacher, unit, role="teacher")):
            memberships.items[row.id] = row

        everyone = await service.list_by_unit(str(unit.id))
        teachers = await service.list_by_unit_and_role(str(unit.id), "teacher")
        mine = await service.list_by_user(str(student.id))

        assert len(everyone) == 2
        assert [m.user_id for m in teachers] == [str(teacher.id)]
        assert [m.role for m in mine] == ["student"]

    @pytest.mark.asyncio
    async def test_role_filter_required(self, service: MembershipService, unit) -> None:
        with pytest.raises(ValidationError):
            await service.list_by_unit_and_role(str(unit.id), "")
