# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for role, permission and resource services."""

from uuid import uuid4

import pytest

from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.domains.iam.service import PermissionService, ResourceService, RoleService
from src.models.iam import GrantRoleRequest, ResourceCreateRequest, ResourceUpdateRequest
from tests.fakes import (
    FakePermissionRepository,
    FakeResourceRepository,
    FakeRoleRepository,
    FakeUserRepository,
    FakeUserRoleRepository,
    make_grant,
    make_permission,
    make_resource,
    make_role,
    make_user,
)


@pytest.fixture
def roles() -> FakeRoleRepository:
    repo = FakeRoleRepository()
    for name, scope in [("platform_admin", "system"), ("teacher", "school"), ("tutor", "unit")]:
        role = make_role(name, scope=scope)
        repo.items[role.id] = role
    return repo


@pytest.fixture
def user_roles(roles) -> FakeUserRoleRepository:
    return FakeUserRoleRepository(roles)


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def role_service(roles, user_roles, users) -> RoleService:
    return RoleService(roles, user_roles, users)


@pytest.fixture
def user(users):
    row = make_user()
    users.items[row.id] = row
    return row


def role_named(roles: FakeRoleRepository, name: str):
    return next(r for r in roles.items.values() if r.name == name)


class TestRoleCatalog:
    @pytest.mark.asyncio
    async def test_list_all_sorted(self, role_service: RoleService) -> None:
        result = await role_service.list_roles()

        assert [r.name for r in result.roles] == ["platform_admin", "teacher", "tutor"]

    @pytest.mark.asyncio
    async def test_list_by_scope(self, role_service: RoleService) -> None:
        result = await role_service.list_roles(scope="school")

        assert [r.name for r in result.roles] == ["teacher"]

    @pytest.mark.asyncio
    async def test_get_unknown_role(self, role_service: RoleService) -> None:
        with pytest.raises(NotFoundError):
            await role_service.get_role(str(uuid4()))


class TestRoleGrants:
    @pytest.mark.asyncio
    async def test_grant_and_list(self, role_service: RoleService, roles, user) -> None:
        teacher = role_named(roles, "teacher")
        school_id = str(uuid4())
        admin_id = str(uuid4())

        grant = await role_service.grant_role(
            str(user.id),
            GrantRoleRequest(role_id=str(teacher.id), school_id=school_id),
            granted_by=admin_id,
        )
        listed = await role_service.list_user_roles(str(user.id))

        assert grant.role_name == "teacher"
        assert grant.school_id == school_id
        assert grant.granted_by == admin_id
        assert [g.id for g in listed.roles] == [grant.id]

    @pytest.mark.asyncio
    async def test_duplicate_grant_conflicts(self, role_service: RoleService, roles, user) -> None:
        teacher = role_named(roles, "teacher")
        request = GrantRoleRequest(role_id=str(teacher.id), school_id=str(uuid4()))
        await role_service.grant_role(str(user.id), request)

        with pytest.raises(AlreadyExistsError):
            await role_service.grant_role(str(user.id), request)

    @pytest.mark.asyncio
    async def test_same_role_in_other_school_is_allowed(
        self, role_service: RoleService, roles, user
    ) -> None:
        teacher = role_named(roles, "teacher")
        await role_service.grant_role(
            str(user.id), GrantRoleRequest(role_id=str(teacher.id), school_id=str(uuid4()))
        )
        await role_service.grant_role(
            str(user.id), GrantRoleRequest(role_id=str(teacher.id), school_id=str(uuid4()))
        )

        assert len((await role_service.list_user_roles(str(user.id))).roles) == 2

    @pytest.mark.asyncio
    async def test_grant_to_unknown_user(self, role_service: RoleService, roles) -> None:
        teacher = role_named(roles, "teacher")

        with pytest.raises(NotFoundError):
            await role_service.grant_role(str(uuid4()), GrantRoleRequest(role_id=str(teacher.id)))

    @pytest.mark.asyncio
    async def test_grant_unknown_role(self, role_service: RoleService, user) -> None:
        with pytest.raises(NotFoundError):
            await role_service.grant_role(str(user.id), GrantRoleRequest(role_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_revoke_removes_every_grant(
        self, role_service: RoleService, roles, user_roles, user
    ) -> None:
        teacher = role_named(roles, "teacher")
        for school_id in (uuid4(), uuid4()):
            row = make_grant(user, teacher, school_id=school_id)
            user_roles.items[row.id] = row

        await role_service.revoke_role(str(user.id), str(teacher.id))

        assert user_roles.items == {}

    @pytest.mark.asyncio
    async def test_revoke_missing_grant(self, role_service: RoleService, roles, user) -> None:
        teacher = role_named(roles, "teacher")

        with pytest.raises(NotFoundError):
            await role_service.revoke_role(str(user.id), str(teacher.id))


class TestPermissionService:
    @pytest.mark.asyncio
    async def test_list_and_get(self) -> None:
        repo = FakePermissionRepository()
        for name in ("units:read", "schools:create"):
            row = make_permission(name)
            repo.items[row.id] = row
        service = PermissionService(repo)

        listed = await service.list_permissions()
        one = await service.get_permission(listed.permissions[0].id)

        assert [p.name for p in listed.permissions] == ["schools:create", "units:read"]
        assert one.action == "create"

    @pytest.mark.asyncio
    async def test_get_unknown(self) -> None:
        with pytest.raises(NotFoundError):
            await PermissionService(FakePermissionRepository()).get_permission(str(uuid4()))


class TestResourceService:
    @pytest.fixture
    def resources(self) -> FakeResourceRepository:
        return FakeResourceRepository()

    @pytest.fixture
    def service(self, resources) -> ResourceService:
        return ResourceService(resources)

    @pytest.mark.asyncio
    async def test_create_child_resource(self, service: ResourceService, resources) -> None:
        parent = make_resource("academic")
        resources.items[parent.id] = parent

        result = await service.create_resource(
            ResourceCreateRequest(key="units", display_name="Units", parent_id=str(parent.id), sort_order=2)
        )

        assert result.parent_id == str(parent.id)
        assert result.sort_order == 2
        assert (await service.list_resources()).total == 2

    @pytest.mark.asyncio
    async def test_create_with_missing_parent(self, service: ResourceService) -> None:
        with pytest.raises(ValidationError):
            await service.create_resource(
                ResourceCreateRequest(key="units", display_name="Units", parent_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_update_rejects_self_parent(self, service: ResourceService, resources) -> None:
        resource = make_resource("units")
        resources.items[resource.id] = resource

        with pytest.raises(ValidationError):
            await service.update_resource(
                str(resource.id), ResourceUpdateRequest(parent_id=str(resource.id))
            )

    @pytest.mark.asyncio
    async def test_update_fields(self, service: ResourceService, resources) -> None:
        parent = make_resource("academic")
        resource = make_resource("units", parent=parent)
        resources.items.update({parent.id: parent, resource.id: resource})

        result = await service.update_resource(
            str(resource.id),
            ResourceUpdateRequest(parent_id="", icon="tree", is_menu_visible=False),
        )

        assert result.parent_id is None
        assert result.icon == "tree"
        assert result.is_menu_visible is False
