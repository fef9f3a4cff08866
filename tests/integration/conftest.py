# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for driving the HTTP app against in-memory repositories.

The app is built with create_app() and every service dependency is
overridden, so no database is needed. TestClient is used without a
context manager, which keeps the lifespan (and init_database) from running.
"""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api import dependencies as deps
from src.api.app import create_app
from src.core.config import Settings
from src.domains.academic_unit.service import AcademicUnitService
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService
from src.domains.guardian.service import GuardianRelationService
from src.domains.iam.service import PermissionService, ResourceService, RoleService
from src.domains.material.service import MaterialService
from src.domains.membership.service import MembershipService
from src.domains.menu.service import MenuService
from src.domains.school.service import SchoolService
from src.domains.stats.service import StatsService
from src.domains.subject.service import SubjectService
from src.domains.user.service import UserService
from tests.fakes import FakeBackend


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def app(
    settings: Settings,
    backend: FakeBackend,
    jwt_manager: JWTManager,
    password_hasher: PasswordHasher,
) -> Iterator[FastAPI]:
    application = create_app()
    b = backend

    application.dependency_overrides.update({
        deps.get_auth_service: lambda: AuthService(b.users, b.user_roles, jwt_manager, password_hasher),
        deps.get_school_service: lambda: SchoolService(b.schools, settings.school_defaults),
        deps.get_academic_unit_service: lambda: AcademicUnitService(b.units, b.schools),
        deps.get_user_service: lambda: UserService(b.users, b.schools, password_hasher),
        deps.get_subject_service: lambda: SubjectService(b.subjects, b.schools),
        deps.get_membership_service: lambda: MembershipService(b.memberships, b.units, b.users),
        deps.get_guardian_service: lambda: GuardianRelationService(b.relations, b.users),
        deps.get_material_service: lambda: MaterialService(b.materials),
        deps.get_stats_service: lambda: StatsService(b.stats),
        deps.get_menu_service: lambda: MenuService(b.resources),
        deps.get_role_service: lambda: RoleService(b.roles, b.user_roles, b.users),
        deps.get_permission_service: lambda: PermissionService(b.permissions),
        deps.get_resource_service: lambda: ResourceService(b.resources),
    })

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
