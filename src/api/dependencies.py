# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users and enforce permissions
- Get service instances wired to their repositories

Example:
    @router.get("/schools")
    async def list_schools(
        service: SchoolServiceDep,
        current_user: CurrentUser = Depends(RequirePermission("schools:read")),
    ):
        ...
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import get_settings
from src.core.errors import ForbiddenError, UnauthorizedError
from src.domains.academic_unit.service import AcademicUnitService
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService, schedule_last_login_touch
from src.domains.guardian.service import GuardianRelationService
from src.domains.iam.service import PermissionService, ResourceService, RoleService
from src.domains.material.service import MaterialService
from src.domains.membership.service import MembershipService
from src.domains.menu.service import MenuService
from src.domains.school.service import SchoolService
from src.domains.stats.service import StatsService
from src.domains.subject.service import SubjectService
from src.domains.user.service import UserService
from src.infrastructure.database.connection import get_session
from src.infrastructure.database.repositories import (
    AcademicUnitRepository,
    GuardianRelationRepository,
    MaterialRepository,
    MembershipRepository,
    PermissionRepository,
    ResourceRepository,
    RoleRepository,
    SchoolRepository,
    StatsRepository,
    SubjectRepository,
    UserRepository,
    UserRoleRepository,
)

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    The session commits when the endpoint returns and rolls back on error.

    Yields:
        AsyncSession for the request.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        UnauthorizedError: If no valid token accompanied the request.
    """
    user = get_current_user(request)
    if not user:
        raise UnauthorizedError()
    return user


class RequirePermission:
    """Dependency for requiring one permission.

    The permission set of the active context must contain the exact name.

    Example:
        @router.post("/schools")
        async def create_school(
            user: CurrentUser = Depends(RequirePermission("schools:create")),
        ):
            ...
    """

    def __init__(self, permission: str) -> None:
        """Initialize permission requirement.

        Args:
            permission: Required <resource>:<action> name.
        """
        self.permission = permission

    def __call__(self, request: Request) -> CurrentUser:
        """Check the permission and return the user.

        Raises:
            UnauthorizedError: If not authenticated.
            ForbiddenError: If the permission is missing.
        """
        user = require_auth(request)

        if not user.has_permission(self.permission):
            logger.info("Permission %s denied for user %s", self.permission, user.id)
            raise ForbiddenError(
                f"missing permission: {self.permission}",
                permission=self.permission,
            )

        return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    """Get JWT manager instance."""
    return JWTManager(get_settings().jwt)


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Get the shared password hasher."""
    return PasswordHasher()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(
        UserRepository(db),
        UserRoleRepository(db),
        jwt_manager,
        password_hasher,
        on_login=schedule_last_login_touch,
    )


def get_school_service(db: AsyncSession = Depends(get_db)) -> SchoolService:
    return SchoolService(SchoolRepository(db), get_settings().school_defaults)


def get_academic_unit_service(db: AsyncSession = Depends(get_db)) -> AcademicUnitService:
    return AcademicUnitService(AcademicUnitRepository(db), SchoolRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(UserRepository(db), SchoolRepository(db), password_hasher)


def get_subject_service(db: AsyncSession = Depends(get_db)) -> SubjectService:
    return SubjectService(SubjectRepository(db), SchoolRepository(db))


def get_membership_service(db: AsyncSession = Depends(get_db)) -> MembershipService:
    return MembershipService(
        MembershipRepository(db),
        AcademicUnitRepository(db),
        UserRepository(db),
    )


def get_guardian_service(db: AsyncSession = Depends(get_db)) -> GuardianRelationService:
    return GuardianRelationService(GuardianRelationRepository(db), UserRepository(db))


def get_material_service(db: AsyncSession = Depends(get_db)) -> MaterialService:
    return MaterialService(MaterialRepository(db))


def get_stats_service(db: AsyncSession = Depends(get_db)) -> StatsService:
    return StatsService(StatsRepository(db))


def get_menu_service(db: AsyncSession = Depends(get_db)) -> MenuService:
    return MenuService(ResourceRepository(db))


def get_role_service(db: AsyncSession = Depends(get_db)) -> RoleService:
    return RoleService(RoleRepository(db), UserRoleRepository(db), UserRepository(db))


def get_permission_service(db: AsyncSession = Depends(get_db)) -> PermissionService:
    return PermissionService(PermissionRepository(db))


def get_resource_service(db: AsyncSession = Depends(get_db)) -> ResourceService:
    return ResourceService(ResourceRepository(db))


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SchoolServiceDep = Annotated[SchoolService, Depends(get_school_service)]
AcademicUnitServiceDep = Annotated[AcademicUnitService, Depends(get_academic_unit_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SubjectServiceDep = Annotated[SubjectService, Depends(get_subject_service)]
MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]
GuardianServiceDep = Annotated[GuardianRelationService, Depends(get_guardian_service)]
MaterialServiceDep = Annotated[MaterialService, Depends(get_material_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
MenuServiceDep = Annotated[MenuService, Depends(get_menu_service)]
RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
PermissionServiceDep = Annotated[PermissionService, Depends(get_permission_service)]
ResourceServiceDep = Annotated[ResourceService, Depends(get_resource_service)]
