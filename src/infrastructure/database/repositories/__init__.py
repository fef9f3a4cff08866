# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Repositories over the async session.

Services depend on these classes only through the methods they call.
"""

from src.infrastructure.database.repositories.academic_unit import AcademicUnitRepository
from src.infrastructure.database.repositories.guardian import GuardianRelationRepository
from src.infrastructure.database.repositories.iam import (
    PermissionRepository,
    ResourceRepository,
    RoleRepository,
)
from src.infrastructure.database.repositories.material import MaterialRepository
from src.infrastructure.database.repositories.membership import MembershipRepository
from src.infrastructure.database.repositories.school import SchoolRepository
from src.infrastructure.database.repositories.stats import GlobalCounts, StatsRepository
from src.infrastructure.database.repositories.subject import SubjectRepository
from src.infrastructure.database.repositories.user import UserRepository
from src.infrastructure.database.repositories.user_role import UserRoleRepository

__all__ = [
    "AcademicUnitRepository",
    "GuardianRelationRepository",
    "GlobalCounts",
    "MaterialRepository",
    "MembershipRepository",
    "PermissionRepository",
    "ResourceRepository",
    "RoleRepository",
    "SchoolRepository",
    "StatsRepository",
    "SubjectRepository",
    "UserRepository",
    "UserRoleRepository",
]
