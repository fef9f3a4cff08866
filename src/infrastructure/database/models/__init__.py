# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models.

Importing this package registers every table on Base.metadata, which is
what the Alembic environment relies on.
"""

from src.infrastructure.database.models.academic import (
    AcademicUnit,
    GuardianRelation,
    Membership,
    School,
    Subject,
)
from src.infrastructure.database.models.auth import User, UserRole
from src.infrastructure.database.models.base import Base
from src.infrastructure.database.models.content import Material
from src.infrastructure.database.models.iam import (
    Permission,
    Resource,
    ResourcePermission,
    Role,
    RolePermission,
)

__all__ = [
    "Base",
    # auth
    "User",
    "UserRole",
    # academic
    "School",
    "AcademicUnit",
    "Subject",
    "Membership",
    "GuardianRelation",
    # iam
    "Role",
    "Permission",
    "RolePermission",
    "Resource",
    "ResourcePermission",
    # content
    "Material",
]
