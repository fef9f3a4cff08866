# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Authentication endpoints (login, verify, refresh, logout).
    schools: School management endpoints.
    units: Academic unit hierarchy endpoints.
    users: User management and role grant endpoints.
    memberships: Unit membership endpoints.
    subjects: Subject catalog endpoints.
    guardians: Guardian to student relation endpoints.
    admin: Material deletion and global statistics.
    iam: Roles, permissions, resources and the navigation menu.
"""

from fastapi import APIRouter

from src.api.v1 import admin, auth, guardians, iam, memberships, schools, subjects, units, users

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(schools.router, prefix="/schools", tags=["Schools"])
router.include_router(units.router, tags=["Academic Units"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(memberships.router, prefix="/memberships", tags=["Memberships"])
router.include_router(subjects.router, prefix="/subjects", tags=["Subjects"])
router.include_router(guardians.router, tags=["Guardian Relations"])
router.include_router(admin.router, tags=["Administration"])
router.include_router(iam.router)

__all__ = ["router"]
