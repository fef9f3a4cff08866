# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity and access management catalog.

Exports:
    RoleService: Role catalog and user role grants.
    PermissionService: Permission catalog.
    ResourceService: Resource registry behind the menu.
"""

from src.domains.iam.service import PermissionService, ResourceService, RoleService

__all__ = ["RoleService", "PermissionService", "ResourceService"]
