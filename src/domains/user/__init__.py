# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain package.

This package provides admin-side user management:
- User CRUD with bcrypt password hashing
- Case-folded unique emails
- Soft deletion
"""

from src.domains.user.service import UserService

__all__ = ["UserService"]
