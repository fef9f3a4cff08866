# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Guardian relation domain package.

Links guardian users to student users. At most one active relation exists
per (guardian, student) pair.
"""

from src.domains.guardian.service import GuardianRelationService

__all__ = ["GuardianRelationService"]
