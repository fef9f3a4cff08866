# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic unit domain.

Exports:
    AcademicUnitService: Unit CRUD, soft delete/restore, tree and path.
    build_unit_tree: Flat list to forest.
"""

from src.domains.academic_unit.service import AcademicUnitService
from src.domains.academic_unit.tree import build_unit_tree

__all__ = ["AcademicUnitService", "build_unit_tree"]
