# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Statistics models."""

from pydantic import BaseModel


class GlobalStatsResponse(BaseModel):
    total_users: int
    total_active_users: int
    total_schools: int
    total_subjects: int
    total_guardian_relations: int
