# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Guardian relation request and response models."""

from datetime import datetime

from pydantic import BaseModel, Field


class GuardianRelationCreateRequest(BaseModel):
    guardian_id: str
    student_id: str
    relationship_type: str


class GuardianRelationUpdateRequest(BaseModel):
    relationship_type: str | None = Field(None, min_length=1, max_length=50)
    is_active: bool | None = None


class GuardianRelationResponse(BaseModel):
    id: str
    guardian_id: str
    student_id: str
    relationship_type: str
    is_active: bool
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime
