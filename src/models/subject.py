# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject request and response models."""

from datetime import datetime

from pydantic import BaseModel, Field


class SubjectCreateRequest(BaseModel):
    school_id: str
    name: str = Field(..., max_length=255)
    academic_unit_id: str | None = None
    code: str | None = Field(None, max_length=50)
    description: str | None = None


class SubjectUpdateRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    academic_unit_id: str | None = None
    code: str | None = Field(None, max_length=50)
    description: str | None = None


class SubjectResponse(BaseModel):
    id: str
    school_id: str
    academic_unit_id: str | None = None
    name: str
    code: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
