# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership request and response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class MembershipCreateRequest(BaseModel):
    # Identifiers arrive as strings and are validated by the service
    user_id: str
    unit_id: str
    role: str
    metadata: dict[str, Any] | None = None


class MembershipUpdateRequest(BaseModel):
    role: str | None = Field(None, min_length=1, max_length=50)
    metadata: dict[str, Any] | None = None


class MembershipResponse(BaseModel):
    id: str
    user_id: str
    school_id: str
    unit_id: str | None = None
    role: str
    enrolled_at: datetime
    withdrawn_at: datetime | None = None
    is_active: bool
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
