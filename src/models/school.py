# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School request and response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SchoolCreateRequest(BaseModel):
    """Request to create a school.

    Zero or empty country, tier and capacity fields are filled from the
    configured tenant defaults.
    """

    name: str = Field(..., max_length=255)
    code: str = Field(..., max_length=50)
    address: str | None = None
    city: str | None = None
    country: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    subscription_tier: str | None = None
    max_teachers: int = Field(0, ge=0)
    max_students: int = Field(0, ge=0)
    metadata: dict[str, Any] | None = None


class SchoolUpdateRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    address: str | None = None
    city: str | None = None
    country: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    subscription_tier: str | None = None
    max_teachers: int | None = Field(None, ge=0)
    max_students: int | None = Field(None, ge=0)
    metadata: dict[str, Any] | None = None
    is_active: bool | None = None


class SchoolResponse(BaseModel):
    id: str
    name: str
    code: str
    address: str | None = None
    city: str | None = None
    country: str
    contact_email: str | None = None
    contact_phone: str | None = None
    subscription_tier: str
    max_teachers: int
    max_students: int
    is_active: bool
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class SchoolListResponse(BaseModel):
    items: list[SchoolResponse]
    total: int
    limit: int
    offset: int
