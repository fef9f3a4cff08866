# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic unit request and response models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class UnitCreateRequest(BaseModel):
    parent_unit_id: str | None = None
    type: str = Field(..., min_length=1, max_length=50)
    display_name: str = Field(..., max_length=255)
    code: str | None = Field(None, max_length=50)
    description: str | None = None
    metadata: dict[str, Any] | None = None


class UnitUpdateRequest(BaseModel):
    """All fields optional. parent_unit_id="" turns the unit into a root."""

    parent_unit_id: str | None = None
    type: str | None = Field(None, min_length=1, max_length=50)
    display_name: str | None = Field(None, max_length=255)
    description: str | None = None
    metadata: dict[str, Any] | None = None


class UnitResponse(BaseModel):
    id: str
    parent_unit_id: str | None = None
    school_id: str
    type: str
    display_name: str
    code: str
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class UnitTreeNode(BaseModel):
    id: str
    type: str
    display_name: str
    code: str
    depth: int = 1
    children: list[UnitTreeNode] = Field(default_factory=list)
