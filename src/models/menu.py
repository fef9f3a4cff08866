# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Navigation menu models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MenuItem(BaseModel):
    key: str
    display_name: str
    icon: str | None = None
    scope: str
    sort_order: int = 0
    children: list[MenuItem] = Field(default_factory=list)


class MenuResponse(BaseModel):
    items: list[MenuItem] = Field(default_factory=list)
