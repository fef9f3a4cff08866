# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared response envelopes."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every tagged error."""

    error: str = Field(description="Error kind, e.g. not_found")
    code: str = Field(description="Stable error code, e.g. NOT_FOUND")
    message: str = Field(description="Human-readable description")
    details: dict[str, str] | None = Field(None, description="Extra context")


class MessageResponse(BaseModel):
    message: str
