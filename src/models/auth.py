# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request and response models."""

from datetime import datetime

from pydantic import BaseModel, Field

# local@domain; deliverability is not checked so internal domains can log in
LOGIN_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=LOGIN_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class VerifyTokenRequest(BaseModel):
    token: str


class ActiveContext(BaseModel):
    """Primary role and flattened permission set embedded in every token.

    Attributes:
        role_id: Primary role identifier.
        role_name: Primary role name.
        school_id: School the context applies to, if any.
        permissions: Sorted, de-duplicated <resource>:<action> names.
    """

    role_id: str
    role_name: str
    school_id: str | None = None
    permissions: list[str] = Field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


class UserInfo(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    school_id: str | None = None


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "Bearer"
    user: UserInfo
    active_context: ActiveContext


class VerifyTokenResponse(BaseModel):
    """Outcome of a token check. Failures are reported, never raised."""

    valid: bool
    user_id: str | None = None
    email: str | None = None
    school_id: str | None = None
    expires_at: datetime | None = None
    active_context: ActiveContext | None = None
    error: str | None = None
