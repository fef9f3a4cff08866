# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

This module provides authentication and authorization services:
- Password login producing a token pair and an active context
- JWT token creation and validation
- Password hashing with bcrypt

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT token creation and validation.
    AuthService: Login, verify, logout and refresh.
    schedule_last_login_touch: Detached last-login update.
"""

from src.domains.auth.jwt import JWTManager, TokenPair, TokenPayload
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService, schedule_last_login_touch

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "TokenPair",
    "TokenPayload",
    "AuthService",
    "schedule_last_login_touch",
]
