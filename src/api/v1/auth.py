# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /login - Email and password login
- POST /refresh - Refresh access token (not honored)
- POST /verify - Verify a token for this or a sibling service
- POST /logout - User logout (stateless no-op)

Example:
    POST /api/v1/auth/login
    {
        "email": "admin@acme.edu",
        "password": "s3cret-pass"
    }
"""

import logging

from fastapi import APIRouter, status

from src.api.dependencies import AuthenticatedUser, AuthServiceDep
from src.models.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    VerifyTokenRequest,
    VerifyTokenResponse,
)
from src.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with email and password and receive a token pair.",
)
async def login(data: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    """Authenticate a user.

    Returns:
        Token pair, user info and active context.

    Raises:
        InvalidCredentialsError: 401 for unknown email or wrong password.
        UserInactiveError: 403 for disabled accounts.
    """
    return await service.login(data)


@router.post(
    "/refresh",
    response_model=LoginResponse,
    summary="Refresh token",
    description="Refresh tokens are not honored; this always answers 401.",
)
async def refresh(data: RefreshTokenRequest, service: AuthServiceDep) -> LoginResponse:
    return await service.refresh(data.refresh_token)


@router.post(
    "/verify",
    response_model=VerifyTokenResponse,
    summary="Verify token",
    description="Check a token. Failures are reported in the body with status 200.",
)
async def verify(data: VerifyTokenRequest, service: AuthServiceDep) -> VerifyTokenResponse:
    return service.verify_token(data.token)


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
)
async def logout(current_user: AuthenticatedUser, service: AuthServiceDep) -> MessageResponse:
    """Log out the current user.

    Tokens are stateless, so nothing is revoked server-side.
    """
    await service.logout(current_user.id)
    return MessageResponse(message="Logout successful")
