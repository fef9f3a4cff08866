# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests

The signing secret and environment are set before anything from src is
imported, because Settings refuses to load without a secret.
"""

import os
from collections.abc import Callable
from uuid import uuid4

TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

os.environ["AUTH_JWT_SECRET"] = TEST_JWT_SECRET
os.environ["APP_ENV"] = "test"
os.environ["LOG_FORMAT"] = "console"

import pytest  # noqa: E402

from src.core.config import Settings, clear_settings_cache, get_settings  # noqa: E402
from src.domains.auth.jwt import JWTManager  # noqa: E402
from src.domains.auth.password import PasswordHasher  # noqa: E402
from src.models.auth import ActiveContext  # noqa: E402

clear_settings_cache()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Provide settings loaded from the test environment."""
    clear_settings_cache()
    return get_settings()


# =============================================================================
# Auth fixtures
# =============================================================================


@pytest.fixture
def jwt_manager(settings: Settings) -> JWTManager:
    return JWTManager(settings.jwt)


@pytest.fixture(scope="session")
def password_hasher() -> PasswordHasher:
    """Hasher with the minimum bcrypt cost so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def make_token(jwt_manager: JWTManager) -> Callable[..., str]:
    """Factory for signed access tokens.

    Example:
        >>> token = make_token(["schools:read"])
        >>> headers = {"Authorization": f"Bearer {token}"}
    """

    def _make(
        permissions: list[str],
        user_id: str | None = None,
        school_id: str | None = None,
        role_name: str = "platform_admin",
        access_ttl: int = 0,
    ) -> str:
        context = ActiveContext(
            role_id=str(uuid4()),
            role_name=role_name,
            school_id=school_id,
            permissions=sorted(set(permissions)),
        )
        pair = jwt_manager.create_token_pair(
            user_id or str(uuid4()),
            "admin@edugo.org",
            context,
            access_ttl=access_ttl,
        )
        return pair.access_token

    return _make


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    """Factory for Authorization headers carrying the given permissions."""

    def _headers(*permissions: str, **kwargs) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(list(permissions), **kwargs)}"}

    return _headers
