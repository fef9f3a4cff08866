# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for JWT token utilities.

Tests the JWTManager class and token operations.
"""

import time
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import SecretStr

from src.core.config.settings import JWTSettings
from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPair,
    TokenPayload,
)
from src.models.auth import ActiveContext

SECRET = "unit-test-secret-for-jwt-0123456789abcdef"


@pytest.fixture
def jwt_settings() -> JWTSettings:
    """Create JWT settings with a known secret."""
    return JWTSettings(secret=SecretStr(SECRET))


@pytest.fixture
def manager(jwt_settings: JWTSettings) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


@pytest.fixture
def context() -> ActiveContext:
    return ActiveContext(
        role_id=str(uuid4()),
        role_name="school_admin",
        school_id=str(uuid4()),
        permissions=["schools:read", "units:read"],
    )


def _encode(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


def _claims(context: ActiveContext, **overrides) -> dict:
    now = int(time.time())
    claims = {
        "iss": "edugo-central",
        "sub": str(uuid4()),
        "email": "ada@acme.edu",
        "iat": now,
        "exp": now + 600,
        "active_context": context.model_dump(),
    }
    claims.update(overrides)
    return claims


class TestCreateTokenPair:
    """Tests for token issuance."""

    def test_returns_pair_with_default_lifetimes(
        self, manager: JWTManager, context: ActiveContext
    ) -> None:
        result = manager.create_token_pair(uuid4(), "ada@acme.edu", context)

        assert isinstance(result, TokenPair)
        assert result.token_type == "Bearer"
        assert result.expires_in == 15 * 60
        assert result.refresh_expires_in == 7 * 24 * 60 * 60
        assert result.access_token != result.refresh_token

    def test_explicit_ttl_overrides_default(
        self, manager: JWTManager, context: ActiveContext
    ) -> None:
        result = manager.create_token_pair(uuid4(), "ada@acme.edu", context, access_ttl=60)

        payload = manager.decode_token(result.access_token)

        assert result.expires_in == 60
        assert payload.exp - payload.iat == 60

    def test_refresh_tokens_are_unique(self, manager: JWTManager, context: ActiveContext) -> None:
        first = manager.create_token_pair(uuid4(), "a@acme.edu", context)
        second = manager.create_token_pair(uuid4(), "a@acme.edu", context)

        assert first.refresh_token != second.refresh_token


class TestDecodeToken:
    """Tests for token verification."""

    def test_round_trip_preserves_claims(
        self, manager: JWTManager, context: ActiveContext
    ) -> None:
        user_id = uuid4()
        pair = manager.create_token_pair(user_id, "ada@acme.edu", context)

        payload = manager.decode_token(pair.access_token)

        assert isinstance(payload, TokenPayload)
        assert payload.sub == str(user_id)
        assert payload.iss == "edugo-central"
        assert payload.email == "ada@acme.edu"
        assert payload.active_context == context
        assert payload.expires_at == pair.expires_at

    def test_expired_token_raises(self, manager: JWTManager, context: ActiveContext) -> None:
        now = int(time.time())
        token = _encode(_claims(context, iat=now - 3600, exp=now - 120))

        with pytest.raises(TokenExpiredError):
            manager.decode_token(token)

    def test_expiry_within_leeway_is_accepted(
        self, manager: JWTManager, context: ActiveContext
    ) -> None:
        now = int(time.time())
        token = _encode(_claims(context, iat=now - 600, exp=now - 5))

        assert manager.decode_token(token).email == "ada@acme.edu"

    def test_wrong_secret_raises(self, manager: JWTManager, context: ActiveContext) -> None:
        token = _encode(_claims(context), secret="another-secret-of-sufficient-length-xx")

        with pytest.raises(InvalidTokenError):
            manager.decode_token(token)

    def test_wrong_issuer_raises(self, manager: JWTManager, context: ActiveContext) -> None:
        token = _encode(_claims(context, iss="someone-else"))

        with pytest.raises(InvalidTokenError):
            manager.decode_token(token)

    def test_missing_active_context_raises(
        self, manager: JWTManager, context: ActiveContext
    ) -> None:
        claims = _claims(context)
        del claims["active_context"]

        with pytest.raises(InvalidTokenError):
            manager.decode_token(_encode(claims))

    def test_garbage_raises(self, manager: JWTManager) -> None:
        with pytest.raises(InvalidTokenError):
            manager.decode_token("not.a.jwt")
