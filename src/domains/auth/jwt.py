# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management utilities.

This module provides token creation and validation using python-jose.
Access tokens are HS256-signed JWTs carrying the caller's active context;
the refresh token is an opaque random string with no server-side state.

Example:
    >>> from src.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> tokens = jwt_manager.create_token_pair(user_id, email, context)
    >>> claims = jwt_manager.decode_token(tokens.access_token)
"""

import logging
import secrets
from datetime import datetime, timedelta
from uuid import UUID

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from src.core.config.settings import JWTSettings
from src.models.auth import ActiveContext
from src.utils.datetime import utc_from_timestamp, utc_now

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        iss: Issuer, checked on decode.
        sub: Subject (user ID).
        email: User email.
        iat: Issued at timestamp.
        exp: Expiration timestamp.
        active_context: Primary role and permission set.
    """

    iss: str
    sub: str
    email: str
    iat: int
    exp: int
    active_context: ActiveContext

    @property
    def expires_at(self) -> datetime:
        return utc_from_timestamp(self.exp)


class TokenPair(BaseModel):
    """Access and refresh token pair.

    Attributes:
        access_token: JWT access token string.
        refresh_token: Opaque refresh token string.
        token_type: Token type (always "Bearer").
        expires_in: Access token lifetime in seconds.
        refresh_expires_in: Refresh token lifetime in seconds.
        expires_at: Access token expiry.
    """

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_expires_in: int
    expires_at: datetime


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """Token creation and validation manager.

    Verification enforces signature, issuer equality, the iat/exp window and
    a parseable payload, with the configured clock-skew leeway.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    def create_token_pair(
        self,
        user_id: str | UUID,
        email: str,
        active_context: ActiveContext,
        access_ttl: int = 0,
        refresh_ttl: int = 0,
    ) -> TokenPair:
        """Create an access token and an opaque refresh token.

        Args:
            user_id: User identifier.
            email: User email.
            active_context: Context embedded in the access token.
            access_ttl: Access lifetime in seconds, 0 for the default.
            refresh_ttl: Refresh lifetime in seconds, 0 for the default.

        Returns:
            TokenPair with access and refresh tokens.
        """
        access_ttl = access_ttl if access_ttl > 0 else self._settings.access_token_duration
        refresh_ttl = refresh_ttl if refresh_ttl > 0 else self._settings.refresh_token_duration

        now = utc_now()
        access_exp = now + timedelta(seconds=access_ttl)

        payload = {
            "iss": self._settings.issuer,
            "sub": str(user_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(access_exp.timestamp()),
            "active_context": active_context.model_dump(),
        }

        access_token = jwt.encode(
            payload,
            self._settings.secret.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=secrets.token_urlsafe(32),
            token_type="Bearer",
            expires_in=access_ttl,
            refresh_expires_in=refresh_ttl,
            expires_at=utc_from_timestamp(payload["exp"]),
        )

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the signature, issuer or payload is invalid.
        """
        try:
            claims = jwt.decode(
                token,
                self._settings.secret.get_secret_value(),
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
                options={"leeway": self._settings.leeway, "require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.debug("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        try:
            return TokenPayload.model_validate(claims)
        except ValidationError as e:
            raise InvalidTokenError("Invalid token payload") from e
