# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application error taxonomy.

Every failure a service can report is an AppError subclass. Each subclass
pins a taxonomy kind, an HTTP status and a stable machine-readable code, so
the HTTP edge can translate errors in one place.

Example:
    >>> raise AlreadyExistsError("school", "code", "ACM001")
    >>> # -> 409 {"error": "already_exists", "code": "ALREADY_EXISTS",
    >>> #          "details": {"code": "ACM001"}}
"""

from typing import ClassVar


class AppError(Exception):
    """Base class for all tagged application errors.

    Attributes:
        kind: Taxonomy tag.
        code: Stable error code exposed to clients.
        status_code: HTTP status the edge responds with.
        message: Human-readable description.
        details: Extra key/value context safe to expose.
    """

    kind: ClassVar[str] = "internal"
    code: ClassVar[str] = "INTERNAL_ERROR"
    status_code: ClassVar[int] = 500

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Serialize to the JSON error body."""
        body: dict = {
            "error": self.kind,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Caller-provided value violates a format or constraint."""

    kind = "validation"
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class NotFoundError(AppError):
    """Entity with the supplied key does not exist."""

    kind = "not_found"
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, key: object | None = None) -> None:
        details = {"resource": resource}
        if key is not None:
            details["id"] = str(key)
        super().__init__(f"{resource} not found", details)
        self.resource = resource


class AlreadyExistsError(AppError):
    """Uniqueness violation, carrying the conflicting field."""

    kind = "already_exists"
    code = "ALREADY_EXISTS"
    status_code = 409

    def __init__(self, resource: str, field: str, value: object) -> None:
        super().__init__(
            f"{resource} with {field} '{value}' already exists",
            {field: str(value)},
        )
        self.resource = resource
        self.field = field


class UnauthorizedError(AppError):
    """No credentials or a bad token."""

    kind = "unauthorized"
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    """Login failed. Never says which field was wrong."""

    kind = "invalid_credentials"
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("invalid email or password")


class InvalidRefreshTokenError(UnauthorizedError):
    kind = "invalid_refresh_token"
    code = "INVALID_REFRESH_TOKEN"

    def __init__(self, message: str = "invalid or expired refresh token") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    """Authenticated but lacking the required permission."""

    kind = "forbidden"
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "forbidden", permission: str | None = None) -> None:
        super().__init__(message, {"missing_permission": permission} if permission else None)
        self.permission = permission


class UserInactiveError(ForbiddenError):
    kind = "user_inactive"
    code = "USER_INACTIVE"

    def __init__(self) -> None:
        super().__init__("user account is inactive")


class DatabaseError(AppError):
    """A persistence call failed.

    The wrapped driver error is kept for logs and never sent to clients.

    Attributes:
        original_error: The underlying SQLAlchemy or driver error.
    """

    kind = "database"
    code = "DATABASE_ERROR"
    status_code = 500

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message

    def to_dict(self) -> dict:
        return {"error": self.kind, "code": self.code, "message": "database error"}


class InternalError(AppError):
    """Anything unexpected."""


class NoRolesError(InternalError):
    kind = "no_roles"
    code = "NO_ROLES"

    def __init__(self, user_id: object) -> None:
        super().__init__(f"user {user_id} has no active roles")


class DataCorruptionError(InternalError):
    kind = "data_corruption"
    code = "DATA_CORRUPTION"
