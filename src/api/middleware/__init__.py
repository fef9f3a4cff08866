# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

This package provides middleware for request processing:
- RequestContextMiddleware: Correlation id and logging context.
- AuthMiddleware: Bearer token validation.
- register_exception_handlers: Error-to-status translation.

Exports:
    RequestContextMiddleware: Request id middleware.
    AuthMiddleware: JWT authentication middleware.
    register_exception_handlers: Installs the error handlers on an app.
"""

from src.api.middleware.auth import AuthMiddleware, CurrentUser
from src.api.middleware.errors import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "AuthMiddleware",
    "CurrentUser",
    "RequestContextMiddleware",
    "register_exception_handlers",
]
