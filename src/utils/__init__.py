# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- ids: UUID parsing that reports the offending field
"""

from src.utils.datetime import utc_from_timestamp, utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid
from src.utils.logging import bind_context, clear_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_from_timestamp",
    # Identifiers
    "parse_uuid",
    "parse_optional_uuid",
]
