# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identifier parsing helpers."""

from uuid import UUID

from src.core.errors import ValidationError


def parse_uuid(value: str | UUID, field: str) -> UUID:
    """Parse a canonical UUID string.

    Args:
        value: Raw identifier from a path, query or body.
        field: Field name reported on failure.

    Raises:
        ValidationError: If the value is not a UUID.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (ValueError, AttributeError):
        raise ValidationError(f"invalid {field}", field=field)


def parse_optional_uuid(value: str | UUID | None, field: str) -> UUID | None:
    if value is None or value == "":
        return None
    return parse_uuid(value, field)
