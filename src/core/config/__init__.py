# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the EduGo admin API.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'local'
"""

from src.core.config.settings import (
    CORSSettings,
    JWTSettings,
    PostgresSettings,
    SchoolDefaults,
    ServerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "ServerSettings",
    "PostgresSettings",
    "JWTSettings",
    "SchoolDefaults",
    "CORSSettings",
]
