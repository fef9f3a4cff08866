# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Navigation menu domain package."""

from src.domains.menu.service import MenuService

__all__ = ["MenuService"]
