# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Platform statistics domain package."""

from src.domains.stats.service import StatsService

__all__ = ["StatsService"]
