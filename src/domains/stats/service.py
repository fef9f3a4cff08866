# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Global statistics service."""

import logging

from src.infrastructure.database.repositories.stats import StatsRepository
from src.models.stats import GlobalStatsResponse

logger = logging.getLogger(__name__)


class StatsService:
    def __init__(self, stats: StatsRepository) -> None:
        self._stats = stats

    async def get_global_stats(self) -> GlobalStatsResponse:
        """Five platform-wide counters, tombstoned rows excluded."""
        counts = await self._stats.global_counts()
        logger.debug("Global stats computed: %s", counts)
        return GlobalStatsResponse(
            total_users=counts.total_users,
            total_active_users=counts.total_active_users,
            total_schools=counts.total_schools,
            total_subjects=counts.total_subjects,
            total_guardian_relations=counts.total_guardian_relations,
        )
