# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Material persistence."""

from src.infrastructure.database.models.content import Material
from src.infrastructure.database.repositories.base import BaseRepository


class MaterialRepository(BaseRepository[Material]):
    model_class = Material
    resource_name = "material"
