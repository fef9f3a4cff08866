# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Material service.

Materials are uploaded by teachers through another service; the admin
backend can only remove them.
"""

import logging

from src.core.errors import NotFoundError
from src.infrastructure.database.repositories.material import MaterialRepository
from src.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


class MaterialService:
    def __init__(self, materials: MaterialRepository) -> None:
        self._materials = materials

    async def delete_material(self, material_id: str) -> None:
        """Hard delete a material.

        Raises:
            NotFoundError: If the material does not exist.
        """
        material = await self._materials.get_by_id(parse_uuid(material_id, "material_id"))
        if material is None:
            raise NotFoundError("material", material_id)

        await self._materials.delete(material)

        logger.info("Material deleted: %s", material.id)
