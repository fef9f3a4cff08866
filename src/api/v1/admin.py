# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Platform administration endpoints.

- DELETE /materials/{material_id} - Hard delete a material
- GET /stats/global - Platform-wide counters
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import MaterialServiceDep, RequirePermission, StatsServiceDep
from src.api.middleware.auth import CurrentUser
from src.models.stats import GlobalStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.delete(
    "/materials/{material_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete material",
)
async def delete_material(
    material_id: str,
    service: MaterialServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:update")),
) -> Response:
    logger.info("Deleting material: %s, by=%s", material_id, current_user.id)
    await service.delete_material(material_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/stats/global",
    response_model=GlobalStatsResponse,
    summary="Global statistics",
    description="Users, active users, schools, subjects and guardian relations.",
)
async def get_global_stats(
    service: StatsServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("permissions_mgmt:read")),
) -> GlobalStatsResponse:
    return await service.get_global_stats()
