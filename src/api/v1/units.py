# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic unit API endpoints.

Units are created and listed under their school and addressed directly
by ID afterwards:
- POST /schools/{school_id}/units - Create a unit
- GET /schools/{school_id}/units - Flat list
- GET /schools/{school_id}/units/tree - Unit forest
- GET /schools/{school_id}/units/by-type?type= - Filter by type
- GET /units/{unit_id} - Get unit
- PUT /units/{unit_id} - Update unit (parent_unit_id "" makes it a root)
- DELETE /units/{unit_id} - Soft delete, children are left in place
- POST /units/{unit_id}/restore - Undo a soft delete
- GET /units/{unit_id}/hierarchy-path - Root-to-unit chain
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import AcademicUnitServiceDep, RequirePermission
from src.api.middleware.auth import CurrentUser
from src.models.academic_unit import (
    UnitCreateRequest,
    UnitResponse,
    UnitTreeNode,
    UnitUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/schools/{school_id}/units",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create academic unit",
)
async def create_unit(
    school_id: str,
    data: UnitCreateRequest,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:create")),
) -> UnitResponse:
    """Create a unit in a school.

    A missing code is generated. The parent, when given, must be a live
    unit of the same school.
    """
    return await service.create_unit(school_id, data)


@router.get(
    "/schools/{school_id}/units",
    response_model=list[UnitResponse],
    summary="List academic units",
)
async def list_units(
    school_id: str,
    service: AcademicUnitServiceDep,
    include_deleted: Annotated[bool, Query(description="Include soft-deleted units")] = False,
    current_user: CurrentUser = Depends(RequirePermission("units:read")),
) -> list[UnitResponse]:
    return await service.list_units(school_id, include_deleted=include_deleted)


@router.get(
    "/schools/{school_id}/units/tree",
    response_model=list[UnitTreeNode],
    summary="Academic unit tree",
)
async def get_unit_tree(
    school_id: str,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:read")),
) -> list[UnitTreeNode]:
    """Live units of a school as a forest.

    Units whose parent is deleted appear as roots.
    """
    return await service.get_tree(school_id)


@router.get(
    "/schools/{school_id}/units/by-type",
    response_model=list[UnitResponse],
    summary="List academic units by type",
)
async def list_units_by_type(
    school_id: str,
    service: AcademicUnitServiceDep,
    unit_type: Annotated[str, Query(alias="type", min_length=1)],
    current_user: CurrentUser = Depends(RequirePermission("units:read")),
) -> list[UnitResponse]:
    return await service.list_units_by_type(school_id, unit_type)


@router.get(
    "/units/{unit_id}",
    response_model=UnitResponse,
    summary="Get academic unit",
)
async def get_unit(
    unit_id: str,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:read")),
) -> UnitResponse:
    return await service.get_unit(unit_id)


@router.put(
    "/units/{unit_id}",
    response_model=UnitResponse,
    summary="Update academic unit",
)
async def update_unit(
    unit_id: str,
    data: UnitUpdateRequest,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:update")),
) -> UnitResponse:
    return await service.update_unit(unit_id, data)


@router.delete(
    "/units/{unit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete academic unit",
)
async def delete_unit(
    unit_id: str,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:delete")),
) -> Response:
    logger.info("Deleting academic unit: %s, by=%s", unit_id, current_user.id)
    await service.delete_unit(unit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/units/{unit_id}/restore",
    response_model=UnitResponse,
    summary="Restore academic unit",
)
async def restore_unit(
    unit_id: str,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:update")),
) -> UnitResponse:
    logger.info("Restoring academic unit: %s, by=%s", unit_id, current_user.id)
    return await service.restore_unit(unit_id)


@router.get(
    "/units/{unit_id}/hierarchy-path",
    response_model=list[UnitResponse],
    summary="Academic unit hierarchy path",
    description="Units from the root down to the requested unit.",
)
async def get_hierarchy_path(
    unit_id: str,
    service: AcademicUnitServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("units:read")),
) -> list[UnitResponse]:
    return await service.get_hierarchy_path(unit_id)
