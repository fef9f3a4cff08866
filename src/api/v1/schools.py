# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School management API endpoints.

This module provides endpoints for school management:
- POST / - Create a new school
- GET / - List schools with filtering
- GET /code/{code} - Get school by code
- GET /{school_id} - Get school details
- PUT /{school_id} - Update school
- DELETE /{school_id} - Soft delete school

Example:
    POST /api/v1/schools
    {
        "code": "ACM001",
        "name": "Acme High",
        "city": "Bogota"
    }
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import RequirePermission, SchoolServiceDep
from src.api.middleware.auth import CurrentUser
from src.models.common import ErrorResponse
from src.models.school import (
    SchoolCreateRequest,
    SchoolListResponse,
    SchoolResponse,
    SchoolUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create school",
    description="Create a new school. Empty country, tier and capacities take tenant defaults.",
    responses={409: {"model": ErrorResponse}},
)
async def create_school(
    data: SchoolCreateRequest,
    service: SchoolServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("schools:create")),
) -> SchoolResponse:
    """Create a new school.

    Args:
        data: School creation request.
        service: School service.
        current_user: Caller holding schools:create.

    Returns:
        Created school response.
    """
    logger.info("Creating school: code=%s, by=%s", data.code, current_user.id)
    return await service.create_school(data)


@router.get(
    "",
    response_model=SchoolListResponse,
    summary="List schools",
)
async def list_schools(
    service: SchoolServiceDep,
    is_active: Annotated[bool | None, Query(description="Filter by active status")] = None,
    subscription_tier: Annotated[str | None, Query(description="Filter by tier")] = None,
    search: Annotated[str | None, Query(description="Search by name, code, or city")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum results")] = 50,
    offset: Annotated[int, Query(ge=0, description="Pagination offset")] = 0,
    current_user: CurrentUser = Depends(RequirePermission("schools:read")),
) -> SchoolListResponse:
    return await service.list_schools(
        is_active=is_active,
        subscription_tier=subscription_tier,
        search=search,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/code/{code}",
    response_model=SchoolResponse,
    summary="Get school by code",
)
async def get_school_by_code(
    code: str,
    service: SchoolServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("schools:read")),
) -> SchoolResponse:
    return await service.get_school_by_code(code)


@router.get(
    "/{school_id}",
    response_model=SchoolResponse,
    summary="Get school",
    responses={404: {"model": ErrorResponse}},
)
async def get_school(
    school_id: str,
    service: SchoolServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("schools:read")),
) -> SchoolResponse:
    return await service.get_school(school_id)


@router.put(
    "/{school_id}",
    response_model=SchoolResponse,
    summary="Update school",
    responses={404: {"model": ErrorResponse}},
)
async def update_school(
    school_id: str,
    data: SchoolUpdateRequest,
    service: SchoolServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("schools:update")),
) -> SchoolResponse:
    logger.info("Updating school: %s, by=%s", school_id, current_user.id)
    return await service.update_school(school_id, data)


@router.delete(
    "/{school_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete school",
    description="Soft delete: the school disappears from reads but keeps its code.",
    responses={404: {"model": ErrorResponse}},
)
async def delete_school(
    school_id: str,
    service: SchoolServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("schools:delete")),
) -> Response:
    logger.info("Deleting school: %s, by=%s", school_id, current_user.id)
    await service.delete_school(school_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
