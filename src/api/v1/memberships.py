# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership API endpoints.

- POST / - Assign a user to a unit
- GET /?unit_id= - Memberships of a unit
- GET /by-role?unit_id=&role= - Memberships of a unit with a role
- GET /{membership_id} - Get membership
- PUT /{membership_id} - Update role or metadata
- DELETE /{membership_id} - Hard delete
- POST /{membership_id}/expire - Withdraw the membership
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import MembershipServiceDep, RequirePermission
from src.api.middleware.auth import CurrentUser
from src.models.membership import (
    MembershipCreateRequest,
    MembershipResponse,
    MembershipUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create membership",
)
async def create_membership(
    data: MembershipCreateRequest,
    service: MembershipServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("memberships:create")),
) -> MembershipResponse:
    return await service.create_membership(data)


@router.get("", response_model=list[MembershipResponse], summary="List unit memberships")
async def list_memberships(
    service: MembershipServiceDep,
    unit_id: Annotated[str, Query(description="Academic unit ID")],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    current_user: CurrentUser = Depends(RequirePermission("memberships:read")),
) -> list[MembershipResponse]:
    return await service.list_by_unit(unit_id, limit=limit, offset=offset)


@router.get(
    "/by-role",
    response_model=list[MembershipResponse],
    summary="List unit memberships by role",
)
async def list_memberships_by_role(
    service: MembershipServiceDep,
    unit_id: Annotated[str, Query(description="Academic unit ID")],
    role: Annotated[str, Query(description="Role tag, e.g. student")],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    current_user: CurrentUser = Depends(RequirePermission("memberships:read")),
) -> list[MembershipResponse]:
    return await service.list_by_unit_and_role(unit_id, role, limit=limit, offset=offset)


@router.get("/{membership_id}", response_model=MembershipResponse, summary="Get membership")
async def get_membership(
    membership_id: str,
    service: MembershipServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("memberships:read")),
) -> MembershipResponse:
    return await service.get_membership(membership_id)


@router.put("/{membership_id}", response_model=MembershipResponse, summary="Update membership")
async def update_membership(
    membership_id: str,
    data: MembershipUpdateRequest,
    service: MembershipServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("memberships:update")),
) -> MembershipResponse:
    return await service.update_membership(membership_id, data)


@router.delete(
    "/{membership_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete membership",
)
async def delete_membership(
    membership_id: str,
    service: MembershipServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("memberships:delete")),
) -> Response:
    await service.delete_membership(membership_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{membership_id}/expire",
    response_model=MembershipResponse,
    summary="Expire membership",
    description="Sets withdrawn_at to now and deactivates the membership.",
)
async def expire_membership(
    membership_id: str,
    service: MembershipServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("memberships:update")),
) -> MembershipResponse:
    return await service.expire_membership(membership_id)
