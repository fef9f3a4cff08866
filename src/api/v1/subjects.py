# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import RequirePermission, SubjectServiceDep
from src.api.middleware.auth import CurrentUser
from src.models.subject import (
    SubjectCreateRequest,
    SubjectResponse,
    SubjectUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=SubjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create subject",
)
async def create_subject(
    data: SubjectCreateRequest,
    service: SubjectServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("subjects:create")),
) -> SubjectResponse:
    return await service.create_subject(data)


@router.get("", response_model=list[SubjectResponse], summary="List subjects")
async def list_subjects(
    service: SubjectServiceDep,
    school_id: Annotated[str | None, Query(description="Filter by school")] = None,
    current_user: CurrentUser = Depends(RequirePermission("subjects:read")),
) -> list[SubjectResponse]:
    return await service.list_subjects(school_id)


@router.get("/{subject_id}", response_model=SubjectResponse, summary="Get subject")
async def get_subject(
    subject_id: str,
    service: SubjectServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("subjects:read")),
) -> SubjectResponse:
    return await service.get_subject(subject_id)


@router.patch("/{subject_id}", response_model=SubjectResponse, summary="Update subject")
async def update_subject(
    subject_id: str,
    data: SubjectUpdateRequest,
    service: SubjectServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("subjects:update")),
) -> SubjectResponse:
    return await service.update_subject(subject_id, data)


@router.delete(
    "/{subject_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete subject",
    description="Deactivates the subject.",
)
async def delete_subject(
    subject_id: str,
    service: SubjectServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("subjects:delete")),
) -> Response:
    await service.delete_subject(subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
