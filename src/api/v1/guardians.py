# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Guardian relation API endpoints.

This module provides endpoints for guardian to student links:
- POST /guardian-relations - Create a relation
- GET /guardian-relations/{relation_id} - Get a relation
- PUT /guardian-relations/{relation_id} - Update a relation
- DELETE /guardian-relations/{relation_id} - Deactivate a relation
- GET /guardians/{guardian_id}/relations - A guardian's students
- GET /students/{student_id}/guardians - A student's guardians

Example:
    POST /api/v1/guardian-relations
    {
        "guardian_id": "5b0f...",
        "student_id": "9c1e...",
        "relationship_type": "mother"
    }
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import GuardianServiceDep, RequirePermission
from src.api.middleware.auth import CurrentUser
from src.models.guardian import (
    GuardianRelationCreateRequest,
    GuardianRelationResponse,
    GuardianRelationUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/guardian-relations",
    response_model=GuardianRelationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create guardian relation",
)
async def create_relation(
    data: GuardianRelationCreateRequest,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:create")),
) -> GuardianRelationResponse:
    """Link a guardian to a student.

    Only one active relation may exist per guardian and student.
    """
    return await service.create_relation(data, created_by=current_user.id)


@router.get(
    "/guardian-relations/{relation_id}",
    response_model=GuardianRelationResponse,
    summary="Get guardian relation",
)
async def get_relation(
    relation_id: str,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:read")),
) -> GuardianRelationResponse:
    return await service.get_relation(relation_id)


@router.put(
    "/guardian-relations/{relation_id}",
    response_model=GuardianRelationResponse,
    summary="Update guardian relation",
)
async def update_relation(
    relation_id: str,
    data: GuardianRelationUpdateRequest,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:update")),
) -> GuardianRelationResponse:
    return await service.update_relation(relation_id, data)


@router.delete(
    "/guardian-relations/{relation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate guardian relation",
)
async def delete_relation(
    relation_id: str,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:delete")),
) -> Response:
    await service.delete_relation(relation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/guardians/{guardian_id}/relations",
    response_model=list[GuardianRelationResponse],
    summary="List a guardian's relations",
)
async def list_guardian_relations(
    guardian_id: str,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:read")),
) -> list[GuardianRelationResponse]:
    return await service.list_for_guardian(guardian_id)


@router.get(
    "/students/{student_id}/guardians",
    response_model=list[GuardianRelationResponse],
    summary="List a student's guardians",
)
async def list_student_guardians(
    student_id: str,
    service: GuardianServiceDep,
    current_user: CurrentUser = Depends(RequirePermission("guardian_relations:read")),
) -> list[GuardianRelationResponse]:
    return await service.list_for_student(student_id)
