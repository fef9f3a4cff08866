# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership service.

This module provides the MembershipService that handles:
- Assigning users to academic units with a role tag
- Listing memberships per unit, unit and role, or user
- Expiring (withdrawing) and deleting memberships

Example:
    >>> service = MembershipService(memberships, units, users)
    >>> membership = await service.create_membership(request)
    >>> await service.expire_membership(membership.id)
"""

import logging
from uuid import uuid4

from src.core.errors import NotFoundError, ValidationError
from src.infrastructure.database.models.academic import Membership
from src.infrastructure.database.repositories.academic_unit import AcademicUnitRepository
from src.infrastructure.database.repositories.membership import MembershipRepository
from src.infrastructure.database.repositories.user import UserRepository
from src.models.membership import (
    MembershipCreateRequest,
    MembershipResponse,
    MembershipUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


class MembershipService:
    """Service for managing memberships.

    Attributes:
        _memberships: Membership repository.
        _units: Academic unit repository, used to resolve the school.
        _users: User repository.
    """

    def __init__(
        self,
        memberships: MembershipRepository,
        units: AcademicUnitRepository,
        users: UserRepository,
    ) -> None:
        self._memberships = memberships
        self._units = units
        self._users = users

    async def create_membership(self, request: MembershipCreateRequest) -> MembershipResponse:
        """Assign a user to a unit.

        The school is taken from the unit.

        Raises:
            ValidationError: If an id is malformed or the role is empty.
            NotFoundError: If the unit or the user does not exist.
        """
        user_id = parse_uuid(request.user_id, "user_id")
        unit_id = parse_uuid(request.unit_id, "unit_id")
        role = request.role.strip()
        if not role:
            raise ValidationError("role is required", field="role")

        unit = await self._units.get_by_id(unit_id)
        if unit is None:
            raise NotFoundError("academic_unit", unit_id)
        if await self._users.get_by_id(user_id) is None:
            raise NotFoundError("user", user_id)

        now = utc_now()
        membership = Membership(
            id=uuid4(),
            user_id=user_id,
            school_id=unit.school_id,
            academic_unit_id=unit.id,
            role=role,
            enrolled_at=now,
            withdrawn_at=None,
            is_active=True,
            metadata_=request.metadata or {},
            created_at=now,
            updated_at=now,
        )
        await self._memberships.add(membership)

        logger.info(
            "Membership created: %s (user=%s, unit=%s, role=%s)",
            membership.id,
            user_id,
            unit_id,
            role,
        )

        return self._to_response(membership)

    async def get_membership(self, membership_id: str) -> MembershipResponse:
        membership = await self._get(membership_id)
        return self._to_response(membership)

    async def list_by_unit(
        self, unit_id: str, limit: int = 50, offset: int = 0
    ) -> list[MembershipResponse]:
        memberships = await self._memberships.list_by_unit(
            parse_uuid(unit_id, "unit_id"), limit=limit, offset=offset
        )
        return [self._to_response(m) for m in memberships]

    async def list_by_unit_and_role(
        self, unit_id: str, role: str, limit: int = 50, offset: int = 0
    ) -> list[MembershipResponse]:
        if not role:
            raise ValidationError("role is required", field="role")
        memberships = await self._memberships.list_by_unit_and_role(
            parse_uuid(unit_id, "unit_id"), role, limit=limit, offset=offset
        )
        return [self._to_response(m) for m in memberships]

    async def list_by_user(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> list[MembershipResponse]:
        memberships = await self._memberships.list_by_user(
            parse_uuid(user_id, "user_id"), limit=limit, offset=offset
        )
        return [self._to_response(m) for m in memberships]

    async def update_membership(
        self, membership_id: str, request: MembershipUpdateRequest
    ) -> MembershipResponse:
        membership = await self._get(membership_id)

        if request.role is not None:
            role = request.role.strip()
            if not role:
                raise ValidationError("role is required", field="role")
            membership.role = role
        if request.metadata is not None:
            membership.metadata_ = request.metadata

        membership.updated_at = utc_now()
        await self._memberships.save(membership)

        logger.info("Membership updated: %s", membership.id)

        return self._to_response(membership)

    async def expire_membership(self, membership_id: str) -> MembershipResponse:
        """Withdraw a membership: withdrawn_at is set and it turns inactive."""
        membership = await self._get(membership_id)

        now = utc_now()
        membership.withdrawn_at = now
        membership.is_active = False
        membership.updated_at = now
        await self._memberships.save(membership)

        logger.info("Membership expired: %s", membership.id)

        return self._to_response(membership)

    async def delete_membership(self, membership_id: str) -> None:
        membership = await self._get(membership_id)
        await self._memberships.delete(membership)

        logger.info("Membership deleted: %s", membership.id)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, membership_id: str) -> Membership:
        membership = await self._memberships.get_by_id(
            parse_uuid(membership_id, "membership_id")
        )
        if membership is None:
            raise NotFoundError("membership", membership_id)
        return membership

    def _to_response(self, membership: Membership) -> MembershipResponse:
        return MembershipResponse(
            id=str(membership.id),
            user_id=str(membership.user_id),
            school_id=str(membership.school_id),
            unit_id=str(membership.academic_unit_id) if membership.academic_unit_id else None,
            role=membership.role,
            enrolled_at=membership.enrolled_at,
            withdrawn_at=membership.withdrawn_at,
            is_active=membership.is_active,
            metadata=membership.metadata_ or {},
            created_at=membership.created_at,
            updated_at=membership.updated_at,
        )
