# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School service for tenant management.

This module provides the SchoolService that handles:
- School CRUD operations
- Tenant defaults for country, tier and capacity
- Soft deletion

Example:
    >>> school_service = SchoolService(schools, settings.school_defaults)
    >>> school = await school_service.create_school(request)
    >>> page = await school_service.list_schools(limit=20)
"""

import logging
from uuid import uuid4

from src.core.config.settings import SchoolDefaults
from src.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from src.infrastructure.database.models.academic import School
from src.infrastructure.database.repositories.school import SchoolRepository
from src.models.school import (
    SchoolCreateRequest,
    SchoolListResponse,
    SchoolResponse,
    SchoolUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_uuid

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
MIN_CODE_LENGTH = 3


class SchoolService:
    """Service for managing tenant schools.

    Attributes:
        _schools: School repository.
        _defaults: Tenant defaults applied on create.

    Example:
        >>> service = SchoolService(schools, defaults)
        >>> school = await service.create_school(create_request)
        >>> await service.delete_school(school.id)
    """

    def __init__(self, schools: SchoolRepository, defaults: SchoolDefaults) -> None:
        """Initialize the school service.

        Args:
            schools: School repository.
            defaults: Tenant defaults.
        """
        self._schools = schools
        self._defaults = defaults

    async def create_school(self, request: SchoolCreateRequest) -> SchoolResponse:
        """Create a new school.

        Args:
            request: School creation request.

        Returns:
            Created school response.

        Raises:
            ValidationError: If name or code is too short.
            AlreadyExistsError: If school code already exists.
        """
        code = request.code.strip()
        if len(code) < MIN_CODE_LENGTH:
            raise ValidationError(
                f"code must be at least {MIN_CODE_LENGTH} characters", field="code"
            )

        if await self._schools.exists_by_code(code):
            raise AlreadyExistsError("school", "code", code)

        name = request.name.strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"name must be at least {MIN_NAME_LENGTH} characters", field="name"
            )

        now = utc_now()
        school = School(
            id=uuid4(),
            name=name,
            code=code,
            address=request.address,
            city=request.city,
            country=request.country or self._defaults.country,
            email=request.contact_email,
            phone=request.contact_phone,
            subscription_tier=request.subscription_tier or self._defaults.subscription_tier,
            max_teachers=request.max_teachers or self._defaults.max_teachers,
            max_students=request.max_students or self._defaults.max_students,
            is_active=True,
            metadata_=request.metadata or {},
            created_at=now,
            updated_at=now,
        )

        await self._schools.add(school)

        logger.info("School created: %s (code=%s)", school.id, school.code)

        return self._to_response(school)

    async def get_school(self, school_id: str) -> SchoolResponse:
        """Get a live school by ID.

        Raises:
            NotFoundError: If the school does not exist or is deleted.
        """
        school = await self._get(school_id)
        return self._to_response(school)

    async def get_school_by_code(self, code: str) -> SchoolResponse:
        school = await self._schools.get_by_code(code)
        if school is None:
            raise NotFoundError("school", code)
        return self._to_response(school)

    async def list_schools(
        self,
        is_active: bool | None = None,
        subscription_tier: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> SchoolListResponse:
        """List live schools with optional filtering.

        Args:
            is_active: Filter by active status.
            subscription_tier: Filter by tier.
            search: Search by name, code or city.
            limit: Maximum results.
            offset: Pagination offset.

        Returns:
            Page of schools with the total count.
        """
        schools, total = await self._schools.find_all(
            is_active=is_active,
            subscription_tier=subscription_tier,
            search=search,
            limit=limit,
            offset=offset,
        )
        return SchoolListResponse(
            items=[self._to_response(school) for school in schools],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def update_school(
        self,
        school_id: str,
        request: SchoolUpdateRequest,
    ) -> SchoolResponse:
        """Update a school.

        Raises:
            NotFoundError: If school not found.
            ValidationError: If the new name is too short.
        """
        school = await self._get(school_id)

        if request.name is not None:
            name = request.name.strip()
            if len(name) < MIN_NAME_LENGTH:
                raise ValidationError(
                    f"name must be at least {MIN_NAME_LENGTH} characters", field="name"
                )
            school.name = name
        if request.address is not None:
            school.address = request.address
        if request.city is not None:
            school.city = request.city
        if request.country:
            school.country = request.country
        if request.contact_email is not None:
            school.email = request.contact_email
        if request.contact_phone is not None:
            school.phone = request.contact_phone
        if request.subscription_tier:
            school.subscription_tier = request.subscription_tier
        if request.max_teachers is not None:
            school.max_teachers = request.max_teachers
        if request.max_students is not None:
            school.max_students = request.max_students
        if request.metadata is not None:
            school.metadata_ = request.metadata
        if request.is_active is not None:
            school.is_active = request.is_active

        school.updated_at = utc_now()
        await self._schools.save(school)

        logger.info("School updated: %s", school.id)

        return self._to_response(school)

    async def delete_school(self, school_id: str) -> None:
        """Soft delete a school.

        Raises:
            NotFoundError: If school not found.
        """
        school = await self._get(school_id)

        now = utc_now()
        school.deleted_at = now
        school.is_active = False
        school.updated_at = now
        await self._schools.save(school)

        logger.info("School deleted: %s", school.id)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, school_id: str) -> School:
        school = await self._schools.get_by_id(parse_uuid(school_id, "school_id"))
        if school is None:
            raise NotFoundError("school", school_id)
        return school

    def _to_response(self, school: School) -> SchoolResponse:
        return SchoolResponse(
            id=str(school.id),
            name=school.name,
            code=school.code,
            address=school.address,
            city=school.city,
            country=school.country,
            contact_email=school.email,
            contact_phone=school.phone,
            subscription_tier=school.subscription_tier,
            max_teachers=school.max_teachers,
            max_students=school.max_students,
            is_active=school.is_active,
            metadata=school.metadata_ or {},
            created_at=school.created_at,
            updated_at=school.updated_at,
        )
