# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic unit service for per-school organizational trees.

This module provides the AcademicUnitService that handles:
- Unit creation with parent and code validation
- Re-parenting without cycles
- Soft delete and restore (no cascade)
- Tree and root-to-node path reconstruction

Example:
    >>> service = AcademicUnitService(units, schools)
    >>> unit = await service.create_unit(school_id, request)
    >>> tree = await service.get_tree(school_id)
"""

import logging
from uuid import UUID, uuid4

from src.core.errors import (
    AlreadyExistsError,
    DataCorruptionError,
    NotFoundError,
    ValidationError,
)
from src.domains.academic_unit.tree import build_unit_tree
from src.infrastructure.database.models.academic import AcademicUnit
from src.infrastructure.database.repositories.academic_unit import AcademicUnitRepository
from src.infrastructure.database.repositories.school import SchoolRepository
from src.models.academic_unit import (
    UnitCreateRequest,
    UnitResponse,
    UnitTreeNode,
    UnitUpdateRequest,
)
from src.utils.datetime import utc_now
from src.utils.ids import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)

MAX_HIERARCHY_DEPTH = 64
MIN_NAME_LENGTH = 3


class AcademicUnitService:
    """Service for managing academic units.

    Attributes:
        _units: Academic unit repository.
        _schools: School repository.
    """

    def __init__(self, units: AcademicUnitRepository, schools: SchoolRepository) -> None:
        self._units = units
        self._schools = schools

    async def create_unit(self, school_id: str, request: UnitCreateRequest) -> UnitResponse:
        """Create a unit under a school, optionally below a parent unit.

        Args:
            school_id: Owning school.
            request: Unit fields.

        Returns:
            Created unit.

        Raises:
            NotFoundError: If the school does not exist.
            ValidationError: If a field is invalid or the parent is not a
                live unit of the same school.
            AlreadyExistsError: If the code is taken within the school.
        """
        school_uuid = parse_uuid(school_id, "school_id")
        school = await self._schools.get_by_id(school_uuid)
        if school is None:
            raise NotFoundError("school", school_id)

        display_name = request.display_name.strip()
        if len(display_name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"display_name must be at least {MIN_NAME_LENGTH} characters",
                field="display_name",
            )

        parent_id = parse_optional_uuid(request.parent_unit_id, "parent_unit_id")
        if parent_id is not None:
            await self._require_parent(parent_id, school_uuid)

        code = (request.code or "").strip() or uuid4().hex[:8]
        if await self._units.exists_by_code(school_uuid, code):
            raise AlreadyExistsError("academic_unit", "code", code)

        now = utc_now()
        unit = AcademicUnit(
            id=uuid4(),
            parent_unit_id=parent_id,
            school_id=school_uuid,
            type=request.type,
            display_name=display_name,
            code=code,
            description=request.description,
            is_active=True,
            metadata_=request.metadata or {},
            created_at=now,
            updated_at=now,
        )
        await self._units.add(unit)

        logger.info("Academic unit created: %s (school=%s, code=%s)", unit.id, school_uuid, code)

        return self._to_response(unit)

    async def get_unit(self, unit_id: str, include_deleted: bool = False) -> UnitResponse:
        unit = await self._get(parse_uuid(unit_id, "unit_id"), include_deleted)
        return self._to_response(unit)

    async def list_units(self, school_id: str, include_deleted: bool = False) -> list[UnitResponse]:
        school_uuid = parse_uuid(school_id, "school_id")
        units = await self._units.list_by_school(school_uuid, include_deleted=include_deleted)
        return [self._to_response(unit) for unit in units]

    async def list_units_by_type(self, school_id: str, unit_type: str) -> list[UnitResponse]:
        if not unit_type:
            raise ValidationError("type is required", field="type")
        school_uuid = parse_uuid(school_id, "school_id")
        units = await self._units.list_by_type(school_uuid, unit_type)
        return [self._to_response(unit) for unit in units]

    async def get_tree(self, school_id: str) -> list[UnitTreeNode]:
        """Build the unit forest of a school from its live units."""
        school_uuid = parse_uuid(school_id, "school_id")
        if await self._schools.get_by_id(school_uuid) is None:
            raise NotFoundError("school", school_id)

        units = await self._units.list_by_school(school_uuid)
        return build_unit_tree(units)

    async def update_unit(self, unit_id: str, request: UnitUpdateRequest) -> UnitResponse:
        """Update a unit.

        parent_unit_id="" makes the unit a root. A new parent must be a live
        unit of the same school and must not be the unit or a descendant.

        Raises:
            NotFoundError: If the unit does not exist.
            ValidationError: If the new parent is invalid or creates a cycle.
        """
        unit = await self._get(parse_uuid(unit_id, "unit_id"))

        if request.parent_unit_id is not None:
            if request.parent_unit_id == "":
                unit.parent_unit_id = None
            else:
                parent_id = parse_uuid(request.parent_unit_id, "parent_unit_id")
                if parent_id == unit.id:
                    raise ValidationError(
                        "unit cannot be its own parent", field="parent_unit_id"
                    )
                await self._require_parent(parent_id, unit.school_id)
                await self._reject_descendant(unit.id, parent_id)
                unit.parent_unit_id = parent_id

        if request.display_name is not None:
            display_name = request.display_name.strip()
            if len(display_name) < MIN_NAME_LENGTH:
                raise ValidationError(
                    f"display_name must be at least {MIN_NAME_LENGTH} characters",
                    field="display_name",
                )
            unit.display_name = display_name
        if request.type is not None:
            unit.type = request.type
        if request.description is not None:
            unit.description = request.description
        if request.metadata is not None:
            unit.metadata_ = request.metadata

        unit.updated_at = utc_now()
        await self._units.save(unit)

        logger.info("Academic unit updated: %s", unit.id)

        return self._to_response(unit)

    async def delete_unit(self, unit_id: str) -> None:
        """Tombstone a unit. Children keep their parent pointer."""
        unit = await self._get(parse_uuid(unit_id, "unit_id"))

        now = utc_now()
        unit.deleted_at = now
        unit.updated_at = now
        await self._units.save(unit)

        logger.info("Academic unit deleted: %s", unit.id)

    async def restore_unit(self, unit_id: str) -> UnitResponse:
        """Clear the tombstone of a unit.

        If the parent is still tombstoned the unit shows up as a root until
        the parent is restored.

        Raises:
            NotFoundError: If no unit, live or tombstoned, has this id.
        """
        unit = await self._get(parse_uuid(unit_id, "unit_id"), include_deleted=True)

        if unit.deleted_at is not None:
            unit.deleted_at = None
            unit.is_active = True
            unit.updated_at = utc_now()
            await self._units.save(unit)
            logger.info("Academic unit restored: %s", unit.id)

        return self._to_response(unit)

    async def get_hierarchy_path(self, unit_id: str) -> list[UnitResponse]:
        """Return the chain of live units from the root down to unit_id.

        Raises:
            NotFoundError: If the unit does not exist.
            DataCorruptionError: If the parent chain loops or is deeper than
                MAX_HIERARCHY_DEPTH.
        """
        unit = await self._get(parse_uuid(unit_id, "unit_id"))

        path = [unit]
        seen = {unit.id}
        current = unit
        while current.parent_unit_id is not None:
            if current.parent_unit_id in seen:
                logger.error("Cycle in academic unit hierarchy at %s", current.id)
                raise DataCorruptionError(f"cycle detected in hierarchy of unit {unit.id}")
            if len(path) >= MAX_HIERARCHY_DEPTH:
                logger.error("Academic unit hierarchy too deep at %s", unit.id)
                raise DataCorruptionError(f"hierarchy of unit {unit.id} exceeds maximum depth")

            parent = await self._units.get_by_id(current.parent_unit_id)
            if parent is None:
                break
            path.append(parent)
            seen.add(parent.id)
            current = parent

        path.reverse()
        return [self._to_response(item) for item in path]

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get(self, unit_id: UUID, include_deleted: bool = False) -> AcademicUnit:
        unit = await self._units.get_by_id(unit_id, include_deleted=include_deleted)
        if unit is None:
            raise NotFoundError("academic_unit", unit_id)
        return unit

    async def _require_parent(self, parent_id: UUID, school_id: UUID) -> None:
        parent = await self._units.get_by_id(parent_id)
        if parent is None:
            raise ValidationError("parent unit does not exist", field="parent_unit_id")
        if parent.school_id != school_id:
            raise ValidationError(
                "parent unit belongs to a different school", field="parent_unit_id"
            )

    async def _reject_descendant(self, unit_id: UUID, new_parent_id: UUID) -> None:
        """Walk up from the new parent; reaching unit_id means a cycle."""
        current_id: UUID | None = new_parent_id
        for _ in range(MAX_HIERARCHY_DEPTH):
            if current_id is None:
                return
            if current_id == unit_id:
                raise ValidationError(
                    "parent unit cannot be a descendant of the unit", field="parent_unit_id"
                )
            ancestor = await self._units.get_by_id(current_id, include_deleted=True)
            if ancestor is None:
                return
            current_id = ancestor.parent_unit_id
        raise DataCorruptionError(f"hierarchy above unit {new_parent_id} exceeds maximum depth")

    def _to_response(self, unit: AcademicUnit) -> UnitResponse:
        return UnitResponse(
            id=str(unit.id),
            parent_unit_id=str(unit.parent_unit_id) if unit.parent_unit_id else None,
            school_id=str(unit.school_id),
            type=unit.type,
            display_name=unit.display_name,
            code=unit.code,
            description=unit.description,
            metadata=unit.metadata_ or {},
            is_active=unit.is_active,
            created_at=unit.created_at,
            updated_at=unit.updated_at,
            deleted_at=unit.deleted_at,
        )
