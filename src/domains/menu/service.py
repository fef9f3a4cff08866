# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Menu service.

The menu is a two-level view of the menu-visible resources: top-level
resources and their direct children. Deeper resources are not shown.

A user's menu keeps the resources whose key is the resource part of one of
the user's permissions ("schools" for "schools:read"). A parent stays when
its own key matches or when at least one of its children stays.
"""

import logging
from typing import Iterable
from uuid import UUID

from src.infrastructure.database.models.iam import Resource
from src.infrastructure.database.repositories.iam import ResourceRepository
from src.models.menu import MenuItem, MenuResponse

logger = logging.getLogger(__name__)


def permission_resource_keys(permissions: Iterable[str]) -> set[str]:
    """Resource parts of <resource>:<action> permission names."""
    return {name.split(":", 1)[0] for name in permissions if name}


class MenuService:
    def __init__(self, resources: ResourceRepository) -> None:
        self._resources = resources

    async def get_full_menu(self) -> MenuResponse:
        resources = await self._resources.list_menu_visible()
        return MenuResponse(items=self._build(resources, allowed=None))

    async def get_menu_for_user(self, permissions: list[str]) -> MenuResponse:
        """Menu filtered by the caller's permissions.

        Args:
            permissions: Permission names from the active context.
        """
        allowed = permission_resource_keys(permissions)
        if not allowed:
            return MenuResponse(items=[])

        resources = await self._resources.list_menu_visible()
        items = self._build(resources, allowed=allowed)

        logger.debug("Menu built with %d top-level items", len(items))

        return MenuResponse(items=items)

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _build(self, resources: list[Resource], allowed: set[str] | None) -> list[MenuItem]:
        parents = [r for r in resources if r.parent_id is None]
        children: dict[UUID, list[Resource]] = {}
        for resource in resources:
            if resource.parent_id is not None:
                children.setdefault(resource.parent_id, []).append(resource)

        items: list[MenuItem] = []
        for parent in parents:
            item = self._to_item(parent)
            for child in children.get(parent.id, []):
                if allowed is None or child.key in allowed:
                    item.children.append(self._to_item(child))

            if allowed is None or parent.key in allowed or item.children:
                items.append(item)

        return items

    @staticmethod
    def _to_item(resource: Resource) -> MenuItem:
        return MenuItem(
            key=resource.key,
            display_name=resource.display_name,
            icon=resource.icon,
            scope=resource.scope,
            sort_order=resource.sort_order,
        )
