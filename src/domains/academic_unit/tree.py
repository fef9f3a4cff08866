# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tree reconstruction for academic units.

Units are stored flat with a parent pointer. build_unit_tree links them
into a forest; a unit whose parent is missing from the input (tombstoned or
in another school) becomes a root. Depths are assigned after linking by a
breadth-first walk from each root, so the result does not depend on the
input being topologically ordered.

Parent pointers that form a cycle are cut at the first cycle member in
input order, which is emitted as a root. Every input unit appears exactly
once in the result.
"""

import logging
from collections import deque
from typing import Protocol, Sequence
from uuid import UUID

from src.models.academic_unit import UnitTreeNode

logger = logging.getLogger(__name__)


class UnitLike(Protocol):
    id: UUID
    parent_unit_id: UUID | None
    type: str
    display_name: str
    code: str


def _assign_depths(root: UnitTreeNode, reached: set[str]) -> None:
    root.depth = 1
    reached.add(root.id)
    queue: deque[UnitTreeNode] = deque([root])
    while queue:
        node = queue.popleft()
        for child in node.children:
            child.depth = node.depth + 1
            reached.add(child.id)
            queue.append(child)


def build_unit_tree(units: Sequence[UnitLike]) -> list[UnitTreeNode]:
    """Link a flat list of units into a forest.

    Args:
        units: Units of one school.

    Returns:
        Roots in input order, followed by units cut out of parent cycles.
        Children keep input order.
    """
    nodes: dict[UUID, UnitTreeNode] = {}
    for unit in units:
        nodes[unit.id] = UnitTreeNode(
            id=str(unit.id),
            type=unit.type,
            display_name=unit.display_name,
            code=unit.code,
        )

    roots: list[UnitTreeNode] = []
    for unit in units:
        node = nodes[unit.id]
        parent = nodes.get(unit.parent_unit_id) if unit.parent_unit_id else None
        if parent is None or unit.parent_unit_id == unit.id:
            roots.append(node)
        else:
            parent.children.append(node)

    reached: set[str] = set()
    for root in roots:
        _assign_depths(root, reached)

    for unit in units:
        node = nodes[unit.id]
        if node.id in reached:
            continue
        logger.warning("Academic unit %s is part of a parent cycle, listed as a root", unit.id)
        parent = nodes[unit.parent_unit_id]
        parent.children = [c for c in parent.children if c is not node]
        roots.append(node)
        _assign_depths(node, reached)

    return roots
