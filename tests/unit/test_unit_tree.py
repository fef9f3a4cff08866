# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for academic unit tree reconstruction."""

from uuid import uuid4

from src.domains.academic_unit.tree import build_unit_tree
from tests.fakes import make_unit


class TestBuildUnitTree:
    """Tests for build_unit_tree."""

    def test_empty_input(self) -> None:
        assert build_unit_tree([]) == []

    def test_links_children_and_assigns_depth(self) -> None:
        school_id = uuid4()
        grade = make_unit(school_id, "Grade 1")
        section = make_unit(school_id, "Section A", parent=grade)
        group = make_unit(school_id, "Group 1", parent=section)

        roots = build_unit_tree([grade, section, group])

        assert [r.display_name for r in roots] == ["Grade 1"]
        assert roots[0].depth == 1
        assert roots[0].children[0].display_name == "Section A"
        assert roots[0].children[0].depth == 2
        assert roots[0].children[0].children[0].depth == 3

    def test_input_order_does_not_matter(self) -> None:
        school_id = uuid4()
        grade = make_unit(school_id, "Grade 1")
        section = make_unit(school_id, "Section A", parent=grade)
        group = make_unit(school_id, "Group 1", parent=section)

        roots = build_unit_tree([group, section, grade])

        assert len(roots) == 1
        assert roots[0].children[0].children[0].id == str(group.id)
        assert roots[0].children[0].children[0].depth == 3

    def test_missing_parent_becomes_root(self) -> None:
        school_id = uuid4()
        tombstoned = make_unit(school_id, "Grade 1")
        orphan = make_unit(school_id, "Section A", parent=tombstoned)

        roots = build_unit_tree([orphan])

        assert [r.id for r in roots] == [str(orphan.id)]
        assert roots[0].depth == 1

    def test_siblings_keep_input_order(self) -> None:
        school_id = uuid4()
        grade = make_unit(school_id, "Grade 1")
        second = make_unit(school_id, "Section B", parent=grade)
        first = make_unit(school_id, "Section A", parent=grade)

        roots = build_unit_tree([grade, second, first])

        assert [c.display_name for c in roots[0].children] == ["Section B", "Section A"]

    def test_self_parent_is_a_root(self) -> None:
        unit = make_unit(uuid4(), "Loop")
        unit.parent_unit_id = unit.id

        roots = build_unit_tree([unit])

        assert len(roots) == 1
        assert roots[0].children == []

    def test_parent_cycle_keeps_every_unit(self) -> None:
        school_id = uuid4()
        first = make_unit(school_id, "Grade 1")
        second = make_unit(school_id, "Grade 2", parent=first)
        first.parent_unit_id = second.id
        standalone = make_unit(school_id, "Grade 3")

        roots = build_unit_tree([first, second, standalone])

        def count(nodes) -> int:
            return sum(1 + count(n.children) for n in nodes)

        assert count(roots) == 3
        assert [r.display_name for r in roots] == ["Grade 3", "Grade 1"]
        assert roots[1].depth == 1
        assert [c.display_name for c in roots[1].children] == ["Grade 2"]
        assert roots[1].children[0].depth == 2
