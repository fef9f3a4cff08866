# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the academic unit endpoints."""

import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeBackend, make_school

pytestmark = pytest.mark.integration

UNIT_PERMISSIONS = ("units:create", "units:read", "units:update", "units:delete")


@pytest.fixture
def school(backend: FakeBackend):
    return backend.add(backend.schools, make_school())


@pytest.fixture
def headers(auth_headers) -> dict[str, str]:
    return auth_headers(*UNIT_PERMISSIONS)


def create_unit(client: TestClient, headers, school, name: str, parent: str | None = None) -> str:
    response = client.post(
        f"/api/v1/schools/{school.id}/units",
        json={"parent_unit_id": parent, "type": "grade", "display_name": name},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestUnitTree:
    def test_tree_shape_and_depths(self, client: TestClient, headers, school) -> None:
        a = create_unit(client, headers, school, "Unit A")
        b = create_unit(client, headers, school, "Unit B", parent=a)
        c = create_unit(client, headers, school, "Unit C", parent=a)
        d = create_unit(client, headers, school, "Unit D", parent=b)

        response = client.get(f"/api/v1/schools/{school.id}/units/tree", headers=headers)

        assert response.status_code == 200
        roots = response.json()
        assert [r["id"] for r in roots] == [a]
        assert roots[0]["depth"] == 1
        assert [child["id"] for child in roots[0]["children"]] == [b, c]
        assert [child["depth"] for child in roots[0]["children"]] == [2, 2]
        node_b = roots[0]["children"][0]
        assert [child["id"] for child in node_b["children"]] == [d]
        assert node_b["children"][0]["depth"] == 3

    def test_deleted_parent_orphans_subtree(self, client: TestClient, headers, school) -> None:
        a = create_unit(client, headers, school, "Unit A")
        b = create_unit(client, headers, school, "Unit B", parent=a)
        c = create_unit(client, headers, school, "Unit C", parent=b)

        assert client.delete(f"/api/v1/units/{a}", headers=headers).status_code == 204
        roots = client.get(f"/api/v1/schools/{school.id}/units/tree", headers=headers).json()

        assert [r["id"] for r in roots] == [b]
        assert roots[0]["depth"] == 1
        assert [child["id"] for child in roots[0]["children"]] == [c]

    def test_tree_for_unknown_school(self, client: TestClient, headers) -> None:
        response = client.get(
            "/api/v1/schools/00000000-0000-0000-0000-000000000000/units/tree", headers=headers
        )

        assert response.status_code == 404


class TestUnitLifecycle:
    def test_delete_and_restore(self, client: TestClient, headers, school) -> None:
        unit_id = create_unit(client, headers, school, "Unit U")

        assert client.delete(f"/api/v1/units/{unit_id}", headers=headers).status_code == 204
        assert client.get(f"/api/v1/units/{unit_id}", headers=headers).status_code == 404

        restored = client.post(f"/api/v1/units/{unit_id}/restore", headers=headers)
        assert restored.status_code == 200

        fetched = client.get(f"/api/v1/units/{unit_id}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["deleted_at"] is None

    def test_cycle_is_rejected(self, client: TestClient, headers, school) -> None:
        a = create_unit(client, headers, school, "Unit A")
        b = create_unit(client, headers, school, "Unit B", parent=a)

        response = client.put(f"/api/v1/units/{a}", json={"parent_unit_id": b}, headers=headers)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "parent_unit_id"

    def test_hierarchy_path(self, client: TestClient, headers, school) -> None:
        a = create_unit(client, headers, school, "Unit A")
        b = create_unit(client, headers, school, "Unit B", parent=a)
        c = create_unit(client, headers, school, "Unit C", parent=b)

        response = client.get(f"/api/v1/units/{c}/hierarchy-path", headers=headers)

        assert [u["id"] for u in response.json()] == [a, b, c]

    def test_list_by_type_and_include_deleted(self, client: TestClient, headers, school) -> None:
        a = create_unit(client, headers, school, "Unit A")
        create_unit(client, headers, school, "Unit B")
        client.delete(f"/api/v1/units/{a}", headers=headers)

        live = client.get(f"/api/v1/schools/{school.id}/units", headers=headers).json()
        everything = client.get(
            f"/api/v1/schools/{school.id}/units",
            params={"include_deleted": "true"},
            headers=headers,
        ).json()
        grades = client.get(
            f"/api/v1/schools/{school.id}/units/by-type", params={"type": "grade"}, headers=headers
        ).json()

        assert len(live) == 1
        assert len(everything) == 2
        assert [u["display_name"] for u in grades] == ["Unit B"]

    def test_duplicate_code_is_409(self, client: TestClient, headers, school) -> None:
        body = {"type": "grade", "display_name": "Grade 1", "code": "G1"}
        url = f"/api/v1/schools/{school.id}/units"

        assert client.post(url, json=body, headers=headers).status_code == 201
        conflict = client.post(url, json=body, headers=headers)

        assert conflict.status_code == 409
        assert conflict.json()["details"] == {"code": "G1"}

    def test_read_only_caller_cannot_create(self, client: TestClient, auth_headers, school) -> None:
        response = client.post(
            f"/api/v1/schools/{school.id}/units",
            json={"type": "grade", "display_name": "Grade 1"},
            headers=auth_headers("units:read"),
        )

        assert response.status_code == 403
        assert response.json()["details"]["missing_permission"] == "units:create"
