# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the schools endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration

ALL = ("schools:create", "schools:read", "schools:update", "schools:delete")


class TestSchoolCrud:
    """End-to-end school lifecycle."""

    def test_create_get_conflict_delete(self, client: TestClient, auth_headers) -> None:
        headers = auth_headers(*ALL)

        created = client.post(
            "/api/v1/schools", json={"name": "Acme High", "code": "ACM001"}, headers=headers
        )
        assert created.status_code == 201
        school_id = created.json()["id"]

        fetched = client.get(f"/api/v1/schools/{school_id}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Acme High"

        conflict = client.post(
            "/api/v1/schools", json={"name": "X", "code": "ACM001"}, headers=headers
        )
        assert conflict.status_code == 409
        assert conflict.json()["code"] == "ALREADY_EXISTS"
        assert conflict.json()["details"]["code"] == "ACM001"

        deleted = client.delete(f"/api/v1/schools/{school_id}", headers=headers)
        assert deleted.status_code == 204
        assert deleted.content == b""

        gone = client.get(f"/api/v1/schools/{school_id}", headers=headers)
        assert gone.status_code == 404
        assert gone.json()["code"] == "NOT_FOUND"

    def test_defaults_are_applied(self, client: TestClient, auth_headers) -> None:
        response = client.post(
            "/api/v1/schools",
            json={"name": "Acme High", "code": "ACM001"},
            headers=auth_headers("schools:create"),
        )

        body = response.json()
        assert body["country"] == "CO"
        assert body["subscription_tier"] == "free"
        assert body["max_teachers"] == 50
        assert body["max_students"] == 500

    def test_list_and_lookup_by_code(self, client: TestClient, auth_headers) -> None:
        headers = auth_headers(*ALL)
        for code, name in [("ACM001", "Acme High"), ("BRT001", "Bright Academy")]:
            client.post("/api/v1/schools", json={"name": name, "code": code}, headers=headers)

        page = client.get("/api/v1/schools", params={"limit": 1}, headers=headers)
        by_code = client.get("/api/v1/schools/code/BRT001", headers=headers)

        assert page.status_code == 200
        assert page.json()["total"] == 2
        assert len(page.json()["items"]) == 1
        assert by_code.json()["name"] == "Bright Academy"

    def test_update(self, client: TestClient, auth_headers) -> None:
        headers = auth_headers(*ALL)
        school_id = client.post(
            "/api/v1/schools", json={"name": "Acme High", "code": "ACM001"}, headers=headers
        ).json()["id"]

        response = client.put(
            f"/api/v1/schools/{school_id}",
            json={"city": "Bogota", "max_students": 800},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["city"] == "Bogota"
        assert response.json()["max_students"] == 800


class TestSchoolErrors:
    def test_malformed_id_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.get("/api/v1/schools/not-a-uuid", headers=auth_headers("schools:read"))

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "school_id"

    def test_short_code_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.post(
            "/api/v1/schools",
            json={"name": "Acme High", "code": "AC"},
            headers=auth_headers("schools:create"),
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "code"

    def test_missing_body_field_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.post(
            "/api/v1/schools", json={"name": "Acme High"}, headers=auth_headers("schools:create")
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["details"]["field"] == "code"

    def test_limit_out_of_range_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.get(
            "/api/v1/schools", params={"limit": 0}, headers=auth_headers("schools:read")
        )

        assert response.status_code == 400

    def test_unknown_school_is_404(self, client: TestClient, auth_headers) -> None:
        response = client.delete(f"/api/v1/schools/{uuid4()}", headers=auth_headers("schools:delete"))

        assert response.status_code == 404
