# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the app shell: health, request ids and error handling."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api import dependencies as deps

pytestmark = pytest.mark.integration


class TestHealth:
    def test_healthy(self, client: TestClient) -> None:
        with patch(
            "src.api.routes.health.check_database_connection", AsyncMock(return_value=True)
        ):
            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["status"] == "healthy"
        assert body["environment"] == "test"

    def test_degraded_when_database_is_down(self, client: TestClient) -> None:
        with patch(
            "src.api.routes.health.check_database_connection", AsyncMock(return_value=False)
        ):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["database"]["status"] == "unhealthy"


class TestRequestId:
    def test_incoming_id_is_echoed(self, client: TestClient, auth_headers) -> None:
        headers = {**auth_headers("schools:read"), "X-Request-ID": "req-123"}

        response = client.get("/api/v1/schools", headers=headers)

        assert response.headers["X-Request-ID"] == "req-123"

    def test_id_is_generated(self, client: TestClient, auth_headers) -> None:
        response = client.get("/api/v1/schools", headers=auth_headers("schools:read"))

        assert len(response.headers["X-Request-ID"]) == 32


class TestUnexpectedErrors:
    def test_unhandled_exception_is_500(self, app: FastAPI, client: TestClient, auth_headers) -> None:
        broken = AsyncMock()
        broken.get_global_stats.side_effect = RuntimeError("connection reset")
        app.dependency_overrides[deps.get_stats_service] = lambda: broken

        response = client.get("/api/v1/stats/global", headers=auth_headers("permissions_mgmt:read"))

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "connection reset" not in response.text

    def test_unknown_route_is_404(self, client: TestClient, auth_headers) -> None:
        response = client.get("/api/v1/nowhere", headers=auth_headers())

        assert response.status_code == 404
