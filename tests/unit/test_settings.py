# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import pytest
from pydantic import SecretStr, ValidationError

from src.core.config.settings import (
    CORSSettings,
    JWTSettings,
    PostgresSettings,
    SchoolDefaults,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestSettingsLoading:
    """Tests for loading settings from the environment."""

    def test_environment_comes_from_app_env(self, settings: Settings) -> None:
        assert settings.environment == "test"
        assert settings.is_production is False
        assert settings.is_development is False

    def test_get_settings_is_cached(self) -> None:
        clear_settings_cache()
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        clear_settings_cache()
        before = get_settings()
        monkeypatch.setenv("SERVER_PORT", "9999")
        clear_settings_cache()

        after = get_settings()

        assert after is not before
        assert after.server.port == 9999
        clear_settings_cache()

    def test_defaults(self, settings: Settings) -> None:
        assert settings.server.port == 8081
        assert settings.jwt.issuer == "edugo-central"
        assert settings.jwt.access_token_duration == 900
        assert settings.school_defaults.country == "CO"


class TestSecretValidation:
    def test_empty_secret_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTH_JWT_SECRET", "")

        with pytest.raises(ValidationError):
            Settings()

    def test_short_secret_rejected_in_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTH_JWT_SECRET", "short")
        monkeypatch.setenv("APP_ENV", "production")

        with pytest.raises(ValidationError):
            Settings()

    def test_short_secret_allowed_outside_production(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AUTH_JWT_SECRET", "short")
        monkeypatch.setenv("APP_ENV", "development")

        assert Settings().jwt.secret.get_secret_value() == "short"

    def test_leeway_is_capped(self) -> None:
        with pytest.raises(ValidationError):
            JWTSettings(secret=SecretStr("x" * 32), leeway=120)


class TestSubsettings:
    def test_postgres_url(self) -> None:
        pg = PostgresSettings(
            host="db", port=5433, database="edugo", user="admin", password=SecretStr("pw")
        )

        assert pg.url == "postgresql+asyncpg://admin:pw@db:5433/edugo"
        assert pg.sync_url.endswith("?sslmode=disable")

    def test_pool_sizes_follow_open_and_idle_limits(self) -> None:
        pg = PostgresSettings(max_open=25, max_idle=5)

        assert pg.pool_size == 5
        assert pg.max_overflow == 20

    def test_cors_lists_are_split(self) -> None:
        cors = CORSSettings(allowed_origins="https://a.edu, https://b.edu", allowed_methods="GET,POST")

        assert cors.origins_list == ["https://a.edu", "https://b.edu"]
        assert cors.methods_list == ["GET", "POST"]

    def test_school_defaults_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULTS_SCHOOL_MAX_STUDENTS", "1200")

        assert SchoolDefaults().max_students == 1200
