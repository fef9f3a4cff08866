# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the EduGo
admin API. Settings are loaded from environment variables (and an optional
.env file) with sensible defaults for everything except the database
password and the token signing secret.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.server.port)
    8081
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class ServerSettings(BaseSettings):
    """HTTP server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        read_timeout: Seconds allowed to read a request.
        write_timeout: Seconds allowed to write a response.
        shutdown_timeout: Seconds to drain in-flight requests on shutdown.
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVER_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8081
    read_timeout: float = 15.0
    write_timeout: float = 15.0
    shutdown_timeout: float = 5.0


class PostgresSettings(BaseSettings):
    """PostgreSQL connection configuration.

    Attributes:
        host: Database host address.
        port: Database port number.
        database: Database name.
        user: PostgreSQL username.
        password: PostgreSQL password.
        max_open: Maximum open connections (pool size + overflow).
        max_idle: Connections kept idle in the pool.
        ssl_mode: libpq style sslmode (disable, require, ...).
        max_lifetime: Seconds before a pooled connection is recycled.
        connect_timeout: Startup ping deadline in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_POSTGRES_",
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    database: str = "edugo"
    user: str = "edugo"
    password: SecretStr = SecretStr("")
    max_open: int = 25
    max_idle: int = 5
    ssl_mode: str = "disable"
    max_lifetime: int = 3600
    connect_timeout: float = 10.0

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def sync_url(self) -> str:
        """Build the sync database URL for migrations."""
        pwd = self.password.get_secret_value()
        return (
            f"postgresql://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"
            f"?sslmode={self.ssl_mode}"
        )

    @property
    def pool_size(self) -> int:
        return max(1, min(self.max_idle, self.max_open))

    @property
    def max_overflow(self) -> int:
        return max(0, self.max_open - self.pool_size)


class JWTSettings(BaseSettings):
    """Token signing configuration.

    Attributes:
        secret: Shared HMAC secret for signing tokens.
        issuer: Value of the iss claim, checked on verification.
        algorithm: JWT signing algorithm.
        access_token_duration: Access token lifetime in seconds.
        refresh_token_duration: Refresh token lifetime in seconds.
        leeway: Clock skew tolerated on verification, in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTH_JWT_",
        extra="ignore",
    )

    secret: SecretStr
    issuer: str = "edugo-central"
    algorithm: str = "HS256"
    access_token_duration: int = 15 * 60
    refresh_token_duration: int = 7 * 24 * 60 * 60
    leeway: int = Field(default=30, ge=0, le=30)


class SchoolDefaults(BaseSettings):
    """Tenant defaults applied when a school is created with empty fields."""

    model_config = SettingsConfigDict(
        env_prefix="DEFAULTS_SCHOOL_",
        extra="ignore",
    )

    country: str = "CO"
    subscription_tier: str = "free"
    max_teachers: int = 50
    max_students: int = 500


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        allowed_origins: Comma-separated list of allowed origins.
        allowed_methods: Comma-separated list of allowed methods.
        allowed_headers: Comma-separated list of allowed headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    allowed_origins: str = "*"
    allowed_methods: str = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
    allowed_headers: str = "Origin,Content-Type,Accept,Authorization,X-Request-ID"

    @property
    def origins_list(self) -> list[str]:
        return _split_csv(self.allowed_origins)

    @property
    def methods_list(self) -> list[str]:
        return _split_csv(self.allowed_methods)

    @property
    def headers_list(self) -> list[str]:
        return _split_csv(self.allowed_headers)


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        environment: Deployment environment (APP_ENV).
        log_level: Logging level.
        log_format: json for aggregation, console for local reading.
        server: HTTP server settings.
        database: PostgreSQL settings.
        jwt: Token signing settings.
        school_defaults: Defaults applied to new schools.
        cors: CORS settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["local", "development", "staging", "production", "test"] = Field(
        default="local",
        validation_alias="APP_ENV",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Subsettings - loaded with their own env prefixes
    server: ServerSettings = Field(default_factory=ServerSettings)
    database: PostgresSettings = Field(default_factory=PostgresSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    school_defaults: SchoolDefaults = Field(default_factory=SchoolDefaults)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @model_validator(mode="after")
    def validate_secrets(self) -> Self:
        """Validate that the signing secret is usable.

        Raises:
            ValueError: If the secret is empty, or too short in production.
        """
        secret = self.jwt.secret.get_secret_value()
        if not secret:
            raise ValueError("AUTH_JWT_SECRET must be set")
        if self.environment == "production" and len(secret) < 32:
            raise ValueError(
                "AUTH_JWT_SECRET must be at least 32 characters in production"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in a local or development environment."""
        return self.environment in ("local", "development")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
