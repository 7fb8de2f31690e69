"""
Application settings loaded from a YAML file with environment overrides.
It centralizes cross-cutting concerns like settings, logging, and database access used by the API.
Keeping these helpers isolated reduces duplication and keeps domain modules focused on business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.engine import URL

DEFAULT_CONFIG_PATH: Final[str] = "config/config.yaml"
LOG_LEVELS: Final[tuple[str, ...]] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# (section, key, env var)
ENV_OVERRIDES: Final[tuple[tuple[str, str, str], ...]] = (
    ("database", "host", "DB_HOST"),
    ("database", "port", "DB_PORT"),
    ("database", "name", "DB_NAME"),
    ("database", "user", "DB_USER"),
    ("database", "password", "DB_PASSWORD"),
    ("database", "sslmode", "DB_SSLMODE"),
    ("database", "url", "DATABASE_URL"),
    ("server", "host", "SERVER_HOST"),
    ("server", "port", "SERVER_PORT"),
    ("server", "api_version_path", "API_VERSION_PATH"),
    ("logging", "level", "LOG_LEVEL"),
)


class DatabaseSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: str = "localhost"
    port: int = 5432
    name: str = "subscriptions"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "disable"
    url: str | None = None


class ServerSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: str = "0.0.0.0"
    port: int = 8080
    api_version_path: str = "/api/v1"
    allowed_origins: list[str] = Field(default_factory=list)

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or not parts[-1].startswith("v"):
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        if normalized not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return normalized


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    project_name: str = "Subscription Service API"
    app_version: str = "1.0.0"
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def database_url(self) -> str:
        """Explicit URL when configured, otherwise a PostgreSQL URL built from the parts."""

        if self.database.url:
            return self.database.url
        url = URL.create(
            "postgresql+psycopg2",
            username=self.database.user,
            password=self.database.password or None,
            host=self.database.host,
            port=self.database.port,
            database=self.database.name,
            query={"sslmode": self.database.sslmode} if self.database.sslmode else {},
        )
        return url.render_as_string(hide_password=False)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise RuntimeError(f"Unable to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Malformed config file {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise RuntimeError(f"Config at {path} must be a mapping, got: {type(loaded).__name__}")
    return dict(loaded)


def _section(values: dict[str, Any], name: str) -> dict[str, Any]:
    section_values = values.get(name)
    if not isinstance(section_values, dict):
        section_values = {}
        values[name] = section_values
    return section_values


def _apply_env_overrides(values: dict[str, Any]) -> dict[str, Any]:
    for section, key, env_name in ENV_OVERRIDES:
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        _section(values, section)[key] = raw.strip()

    origins = os.getenv("API_ALLOWED_ORIGINS")
    if origins is not None and origins.strip():
        _section(values, "server")["allowed_origins"] = [
            item.strip() for item in origins.split(",") if item.strip()
        ]
    return values


def load_settings(*, config_path: str | Path | None = None, load_env: bool = True) -> Settings:
    """Load settings from the YAML config file, `.env` and process environment."""

    if load_env:
        load_dotenv()

    resolved_path = Path(config_path or os.getenv("CONFIG_PATH") or DEFAULT_CONFIG_PATH)
    values = _apply_env_overrides(_load_yaml(resolved_path))

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration in {resolved_path}: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
