"""
Application configuration management.

Two sources of configuration:
- Service settings, parsed from environment variables / .env by pydantic-settings.
- The database connection descriptor, read from a JSON file at startup.

All configuration is centralized here to support dependency injection
and avoid scattering os.getenv() calls throughout the codebase.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Literal, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when the connection descriptor cannot be loaded."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation and type coercion.

    Values are loaded from environment variables or .env file.
    All fields have sensible defaults for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Path to the JSON connection descriptor
    config_file: str = "config.json"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    debug: bool = False

    # Response status policy
    # strict: 200 found, 404 not found, 502 database error; invalid ids are 200 in every mode
    # compat: 200 for every outcome
    status_mode: Literal["strict", "compat"] = "strict"

    # Database
    query_timeout_seconds: float = 5.0
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_strict(self) -> bool:
        """Check if outcomes are reported through the HTTP status."""
        return self.status_mode == "strict"


class DatabaseConfig(BaseModel):
    """
    Connection descriptor for the album database.

    Mirrors the JSON config file:
        {"user": "...", "password": "...", "host": "...", "port": 5432, "db": "..."}
    """

    model_config = ConfigDict(populate_by_name=True)

    user: str
    password: str
    host: str
    port: int
    database: str = Field(..., alias="db")

    @property
    def connection_string(self) -> str:
        """libpq-style connection URI with SSL disabled."""
        return (
            f"postgresql://{quote(self.user, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.database}?sslmode=disable"
        )

    @property
    def async_connection_string(self) -> str:
        """
        SQLAlchemy URL for the asyncpg driver.

        asyncpg rejects the sslmode query parameter, so it is dropped here
        and SSL is disabled through connect_args instead (see core.storage.factory).
        """
        return (
            f"postgresql+asyncpg://{quote(self.user, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.database}"
        )


def load_database_config(path: Union[str, Path]) -> DatabaseConfig:
    """
    Read the JSON connection descriptor from disk.

    Args:
        path: Location of the config file

    Returns:
        Parsed connection descriptor

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON,
            or does not describe a connection
    """
    config_path = Path(path)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON in config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")

    try:
        return DatabaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid connection descriptor in {config_path}: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings singleton.

    Use this function to get settings instance throughout the application.
    The @lru_cache ensures we only parse environment once.
    """
    return Settings()


# Convenience export for direct import
settings = get_settings()
