"""Application configuration using Pydantic Settings."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ehonlend.core.text import SymbolPolicy

logger = structlog.get_logger("ehonlend.config")

# backend/ehonlend/core/config.py -> backend/data
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"

# Sections of settings.json that are not Settings fields
_NON_SETTINGS_SECTIONS = ("host", "scoring")


def _resolve_data_dir() -> Path:
    data_dir_env = os.environ.get("EHONLEND_DATA_DIR", "")
    if data_dir_env:
        return Path(data_dir_env)
    return DEFAULT_DATA_DIR


def json_config_settings_source(
    settings: BaseSettings | None = None,
) -> dict[str, Any]:  # noqa: ANN001
    """Load settings from settings.json file.

    This source has lowest priority - env vars will override JSON values.

    The file accepts host settings either nested
    (``{"host": {"bind_address": ..., "port": ...}}``) or flat
    (``host_bind_address``, ``host_port``). The ``scoring`` section is read
    separately by the matching config and is skipped here.

    Args:
        settings: The Settings class (not instance) being constructed.

    Returns:
        Dictionary with setting keys (lowercase) and values from JSON file.
    """
    settings_file = _resolve_data_dir() / "config" / "settings.json"

    if not settings_file.exists():
        return {}

    try:
        with settings_file.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(
            "Failed to read settings file, ignoring it",
            settings_file=str(settings_file),
            error=str(e),
            error_type=type(e).__name__,
        )
        return {}

    if not isinstance(data, dict):
        logger.warning("Settings file is not a JSON object, ignoring it", settings_file=str(settings_file))
        return {}

    flattened: dict[str, Any] = {}
    host = data.get("host")
    if isinstance(host, dict):
        if "bind_address" in host:
            flattened["host_bind_address"] = host["bind_address"]
        if "port" in host:
            flattened["host_port"] = host["port"]

    for key, value in data.items():
        if key not in _NON_SETTINGS_SECTIONS:
            flattened[key] = value

    # Convert keys to lowercase to match field names
    return {k.lower(): v for k, v in flattened.items()}


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from:
    1. JSON file (settings.json in config directory) - lowest priority
    2. .env file
    3. Environment variables - highest priority (override JSON/.env)

    All settings are prefixed with EHONLEND_ (e.g., EHONLEND_ENV=production).

    See: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EHONLEND_",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources - JSON file first, then env vars.

        Priority (lowest to highest):
        1. JSON file (settings.json)
        2. .env file
        3. Environment variables
        4. Init settings (values passed to Settings()) - highest priority
        """
        return (  # type: ignore[return-value]
            json_config_settings_source,
            dotenv_settings,
            env_settings,
            init_settings,
        )

    # Application
    env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Application environment (development, production, testing)",
    )

    # Host settings
    host_bind_address: str = Field(
        default="127.0.0.1",
        description="Host address to bind the server to",
    )

    host_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port number to bind the server to",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    log_to_file: bool = Field(
        default=False,
        description="Also write JSON logs to <data_dir>/logs",
    )

    # Application paths
    data_dir: Path = Field(
        default_factory=lambda: _resolve_data_dir().resolve(),
        description="Base directory for application data (config, logs)",
    )

    # Matching
    kana_symbol_policy: SymbolPolicy = Field(
        default=SymbolPolicy.CONSERVATIVE,
        description="Symbol policy used before kana classification",
    )

    max_candidates: int = Field(
        default=100,
        ge=1,
        description="Maximum number of candidates accepted by one ranking request",
    )

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files (settings.json, etc.)."""
        return self.data_dir / "config"

    @property
    def settings_file(self) -> Path:
        """JSON settings file (also holds the optional scoring section)."""
        return self.config_dir / "settings.json"

    @property
    def logs_dir(self) -> Path:
        """Directory for log files (if file logging is enabled)."""
        return self.data_dir / "logs"

    @property
    def is_debug(self) -> bool:
        """Check if running in debug/development mode."""
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.env == "testing"

    def model_post_init(self, __context: object) -> None:
        """Post-initialization: create data directories if they don't exist."""
        self.data_dir = self.data_dir.resolve()

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        if self.log_to_file:
            self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Creates and caches the settings instance on first call.
    Subsequent calls return the cached instance.

    The cache is cleared when reload_settings() is called.

    Returns:
        Settings instance
    """
    return Settings()


def reload_settings() -> Settings:
    """Reload settings from all sources (JSON, .env, env vars).

    Clears the cache and creates a new Settings instance.

    Returns:
        New Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
