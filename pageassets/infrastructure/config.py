"""
Centralized configuration management for the page asset engine.

Provides environment-specific configuration with validation and type safety
using pydantic-settings. Every section reads from environment variables with
its own prefix.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, TypeVar

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from ..domain.project_info import PROJECT_VERSION
from .exceptions import ConfigurationError


class AssetsConfig(BaseSettings):
    """
    Asset resolution settings.

    Base URLs follow the build: ``base_server`` is where pages are served,
    ``base_assets`` (optional) is where built assets are served from.

    Example:
        >>> assets = AssetsConfig(base_server="/app/", base_assets="https://cdn.example.com/")
        >>> assets.get_assets_base_url()
        'https://cdn.example.com/'
    """

    base_server: str = Field("/", description="Base URL of the server")
    base_assets: str | None = Field(None, description="Base URL of built assets")
    dev_server_root: str = Field(".", description="Root directory served by the dev server")
    dist_dir: str = Field("./dist", description="Build output directory")
    client_manifest_path: str | None = Field(
        None, description="Client build manifest (defaults to <dist_dir>/client/manifest.json)"
    )
    plugin_manifest_path: str | None = Field(
        None,
        description="Plugin manifest (defaults to <dist_dir>/client/pageassets-manifest.json)",
    )

    model_config = {"env_prefix": "ASSETS_", "case_sensitive": False}

    @field_validator("base_server", "base_assets")
    def validate_base_url(cls, v):
        """Base URLs are either root-relative or absolute http(s) URLs."""
        if v is None:
            return v
        if not (v.startswith("/") or v.startswith("http")):
            raise ValueError(f"Base URL must start with '/' or 'http', got {v!r}")
        return v

    def get_assets_base_url(self) -> str:
        """Base URL used to prefix asset URLs."""
        return self.base_assets or self.base_server

    def get_client_manifest_path(self) -> Path:
        if self.client_manifest_path:
            return Path(self.client_manifest_path)
        return Path(self.dist_dir) / "client" / "manifest.json"

    def get_plugin_manifest_path(self) -> Path:
        if self.plugin_manifest_path:
            return Path(self.plugin_manifest_path)
        return Path(self.dist_dir) / "client" / "pageassets-manifest.json"


class LoggingConfig(BaseSettings):
    """
    Logging configuration settings.

    Example:
        >>> log_config = LoggingConfig(level="DEBUG", file_path="./logs/app.log")
        >>> print(log_config.get_file_handler_config())
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Minimum logging level"
    )
    file_path: str | None = Field(None, description="Log file path")
    max_bytes: int = Field(10 * 1024 * 1024, ge=1024, description="Max log file size in bytes")
    backup_count: int = Field(5, ge=1, description="Number of backup log files")
    structured: bool = Field(True, description="Use structured JSON logging")
    console_enabled: bool = Field(True, description="Enable console output")

    model_config = {"env_prefix": "LOG_", "case_sensitive": False}

    def get_file_handler_config(self) -> dict[str, Any] | None:
        """Get file handler configuration if file logging is enabled."""
        if not self.file_path:
            return None

        return {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": self.file_path,
            "maxBytes": self.max_bytes,
            "backupCount": self.backup_count,
            "encoding": "utf-8",
        }


class ApplicationConfig(BaseSettings):
    """
    Main application configuration.

    Example:
        >>> config = get_settings()
        >>> print(config.app.environment)
    """

    environment: Literal["development", "testing", "production"] = Field(
        "development", description="Application environment"
    )
    debug: bool = Field(False, description="Enable debug mode")
    title: str = Field("Page Assets", description="Application title")
    version: str = Field(PROJECT_VERSION, description="Application version")

    model_config = {"env_prefix": "APP_", "case_sensitive": False}

    @model_validator(mode="after")
    def debug_implies_development(self):
        """Ensure debug mode is only enabled in development."""
        if self.debug and self.environment == "production":
            raise ValueError("Debug mode cannot be enabled in production")
        return self


class Settings:
    """
    Complete application settings container.

    Sections are read from the environment on first access. An invalid
    section raises ConfigurationError naming its environment prefix.

    Example:
        >>> settings = get_settings()
        >>> print(settings.assets.get_assets_base_url())
        >>> print(settings.is_production())
    """

    def __init__(self):
        self._app: ApplicationConfig | None = None
        self._assets: AssetsConfig | None = None
        self._logging: LoggingConfig | None = None

    @property
    def app(self) -> ApplicationConfig:
        """Get application configuration."""
        if self._app is None:
            self._app = _load_section(ApplicationConfig)
        return self._app

    @property
    def assets(self) -> AssetsConfig:
        """Get asset resolution configuration."""
        if self._assets is None:
            self._assets = _load_section(AssetsConfig)
        return self._assets

    @property
    def logging(self) -> LoggingConfig:
        """
        Get logging configuration.

        ``LOG_LEVEL`` wins; otherwise the level follows the environment.
        """
        if self._logging is None:
            config = _load_section(LoggingConfig)
            if "level" not in config.model_fields_set:
                config = config.model_copy(update={"level": self._default_log_level()})
            self._logging = config
        return self._logging

    def _default_log_level(self) -> str:
        if self.app.debug:
            return "DEBUG"
        if self.is_production():
            return "WARNING"
        return "INFO"

    def is_development(self) -> bool:
        return self.app.environment == "development"

    def is_production(self) -> bool:
        return self.app.environment == "production"

    def is_testing(self) -> bool:
        return self.app.environment == "testing"

    def get_environment_info(self) -> dict[str, Any]:
        """Get summary of current environment configuration."""
        return {
            "environment": self.app.environment,
            "version": self.app.version,
            "debug": self.app.debug,
            "mode": "production" if self.is_production() else "development",
            "base_server": self.assets.base_server,
            "base_assets": self.assets.base_assets,
            "logging_level": self.logging.level,
        }


SectionT = TypeVar("SectionT", bound=BaseSettings)


def _load_section(section: type[SectionT]) -> SectionT:
    try:
        return section()
    except ValidationError as exc:
        prefix = section.model_config.get("env_prefix", "")
        raise ConfigurationError(
            f"Invalid {section.__name__} settings, check the {prefix}* environment variables",
            config_key=prefix,
            details={"errors": exc.errors(include_url=False)},
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get application settings instance (cached).

    Returns:
        Settings instance with all configuration loaded
    """
    return Settings()


def reset_settings() -> None:
    """Reset settings cache to reload from environment."""
    get_settings.cache_clear()
