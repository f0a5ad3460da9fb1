"""Settings of the configuration facade itself.

This module provides the ConfSettings class: where the system-wide config file
lives, which environment namespace is active, how the manifest is found and
how logging behaves. These come from environment variables and .env files in
the application root, never from the layered YAML sources they help locate.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from layerconf.config.env_loader import get_environment, load_env_files
from layerconf.config.validators import (
    normalize_environment,
    resolve_path,
    validate_log_format,
    validate_log_level,
)

log = structlog.get_logger(__name__)


class ConfSettings(BaseSettings):
    """Facade settings.

    Loads values from ``LAYERCONF_*`` environment variables and defaults.
    Validates all values using Pydantic.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded manually via env_loader, relative to the
        # application root rather than the working directory
        env_prefix="LAYERCONF_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Namespace
    environment: str = Field(
        default_factory=get_environment,
        validation_alias=AliasChoices("LAYERCONF_ENVIRONMENT"),
        description="Environment namespace of the merged configuration",
    )

    # Locations
    etc_dir: Path = Field(default=Path("/etc"), description="Directory of the system config file")
    tmp_dir: Path = Field(default=Path("/tmp"), description="Directory of generated pid files")
    manifest_glob: str = Field(
        default="pyproject.toml", description="Glob matching the package manifest under the root"
    )
    hostname: str | None = Field(
        default=None, description="Host name override (skips the OS lookup)"
    )

    # Telemetry
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LAYERCONF_LOG_LEVEL", "APP_LOG_LEVEL"),
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_dir: Path | None = Field(default=None, description="Directory for JSON log files")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalize environment aliases."""
        return normalize_environment(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator("etc_dir", "tmp_dir", "log_dir", mode="before")
    @classmethod
    def resolve_paths(cls, v: Path | str | None) -> Path | None:
        """Resolve paths to absolute."""
        if v is None or v == "":
            return None
        return resolve_path(v)


def load_settings(project_root: Path | None = None) -> ConfSettings:
    """Load and validate facade settings.

    This function:
    1. Loads .env files from the application root in priority order (via env_loader)
    2. Creates a ConfSettings instance (reads from environment variables)
    3. Validates all values using Pydantic
    4. Logs settings loading using structlog

    Args:
        project_root: Application root holding the .env files. If None, no
            .env file is read.

    Returns:
        Validated ConfSettings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if project_root is not None:
        load_env_files(project_root)

    try:
        settings = ConfSettings()
        log.debug(
            "conf_settings_loaded",
            environment=settings.environment,
            etc_dir=str(settings.etc_dir),
            manifest_glob=settings.manifest_glob,
        )
        return settings
    except Exception as e:
        log.error("conf_settings_load_failed", error=str(e), error_type=type(e).__name__)
        raise
