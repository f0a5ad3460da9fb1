"""Custom Pydantic validators for configuration.

This module provides validators for the facade's own settings and custom
type conversions.
"""

from pathlib import Path

ENVIRONMENT_ALIASES = {
    "prod": "production",
    "stage": "staging",
    "dev": "development",
}


def validate_log_level(value: str) -> str:
    """Validate log level is one of the standard levels.

    Args:
        value: Log level string.

    Returns:
        Validated log level.

    Raises:
        ValueError: If log level is not valid.
    """
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if value.upper() not in valid_levels:
        raise ValueError(f"log_level must be one of {valid_levels}, got {value}")
    return value.upper()


def validate_log_format(value: str) -> str:
    """Validate log format is 'json' or 'console'.

    Args:
        value: Log format string.

    Returns:
        Validated log format.

    Raises:
        ValueError: If log format is not valid.
    """
    valid_formats = {"json", "console"}
    if value.lower() not in valid_formats:
        raise ValueError(f"log_format must be one of {valid_formats}, got {value}")
    return value.lower()


def normalize_environment(value: str) -> str:
    """Normalize an environment name used as the configuration namespace.

    Known aliases (``prod``, ``stage``, ``dev``) map to their full names; any
    other non-empty value is kept, lowercased, so custom namespaces work.

    Raises:
        ValueError: If the value is empty or contains a path separator.
    """
    name = value.strip().lower()
    if not name:
        raise ValueError("environment must not be empty")
    if "/" in name or "\\" in name:
        raise ValueError(f"environment must not contain path separators, got {value}")
    return ENVIRONMENT_ALIASES.get(name, name)


def resolve_path(value: Path | str) -> Path:
    """Expand ``~`` and resolve a path to an absolute one.

    Args:
        value: Path value (can be string or Path).

    Returns:
        Resolved Path object.
    """
    return Path(value).expanduser().resolve()
