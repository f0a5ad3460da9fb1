"""Bootstrap configuration helpers (pre-settings).

These helpers exist for "chicken-and-egg" situations where we need a small amount
of configuration before the full Pydantic settings can be built, most notably
the log level used by the telemetry layer while settings are still loading.

Constraints:
- Keep this module dependency-light (no telemetry imports) to avoid circular imports.
- Prefer validating values using existing config validators.
"""

from __future__ import annotations

import os

from layerconf.config.validators import validate_log_format, validate_log_level


def get_bootstrap_log_level(default: str = "INFO") -> str:
    """Get logging level from environment without importing settings.

    ``LAYERCONF_LOG_LEVEL`` wins over ``APP_LOG_LEVEL``.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    value = os.getenv("LAYERCONF_LOG_LEVEL") or os.getenv("APP_LOG_LEVEL", default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)


def get_bootstrap_log_format(default: str = "console") -> str:
    """Get log format (``json`` or ``console``) from environment."""
    value = os.getenv("LAYERCONF_LOG_FORMAT") or os.getenv("APP_LOG_FORMAT", default)
    try:
        return validate_log_format(value)
    except ValueError:
        return validate_log_format(default)


def get_bootstrap_log_dir() -> str | None:
    """Get the optional JSON log directory from environment."""
    return os.getenv("LAYERCONF_LOG_DIR") or None
