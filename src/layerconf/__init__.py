"""Layered YAML configuration for a single application instance.

The application's identity comes from its package manifest; its settings from
``defaults.yml`` in the application root, overridden by the system file
``/etc/<app_name>.yml`` and optionally by an extra file, each with
environment-specific variants (``defaults-production.yml``...).
"""

from layerconf.conf import Conf
from layerconf.errors import (
    ConfigError,
    ConfigMissingManifest,
    ConfigMissingParameter,
    ConfigMultipleManifest,
    ConfigOtherError,
    ConfigParseError,
)
from layerconf.identity import Identity
from layerconf.monitoring import MonitoringSettings
from layerconf.store import LayeredStore
from layerconf.values import ConfValue, ValueKind

__version__ = "0.1.0"

__all__ = [
    "Conf",
    "Identity",
    "LayeredStore",
    "ConfValue",
    "ValueKind",
    "MonitoringSettings",
    # Exception classes
    "ConfigError",
    "ConfigMissingParameter",
    "ConfigMissingManifest",
    "ConfigMultipleManifest",
    "ConfigParseError",
    "ConfigOtherError",
]
