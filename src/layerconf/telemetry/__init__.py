"""Telemetry module for structured logging.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from layerconf.telemetry.events import (
    CONF_INIT_FAILED,
    CONF_INIT_STARTED,
    CONF_INITIALIZED,
    CONF_LOAD_FAILED,
    CONF_PARSE_FAILED,
    CONF_RELOADED,
    CONF_SOURCE_ADDED,
    CONF_SOURCE_SKIPPED,
    CONF_SOURCES_LOADED,
    GC_PROFILER_ENABLED,
    HOSTNAME_LOOKUP_FAILED,
    MANIFEST_LOADED,
    MONITORING_DISABLED,
    MONITORING_ENABLED,
)
from layerconf.telemetry.logger import configure_logging, get_logger

__all__ = [
    # Core exports
    "get_logger",
    "configure_logging",
    # Event constants
    "CONF_INIT_STARTED",
    "CONF_INITIALIZED",
    "CONF_INIT_FAILED",
    "MANIFEST_LOADED",
    "HOSTNAME_LOOKUP_FAILED",
    "CONF_SOURCE_ADDED",
    "CONF_SOURCE_SKIPPED",
    "CONF_SOURCES_LOADED",
    "CONF_RELOADED",
    "CONF_PARSE_FAILED",
    "CONF_LOAD_FAILED",
    "MONITORING_ENABLED",
    "MONITORING_DISABLED",
    "GC_PROFILER_ENABLED",
]
