"""Structured logging configuration using structlog.

This module configures structlog for structured logging with:
- Pretty-printed console output (or JSON lines, per log format)
- An optional rotating JSON file when a log directory is configured
- UTC timestamps
- Component and event tracking
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _get_log_level() -> str:
    """Get log level from configuration.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from layerconf.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_log_format() -> str:
    """Get log format (json or console)."""
    from layerconf.config.bootstrap import get_bootstrap_log_format  # noqa: PLC0415

    return get_bootstrap_log_format()


def _get_log_dir() -> pathlib.Path | None:
    """Get log directory path, or None when file logging is off."""
    from layerconf.config.bootstrap import get_bootstrap_log_dir  # noqa: PLC0415

    log_dir = get_bootstrap_log_dir()
    return pathlib.Path(log_dir) if log_dir else None


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with timestamp added.
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event from event_dict logger name.

    This processor works with structlog's event_dict which contains the logger name
    after add_logger_name processor runs.

    Args:
        logger: The structlog logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    # Extract component name (e.g., "layerconf.conf" -> "conf")
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        component = logger_name.split(".")[-1]
    else:
        component = logger_name or "unknown"

    event_dict["component"] = component
    return event_dict


_FOREIGN_PRE_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _add_timestamp,
    _add_component_from_event_dict,
]


def _configure_file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_dir: Directory for log files.

    Returns:
        Configured RotatingFileHandler.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "layerconf.jsonl"
    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_file),
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def _configure_console_handler(log_format: str) -> logging.StreamHandler[Any]:
    """Configure stderr handler rendering either pretty console lines or JSON.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def configure_logging() -> None:
    """Configure structlog for structured logging.

    This function should be called once at application startup. It replaces
    the root logger's handlers, so the library never calls it on import: the
    CLI calls it, and host applications call it only if they want this setup.
    """
    log_level = _get_log_level()
    log_format = _get_log_format()
    log_dir = _get_log_dir()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    configured_level = getattr(logging, log_level, logging.INFO)

    console_handler = _configure_console_handler(log_format)
    console_handler.setLevel(configured_level)
    root_logger.addHandler(console_handler)

    # File handler captures INFO+ regardless of the console level
    if log_dir is not None:
        file_handler = _configure_file_handler(log_dir)
        file_handler.setLevel(min(logging.INFO, configured_level))
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_component_from_event_dict,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        structlog logger instance. Output follows whatever logging the host
        application configured.

    Example:
        >>> from layerconf.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("conf_sources_loaded", environment="production")
    """
    return structlog.get_logger(name)
