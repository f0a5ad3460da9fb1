"""Shared YAML loading utilities for configuration sources.

This module provides the YAML loading used by the layered store: every
source file goes through ``load_yaml_file`` so parse failures are reported
the same way regardless of which layer they come from.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml

from layerconf.errors import ConfigParseError

log = structlog.get_logger(__name__)


def load_yaml_file(
    file_path: Path, error_class: type[Exception] = ConfigParseError
) -> dict[str, Any]:
    """Load and parse a YAML file whose top level must be a mapping.

    Args:
        file_path: Path to the YAML file.
        error_class: Exception class to raise on malformed content.
            Defaults to ConfigParseError.

    Returns:
        Parsed YAML content as a dictionary. Returns empty dict if the file is
        empty or holds only comments.

    Raises:
        FileNotFoundError: If the file does not exist. Callers decide whether a
            missing source is an error.
        error_class: If the file is not valid YAML or its top level is not a
            mapping. The message carries the parser's own description.

    Example:
        >>> from pathlib import Path
        >>> data = load_yaml_file(Path("defaults.yml"))
        >>> print(data.get("logs", {}))
    """
    with file_path.open("r", encoding="utf-8") as f:
        try:
            content: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise error_class(f"Failed to parse YAML file {file_path}: {e}") from e

    if content is None:
        log.debug("yaml_file_empty", file_path=str(file_path))
        return {}
    if not isinstance(content, dict):
        raise error_class(
            f"Top-level YAML in {file_path} must be a mapping, got {type(content).__name__}"
        )
    return content


def dump_yaml(data: dict[str, Any]) -> str:
    """Serialize a tree to YAML that ``load_yaml_file`` reads back unchanged.

    Keys are sorted, nested blocks are indented by four spaces and the
    document starts with an explicit ``---`` header.
    """
    return yaml.safe_dump(
        data,
        indent=4,
        sort_keys=True,
        explicit_start=True,
        default_flow_style=False,
        allow_unicode=True,
    )
