"""Discover and read the application's package manifest.

The manifest is the package descriptor (``pyproject.toml`` by default) that
names the application and carries its version. Exactly one file must match
the manifest glob under the application root: the resolver refuses to guess
between several.
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from layerconf.errors import (
    ConfigMissingManifest,
    ConfigMissingParameter,
    ConfigMultipleManifest,
    ConfigParseError,
)
from layerconf.telemetry import MANIFEST_LOADED, get_logger

log = get_logger(__name__)


class Manifest(BaseModel):
    """Name and version read from a package manifest."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, description="Application name")
    version: str = Field(min_length=1, description="Application version")
    path: Path = Field(description="Manifest file the values were read from")


def find_manifest(root: Path, pattern: str = "pyproject.toml") -> Path:
    """Return the single file under ``root`` matching ``pattern``.

    Raises:
        ConfigMissingManifest: If nothing matches.
        ConfigMultipleManifest: If more than one file matches.
    """
    matches = sorted(p for p in root.glob(pattern) if p.is_file())
    if not matches:
        raise ConfigMissingManifest(f"manifest file not found: {root / pattern}")
    if len(matches) > 1:
        found = ", ".join(str(p) for p in matches)
        raise ConfigMultipleManifest(f"multiple manifest files found: {found}")
    return matches[0]


def _project_table(document: dict[str, Any]) -> dict[str, Any]:
    # PEP 621 [project] first, then Poetry's legacy table
    project = document.get("project")
    if isinstance(project, dict) and project:
        return project
    poetry = document.get("tool", {}).get("poetry")
    if isinstance(poetry, dict):
        return poetry
    return {}


def load_manifest(path: Path) -> Manifest:
    """Read name and version from a TOML package manifest.

    Args:
        path: Manifest file.

    Returns:
        Validated Manifest.

    Raises:
        ConfigParseError: If the file is not valid TOML.
        ConfigMissingParameter: If name or version is absent or empty. A
            ``dynamic`` version counts as absent.
    """
    try:
        with path.open("rb") as f:
            document = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Failed to parse manifest {path}: {e}") from e

    project = _project_table(document)
    for field in ("name", "version"):
        value = project.get(field)
        if value is None or not str(value).strip():
            raise ConfigMissingParameter(f"manifest {path}: missing {field}")

    try:
        manifest = Manifest(
            name=str(project["name"]), version=str(project["version"]), path=path
        )
    except ValidationError as e:
        raise ConfigMissingParameter(f"manifest {path}: {e}") from e

    log.debug(MANIFEST_LOADED, path=str(path), name=manifest.name, version=manifest.version)
    return manifest
