"""Resolve the application's identity from its root directory."""

import socket
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from layerconf.config.validators import resolve_path
from layerconf.manifest import find_manifest, load_manifest
from layerconf.telemetry import HOSTNAME_LOOKUP_FAILED, get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """Who the running application is, fixed once resolved."""

    root: Path
    app_name: str
    app_version: str
    libs_path: Path
    environment: str
    host: str
    started_at: datetime
    manifest_path: Path


def resolve_hostname() -> str:
    """Short host name of this machine, or ``""`` when the lookup fails."""
    try:
        return socket.gethostname().split(".")[0]
    except OSError as e:
        log.warning(HOSTNAME_LOOKUP_FAILED, error=str(e))
        return ""


def resolve_identity(
    root: Path | str,
    environment: str,
    manifest_glob: str = "pyproject.toml",
    host: str | None = None,
) -> Identity:
    """Build the Identity of the application rooted at ``root``.

    Args:
        root: Application root; made absolute.
        environment: Active environment namespace.
        manifest_glob: Glob matching the manifest under the root.
        host: Host name override. If None, the OS is asked.

    Returns:
        The resolved Identity.

    Raises:
        ConfigMissingManifest: No manifest under the root.
        ConfigMultipleManifest: Several manifests under the root.
        ConfigMissingParameter: Manifest lacks name or version.
        ConfigParseError: Manifest is not valid TOML.
    """
    root_path = resolve_path(root)
    manifest = load_manifest(find_manifest(root_path, manifest_glob))

    return Identity(
        root=root_path,
        app_name=manifest.name,
        app_version=manifest.version,
        libs_path=root_path / "lib" / manifest.name,
        environment=environment,
        host=resolve_hostname() if host is None else host,
        started_at=datetime.now(timezone.utc),
        manifest_path=manifest.path,
    )
