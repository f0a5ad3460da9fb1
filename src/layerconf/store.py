"""Layered YAML store: merge ordered sources under namespaces.

Each source path contributes the file itself followed by one namespaced
variant per namespace value, named ``<stem>-<value><suffix>``. For the source
``defaults.yml`` and namespaces ``{"environment": "production"}`` the layers
are ``defaults.yml`` then ``defaults-production.yml``. Later layers override
earlier ones; mappings merge recursively, everything else is replaced.

Missing files are skipped: sources describe where configuration *may* live.
"""

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from layerconf.config.loader import load_yaml_file
from layerconf.errors import ConfigParseError
from layerconf.telemetry import CONF_SOURCE_SKIPPED, get_logger
from layerconf.values import key_text

log = get_logger(__name__)


def deep_merge(base: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries without mutating the originals."""
    result: dict[str, Any] = {**base}
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def stringify_keys(value: Any) -> Any:
    """Return a copy of ``value`` where every mapping key is a string.

    YAML happily produces integer, boolean or null keys; lookups are by string
    path segment, so keys are normalized once at load time. Booleans become
    ``"true"``/``"false"`` and null becomes ``"null"``.
    """
    if isinstance(value, Mapping):
        return {key_text(k): stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [stringify_keys(v) for v in value]
    return value


def namespaced_path(path: Path, namespace_value: str) -> Path:
    """Path of the namespaced variant of a source file."""
    return path.with_name(f"{path.stem}-{namespace_value}{path.suffix}")


class LayeredStore:
    """Loads and merges ordered YAML sources.

    The store keeps the last merged tree and the files that contributed to
    it. ``load`` builds a new tree and swaps it in only when every layer was
    read successfully, so a failed load leaves the previous tree intact.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._loaded_files: tuple[Path, ...] = ()

    @property
    def data(self) -> dict[str, Any]:
        """The current merged tree."""
        return self._data

    @property
    def loaded_files(self) -> tuple[Path, ...]:
        """Files that contributed to the current merged tree, in merge order."""
        return self._loaded_files

    @staticmethod
    def expand(files: Iterable[Path], namespaces: Mapping[str, str]) -> list[Path]:
        """List every candidate layer, in merge order, for the given sources."""
        layers: list[Path] = []
        for path in files:
            layers.append(path)
            for value in namespaces.values():
                if value:
                    layers.append(namespaced_path(path, str(value)))
        return layers

    def load(
        self, files: Sequence[Path], namespaces: Mapping[str, str] | None = None
    ) -> dict[str, Any]:
        """Merge ``files`` (and their namespaced variants) into a new tree.

        Args:
            files: Source paths, lowest precedence first.
            namespaces: Namespace name to value, e.g. ``{"environment": "production"}``.

        Returns:
            The merged tree, which also becomes ``self.data``.

        Raises:
            ConfigParseError: If a layer is not valid YAML or not a mapping.
            OSError: If an existing layer cannot be read.
        """
        merged: dict[str, Any] = {}
        loaded: list[Path] = []
        for layer in self.expand(files, namespaces or {}):
            if not layer.is_file():
                log.debug(CONF_SOURCE_SKIPPED, path=str(layer))
                continue
            content = load_yaml_file(layer, error_class=ConfigParseError)
            merged = deep_merge(merged, stringify_keys(content))
            loaded.append(layer)

        self._data = merged
        self._loaded_files = tuple(loaded)
        return merged
