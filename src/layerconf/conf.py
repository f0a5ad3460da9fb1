"""Configuration facade for a single application instance.

A ``Conf`` owns everything the application knows about its configuration:

- its identity (name and version from the package manifest, host, environment),
- the ordered list of YAML sources (defaults, system file, optional extra file),
- the merged tree those sources produce under the environment namespace.

Typical startup::

    conf = Conf("/srv/myapp")
    conf.prepare(config=args.config, environ=os.environ)
    port = conf.lookup("server", "port").as_int(8080)

Initialization is lazy and happens at most once: any public operation first
resolves the identity from the root passed to the constructor. Loading only
happens on ``prepare`` and ``reload``; reads never trigger it.
"""

import copy
import os
import threading
import traceback
from collections.abc import MutableMapping
from datetime import datetime
from pathlib import Path
from typing import Any

from layerconf.config.loader import dump_yaml
from layerconf.config.settings import ConfSettings, load_settings
from layerconf.errors import ConfigError, ConfigOtherError, ConfigParseError
from layerconf.identity import Identity, resolve_identity
from layerconf.monitoring import MonitoringSettings, build_monitoring_settings
from layerconf.store import LayeredStore
from layerconf.telemetry import (
    CONF_INIT_FAILED,
    CONF_INIT_STARTED,
    CONF_INITIALIZED,
    CONF_LOAD_FAILED,
    CONF_PARSE_FAILED,
    CONF_RELOADED,
    CONF_SOURCE_ADDED,
    CONF_SOURCES_LOADED,
    get_logger,
)
from layerconf.values import ConfValue, lookup

log = get_logger(__name__)

DEFAULTS_FILENAME = "defaults.yml"
SAMPLE_SUFFIX = ".sample.yml"


class Conf:
    """Layered configuration of one application, rooted at ``root``.

    Args:
        root: Application root holding the manifest and ``defaults.yml``.
        settings: Facade settings. If None, loaded from the environment and
            the root's .env files on first initialization.
        store: Layered store to merge sources with.
    """

    def __init__(
        self,
        root: Path | str,
        settings: ConfSettings | None = None,
        store: LayeredStore | None = None,
    ) -> None:
        self._root = Path(root)
        self._settings = settings
        self._store = store or LayeredStore()
        self._lock = threading.RLock()
        self._identity: Identity | None = None
        self._extra: Path | None = None
        self._sources: tuple[Path, ...] = ()
        self.monitoring: MonitoringSettings | None = None

    def __repr__(self) -> str:
        if self._identity is None:
            return f"Conf(root={str(self._root)!r}, initialized=False)"
        return (
            f"Conf(app_name={self._identity.app_name!r}, "
            f"environment={self._identity.environment!r})"
        )

    # Initialization

    @property
    def initialized(self) -> bool:
        return self._identity is not None

    def init(self, root: Path | str | None = None) -> str:
        """Resolve the application identity, once.

        Args:
            root: Replaces the constructor root. Ignored once initialized.

        Returns:
            The application name.

        Raises:
            ConfigMissingManifest: No manifest under the root.
            ConfigMultipleManifest: More than one manifest under the root.
            ConfigMissingParameter: Manifest lacks name or version.
            ConfigParseError: Manifest is malformed.
            ConfigOtherError: Any other failure (unreadable files, invalid settings).
        """
        identity, _ = self._initialize(root)
        return identity.app_name

    def _initialize(self, root: Path | str | None = None) -> tuple[Identity, ConfSettings]:
        if self._identity is not None and self._settings is not None:
            return self._identity, self._settings
        with self._lock:
            if self._identity is not None and self._settings is not None:
                return self._identity, self._settings
            if root is not None:
                self._root = Path(root)

            log.debug(CONF_INIT_STARTED, root=str(self._root))
            try:
                settings = self._settings
                if settings is None:
                    settings = load_settings(self._root.expanduser().resolve())
                identity = resolve_identity(
                    self._root,
                    environment=settings.environment,
                    manifest_glob=settings.manifest_glob,
                    host=settings.hostname,
                )
            except Exception as e:
                log.error(
                    CONF_INIT_FAILED,
                    root=str(self._root),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if isinstance(e, ConfigError):
                    raise
                raise ConfigOtherError(str(e), traceback.format_exc()) from e

            # Nothing is kept unless every step above succeeded
            self._settings = settings
            self._identity = identity
            self._root = identity.root
            self._sources = self._build_sources()

        log.info(
            CONF_INITIALIZED,
            app_name=identity.app_name,
            app_version=identity.app_version,
            environment=identity.environment,
            host=identity.host,
            root=str(identity.root),
        )
        return identity, settings

    def ensure_init(self) -> Identity:
        """Initialize if needed and return the identity."""
        identity, _ = self._initialize()
        return identity

    # Identity accessors

    @property
    def identity(self) -> Identity:
        return self.ensure_init()

    @property
    def settings(self) -> ConfSettings:
        _, settings = self._initialize()
        return settings

    @property
    def app_root(self) -> Path:
        return self.identity.root

    @property
    def app_name(self) -> str:
        return self.identity.app_name

    @property
    def app_version(self) -> str:
        return self.identity.app_version

    @property
    def app_libs(self) -> Path:
        return self.identity.libs_path

    @property
    def app_env(self) -> str:
        return self.identity.environment

    @property
    def host(self) -> str:
        return self.identity.host

    @property
    def app_started(self) -> datetime:
        return self.identity.started_at

    # Sources

    @property
    def files(self) -> tuple[Path, ...]:
        """Configuration sources, lowest precedence first."""
        self.ensure_init()
        return self._sources

    @property
    def loaded_files(self) -> tuple[Path, ...]:
        """Files (including namespaced variants) that fed the current tree."""
        return self._store.loaded_files

    def _build_sources(self) -> tuple[Path, ...]:
        # Precedence: defaults < system file < extra file
        sources = [self._root / DEFAULTS_FILENAME, Path(self.gen_config_etc())]
        if self._extra is not None:
            sources.append(self._extra)
        for source in sources:
            log.debug(CONF_SOURCE_ADDED, path=str(source))
        return tuple(sources)

    def set_extra_source(self, path: Path | str | None) -> None:
        """Replace (or with None, remove) the caller-supplied source.

        Takes effect on the next ``load_files``, ``reload`` or ``prepare``.
        """
        with self._lock:
            self.ensure_init()
            self._extra = Path(path).expanduser().resolve() if path else None
            self._sources = self._build_sources()

    def load_files(self) -> None:
        """Merge the sources under the environment namespace.

        The new tree replaces the previous one only when every source loaded.

        Raises:
            ConfigParseError: A source holds malformed YAML.
            ConfigOtherError: Any other failure while loading.
        """
        with self._lock:
            identity = self.ensure_init()
            try:
                self._store.load(self._sources, namespaces={"environment": identity.environment})
            except ConfigParseError as e:
                log.error(CONF_PARSE_FAILED, error=str(e))
                raise
            except ConfigError:
                raise
            except Exception as e:
                log.error(CONF_LOAD_FAILED, error=str(e), error_type=type(e).__name__)
                raise ConfigOtherError(str(e), traceback.format_exc()) from e

        log.info(
            CONF_SOURCES_LOADED,
            environment=identity.environment,
            files=[str(f) for f in self._store.loaded_files],
        )

    def prepare(
        self,
        config: Path | str | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> MonitoringSettings:
        """Load the configuration and derive monitoring settings.

        Args:
            config: Extra source overriding every other one. Ignored if empty.
            environ: Mapping to write monitoring variables into, typically
                ``os.environ``. If None, nothing is written.

        Returns:
            The monitoring settings derived from the ``newrelic`` section.

        Raises:
            ConfigError: Any subclass, see ``init`` and ``load_files``.
        """
        with self._lock:
            self.ensure_init()
            if config:
                self.set_extra_source(config)
            self.load_files()
            try:
                monitoring = self.prepare_monitoring(
                    self.at("newrelic"), self.at("logs", "newrelic")
                )
                # Read one more key so a failing tree read surfaces here
                self.lookup(self.app_name)
            except Exception as e:
                log.error(CONF_LOAD_FAILED, error=str(e), error_type=type(e).__name__)
                raise ConfigOtherError(str(e), traceback.format_exc()) from e

        if environ is not None:
            monitoring.apply(environ)
        return monitoring

    def reload(self) -> None:
        """Reload the sources; the identity is left untouched."""
        self.ensure_init()
        self.load_files()
        log.info(CONF_RELOADED, files=[str(f) for f in self._sources])

    # Reads

    def at(self, *path: Any) -> Any:
        """Value at ``path`` in the merged tree, or None when any segment is missing."""
        self.ensure_init()
        return lookup(self._store.data, path).get()

    def __getitem__(self, key: Any) -> Any:
        return self.at(key)

    def lookup(self, *path: Any) -> ConfValue:
        """Typed lookup of ``path``; absence is reported, not raised."""
        self.ensure_init()
        return lookup(self._store.data, path)

    def newrelic_enabled(self) -> bool:
        return bool(self.at("newrelic"))

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the merged tree."""
        self.ensure_init()
        return copy.deepcopy(self._store.data)

    def dump(self) -> str:
        """The merged tree as YAML, readable back by the layered store."""
        self.ensure_init()
        return dump_yaml(self._store.data)

    # Generated values

    def gen_pidfile(self) -> str:
        identity = self.ensure_init()
        tmp_dir = self.settings.tmp_dir
        return str(tmp_dir / f"{identity.app_name}-{identity.host}-{os.getpid()}.pid")

    def gen_process_name(self) -> str:
        identity = self.ensure_init()
        return f"{identity.app_name}/{identity.environment}/{os.getpid()}"

    def gen_config_etc(self) -> str:
        identity = self.ensure_init()
        return str(self.settings.etc_dir / f"{identity.app_name}.yml")

    def gen_config_sample(self) -> str:
        identity = self.ensure_init()
        return str(identity.root / f"{identity.app_name}{SAMPLE_SUFFIX}")

    def gen_config_message(self) -> str:
        """Operator instructions for installing the sample config."""
        config_etc = self.gen_config_etc()
        config_sample = self.gen_config_sample()
        return (
            f"\nA default configuration is available here: {config_sample}.\n"
            f"You should copy it to the default location: {config_etc}.\n"
            f"sudo cp {config_sample} {config_etc}\n"
        )

    # Monitoring

    def prepare_monitoring(self, section: Any, logfile: Any = None) -> MonitoringSettings:
        """Compute monitoring settings from ``section`` and remember them."""
        identity = self.ensure_init()
        self.monitoring = build_monitoring_settings(section, identity, logfile)
        return self.monitoring
