"""New Relic settings derived from the merged configuration.

The ``newrelic`` section of the configuration decides whether the agent runs.
Instead of poking the process environment directly, ``build_monitoring_settings``
returns a MonitoringSettings object; the application applies it to the
environment the agent reads (usually ``os.environ``) with ``apply``.

Environment variable names are consumed by the agent and must not change.
"""

import gc
import threading
import time
from collections.abc import Mapping, MutableMapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from layerconf.identity import Identity
from layerconf.telemetry import (
    GC_PROFILER_ENABLED,
    MONITORING_DISABLED,
    MONITORING_ENABLED,
    get_logger,
)

log = get_logger(__name__)

ENV_AGENT_ENABLED = "NEWRELIC_AGENT_ENABLED"
ENV_MONITOR_MODE = "NEW_RELIC_MONITOR_MODE"
ENV_LICENSE_KEY = "NEW_RELIC_LICENSE_KEY"
ENV_APP_NAME = "NEW_RELIC_APP_NAME"
ENV_LOG = "NEW_RELIC_LOG"


class GcProfiler:
    """Record garbage collection pauses through ``gc.callbacks``.

    Enabling is idempotent: the callback is registered at most once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started: float | None = None
        self.enabled = False
        self.collections = 0
        self.total_time = 0.0

    def _callback(self, phase: str, info: dict[str, Any]) -> None:
        if phase == "start":
            self._started = time.perf_counter()
        elif phase == "stop" and self._started is not None:
            self.collections += 1
            self.total_time += time.perf_counter() - self._started
            self._started = None

    def enable(self) -> None:
        with self._lock:
            if self.enabled:
                return
            gc.callbacks.append(self._callback)
            self.enabled = True
        log.debug(GC_PROFILER_ENABLED)

    def disable(self) -> None:
        with self._lock:
            if not self.enabled:
                return
            gc.callbacks.remove(self._callback)
            self.enabled = False


# gc.callbacks is process-wide, so is the profiler
gc_profiler = GcProfiler()


class MonitoringSettings(BaseModel):
    """Agent settings, ready to be projected onto environment variables."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Whether the agent should run")
    monitor_mode: bool = Field(default=False, description="Whether data is reported")
    license_key: str | None = Field(default=None, description="Account license key")
    app_name: str | None = Field(default=None, description="Application label in the UI")
    log_file: str | None = Field(default=None, description="Agent log destination")

    def as_environ(self) -> dict[str, str]:
        """Environment variables describing these settings.

        A disabled agent only sets the enabled flag; nothing else is touched.
        """
        if not self.enabled:
            return {ENV_AGENT_ENABLED: "false"}

        environ = {
            ENV_AGENT_ENABLED: "true",
            ENV_MONITOR_MODE: "true" if self.monitor_mode else "false",
            ENV_LICENSE_KEY: self.license_key or "",
            ENV_APP_NAME: self.app_name or "",
        }
        if self.log_file:
            environ[ENV_LOG] = self.log_file
        return environ

    def apply(self, environ: MutableMapping[str, str]) -> None:
        """Write the settings into ``environ`` (for example ``os.environ``)."""
        environ.update(self.as_environ())


def _license(section: Mapping[str, Any]) -> str | None:
    # "licence" is the historical key; "license" is accepted too
    value = section.get("licence") or section.get("license")
    if value is None or value == "":
        return None
    return str(value)


def build_monitoring_settings(
    section: Any,
    identity: Identity,
    logfile: Any = None,
    profiler: GcProfiler | None = None,
) -> MonitoringSettings:
    """Derive agent settings from the ``newrelic`` configuration section.

    Args:
        section: Value of the ``newrelic`` key; anything but a mapping with a
            license disables the agent.
        identity: Resolved application identity, used for the default label
            ``<app_name>-<platform or host>-<environment>``.
        logfile: Agent log destination, typically ``logs.newrelic``.
        profiler: GC profiler to enable along with the agent. Defaults to the
            process-wide profiler.

    Returns:
        The settings; calling twice with the same inputs gives equal results.
    """
    if not isinstance(section, Mapping):
        log.info(MONITORING_DISABLED, reason="section_missing")
        return MonitoringSettings(enabled=False)

    license_key = _license(section)
    if license_key is None:
        log.info(MONITORING_DISABLED, reason="license_missing")
        return MonitoringSettings(enabled=False)

    (profiler or gc_profiler).enable()

    platform = section.get("platform") or identity.host
    app_name = section.get("app_name") or f"{identity.app_name}-{platform}-{identity.environment}"

    settings = MonitoringSettings(
        enabled=True,
        monitor_mode=True,
        license_key=license_key,
        app_name=str(app_name),
        log_file=str(logfile) if logfile else None,
    )
    log.info(MONITORING_ENABLED, app_name=settings.app_name, log_file=settings.log_file)
    return settings
