"""Shared fixtures: an application root with a manifest and isolated settings."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from layerconf import Conf
from layerconf.config.settings import ConfSettings
from layerconf.monitoring import gc_profiler

MANIFEST = """
[project]
name = "demo"
version = "1.2.3"
"""


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings detection."""
    for name in (
        "APP_ENV",
        "LAYERCONF_ENVIRONMENT",
        "LAYERCONF_ETC_DIR",
        "LAYERCONF_TMP_DIR",
        "LAYERCONF_HOSTNAME",
        "LAYERCONF_MANIFEST_GLOB",
        "LAYERCONF_LOG_DIR",
        "LAYERCONF_LOG_LEVEL",
        "LAYERCONF_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put the root logger and structlog back the way the test found them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _gc_profiler_off() -> Iterator[None]:
    yield
    gc_profiler.disable()


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Application root holding a single pyproject.toml manifest."""
    root = tmp_path / "app"
    root.mkdir()
    (root / "pyproject.toml").write_text(MANIFEST)
    return root


@pytest.fixture
def etc_dir(tmp_path: Path) -> Path:
    path = tmp_path / "etc"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, etc_dir: Path) -> ConfSettings:
    return ConfSettings(
        environment="production",
        etc_dir=etc_dir,
        tmp_dir=tmp_path / "run",
        hostname="testhost",
    )


@pytest.fixture
def conf(app_root: Path, settings: ConfSettings) -> Conf:
    return Conf(app_root, settings=settings)
