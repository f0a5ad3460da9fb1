"""Tests for structured logging configuration."""

import json
import logging
import os
import pathlib
import subprocess
import sys

import pytest
import structlog

import layerconf
from layerconf.telemetry.logger import configure_logging, get_logger

HOST_SCRIPT = """
import logging, sys
root = logging.getLogger()
handler = logging.StreamHandler(sys.stdout)
root.addHandler(handler)
root.setLevel(logging.WARNING)
import layerconf
import layerconf.ui.cli
print(handler in root.handlers, len(root.handlers), root.level)
"""


class TestLoggerConfiguration:
    """Test logger configuration and setup."""

    def test_get_logger_returns_bound_logger(self) -> None:
        """Test that get_logger returns a logger that can be used."""
        log = get_logger(__name__)

        assert hasattr(log, "info")
        assert hasattr(log, "error")
        assert hasattr(log, "warning")

    def test_get_logger_leaves_logging_alone(self, restore_logging: None) -> None:
        """Test that get_logger neither configures structlog nor touches the root logger."""
        structlog.reset_defaults()
        root = logging.getLogger()
        host_handler = logging.NullHandler()
        root.addHandler(host_handler)
        handlers_before = list(root.handlers)
        level_before = root.level

        get_logger("test.module1").info("conf_init_started")

        assert not structlog.is_configured()
        assert root.handlers == handlers_before
        assert root.level == level_before

    def test_import_keeps_host_logging(self) -> None:
        """Test importing the package keeps a root handler the host installed first."""
        src_dir = pathlib.Path(layerconf.__file__).resolve().parents[1]
        python_path = os.pathsep.join([str(src_dir), os.environ.get("PYTHONPATH", "")])
        env = {**os.environ, "PYTHONPATH": python_path}

        result = subprocess.run(
            [sys.executable, "-c", HOST_SCRIPT],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )

        assert result.stdout.split() == ["True", "1", str(logging.WARNING)]

    def test_logger_emits_structured_logs(
        self,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
        restore_logging: None,
    ) -> None:
        """Test that logger emits structured JSON logs to file."""
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("LAYERCONF_LOG_DIR", str(log_dir))
        structlog.reset_defaults()
        configure_logging()

        log = get_logger("layerconf.component")
        log.info("conf_sources_loaded", environment="production", files=["a.yml"])
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = log_dir / "layerconf.jsonl"
        assert log_file.exists()
        entries = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        entry = next(e for e in entries if e.get("event") == "conf_sources_loaded")
        assert entry["environment"] == "production"
        assert entry["files"] == ["a.yml"]
        assert entry["component"] == "component"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_no_file_handler_without_log_dir(self, restore_logging: None) -> None:
        """Test only the console handler is installed by default."""
        structlog.reset_defaults()
        configure_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert not isinstance(handlers[0], logging.FileHandler)
