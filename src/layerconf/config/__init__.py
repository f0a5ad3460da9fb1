"""Settings of the configuration facade and shared YAML helpers.

This module gathers what the facade needs before any layered source is read:
its own settings (environment variables and .env files), environment
detection and the YAML loader every source goes through.
"""

from layerconf.config.env_loader import get_environment, load_env_files
from layerconf.config.loader import dump_yaml, load_yaml_file
from layerconf.config.settings import ConfSettings, load_settings

__all__ = [
    # Facade settings
    "ConfSettings",
    "load_settings",
    "get_environment",
    "load_env_files",
    # YAML helpers
    "load_yaml_file",
    "dump_yaml",
]
