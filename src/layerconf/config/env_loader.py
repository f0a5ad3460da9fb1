"""Environment variable file loader with priority-based loading.

This module implements environment-specific .env file loading from the
application root, and detection of the environment name that namespaces the
merged configuration.
"""

from pathlib import Path

from dotenv import load_dotenv

from layerconf.config.validators import normalize_environment
from layerconf.telemetry import get_logger

log = get_logger(__name__)

DEFAULT_ENVIRONMENT = "production"


def get_environment() -> str:
    """Detect current environment from the APP_ENV environment variable.

    Returns:
        Normalized environment name.

    Environment variable mapping:
    - "production" or "prod" → "production"
    - "staging" or "stage" → "staging"
    - "development" or "dev" → "development"
    - any other value → that value, lowercased
    - unset or empty → "production"

    Note: This function uses os.getenv() directly because environment
    detection must happen before settings are loaded (chicken-and-egg problem).
    """
    import os  # noqa: PLC0415

    app_env = os.getenv("APP_ENV", "").strip()
    if not app_env:
        return DEFAULT_ENVIRONMENT
    try:
        return normalize_environment(app_env)
    except ValueError:
        log.warning("invalid_app_env_ignored", app_env=app_env, fallback=DEFAULT_ENVIRONMENT)
        return DEFAULT_ENVIRONMENT


def load_env_files(project_root: Path, environment: str | None = None) -> list[Path]:
    """Load .env files from the application root in priority order.

    Priority order (highest to lowest):
    1. `.env.{environment}.local` (highest priority, gitignored)
    2. `.env.{environment}` (environment-specific)
    3. `.env.local` (local overrides, gitignored)
    4. `.env` (base configuration)

    Variables already present in the process environment are never overridden.

    Args:
        project_root: Application root directory.
        environment: Environment name. If None, detected via get_environment().

    Returns:
        The .env files that were found and loaded.
    """
    env_name = environment or get_environment()

    # Lowest priority first
    env_files = [
        project_root / ".env",  # Base config (lowest priority)
        project_root / ".env.local",  # Local overrides
        project_root / f".env.{env_name}",  # Environment-specific
        project_root / f".env.{env_name}.local",  # Environment-specific local (highest priority)
    ]

    loaded_files = []
    # With override=False the first value set wins, so load highest priority first.
    # Explicit environment variables still win over every .env file.
    for env_file in reversed(env_files):
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            loaded_files.append(env_file)

    if loaded_files:
        log.info(
            "env_files_loaded",
            environment=env_name,
            files=[str(f.relative_to(project_root)) for f in loaded_files],
            project_root=str(project_root),
        )
    else:
        log.debug(
            "no_env_files_found",
            environment=env_name,
            project_root=str(project_root),
        )
    return loaded_files
