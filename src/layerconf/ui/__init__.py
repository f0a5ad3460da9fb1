"""UI module for layerconf.

This module provides the Typer-based CLI. It can be run directly:
    python -m layerconf.ui.cli dump --root /srv/myapp

Note: We don't export CLI components from __init__.py to avoid
module loading issues when running as a script.
"""

__all__ = []  # CLI is run directly, no exports needed
