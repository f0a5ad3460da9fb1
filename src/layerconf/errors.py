"""Exception hierarchy for configuration initialization and loading.

Every failure raised by ``Conf.init``, ``Conf.prepare`` and ``Conf.reload``
derives from ``ConfigError`` so that applications can abort startup with a
single ``except`` clause while still telling the kinds apart.
"""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigMissingParameter(ConfigError):
    """Raised when the manifest lacks a required identity field (name, version)."""

    pass


class ConfigMissingManifest(ConfigError):
    """Raised when no manifest file matches under the application root."""

    pass


class ConfigMultipleManifest(ConfigError):
    """Raised when more than one manifest file matches under the application root."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a configuration source contains malformed content."""

    pass


class ConfigOtherError(ConfigError):
    """Raised for any other unexpected failure while loading sources.

    Attributes:
        trace: Formatted traceback of the original exception, kept for diagnostics.
    """

    def __init__(self, message: str, trace: str = "") -> None:
        super().__init__(message)
        self.trace = trace

    def __str__(self) -> str:
        message = super().__str__()
        if not self.trace:
            return message
        return f"{message}\n{self.trace}"
