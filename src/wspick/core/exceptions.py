"""Exception hierarchy for wspick.

All errors raised by wspick derive from WspickError so the CLI can map
them to exit codes in one place. Config problems are split into I/O
failures (fatal) and parse failures (routed to the recovery loop).
"""

from pathlib import Path

__all__ = [
    "WspickError",
    "ConfigError",
    "ConfigParseError",
    "RecoveryAbortedError",
    "ScanError",
    "LaunchError",
    "PathValidationError",
    "PromptCancelledError",
    "InvalidSelectionError",
]


class WspickError(Exception):
    """Base exception for all wspick errors."""

    pass


class ConfigError(WspickError):
    """Config file could not be created, read or written."""

    pass


class ConfigParseError(ConfigError):
    """Config file exists but is not a valid registry.

    Raised for YAML syntax errors and schema violations alike.

    Attributes:
        path: Config file that failed to parse.
        detail: Human-readable description of the problem.

    """

    def __init__(self, message: str, path: Path | None = None, detail: str = "") -> None:
        super().__init__(message)
        self.path = path
        self.detail = detail


class RecoveryAbortedError(ConfigError):
    """User chose to exit from the config recovery loop."""

    pass


class ScanError(WspickError):
    """A configured search directory could not be listed.

    Attributes:
        directory: The search directory that failed.

    """

    def __init__(self, message: str, directory: str = "") -> None:
        super().__init__(message)
        self.directory = directory


class LaunchError(WspickError):
    """External command (editor or open command) could not be spawned.

    Attributes:
        command: The command that failed to start.

    """

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command


class PathValidationError(WspickError):
    """A path given on the command line does not exist."""

    pass


class PromptCancelledError(WspickError):
    """A text prompt was dismissed without an answer."""

    pass


class InvalidSelectionError(WspickError):
    """Menu returned a value that is neither a project, candidate nor action."""

    pass
