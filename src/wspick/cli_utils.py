"""Shared CLI helpers: console, exit codes, message and logging setup.

Everything here writes to stderr. stdout is reserved for the selected
path so wspick can be used as ``cd "$(wspick --print)"``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_CANCELLED = 130

console = Console(stderr=True, soft_wrap=True)


def _error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}")


def _info(message: str) -> None:
    console.print(escape(message))


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging with a rich handler on the stderr console.

    Args:
        verbose: Enable DEBUG output.
        quiet: Only show errors. Ignored when ``verbose`` is set.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, rich_tracebacks=verbose)],
        force=True,
    )
