"""Hand the resolved path to the user: print it or open it."""

import logging
from collections.abc import Callable

import typer

from wspick.core.process import run_and_wait

logger = logging.getLogger(__name__)


def launch(
    path: str,
    open_cmd: str,
    force_print: bool = False,
    runner: Callable[[str, str], int] = run_and_wait,
) -> None:
    """Print ``path`` or run ``open_cmd path`` and wait for it.

    The launched program's exit code is not an error for wspick.

    Args:
        path: Resolved project path.
        open_cmd: Configured command; empty means print.
        force_print: Print even when a command is configured (``--print``).
        runner: Spawn-and-wait primitive.

    Raises:
        LaunchError: If the command cannot be started.

    """
    if force_print or not open_cmd:
        typer.echo(path)
        return

    exit_code = runner(open_cmd, path)
    logger.debug("%s finished with code %d", open_cmd, exit_code)
