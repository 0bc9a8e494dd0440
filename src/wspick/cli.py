"""wspick command line interface.

Usage:
    wspick                 pick a project from the menu
    wspick new [PATH]      add a project (PATH skips the path prompt)
    wspick edit            edit the config file
    wspick PATH            open PATH directly
    wspick --print ...     print the path instead of running open_cmd

Exit codes: 0 success or cancelled menu, 1 error, 2 config error,
130 cancelled prompt.
"""

import logging
from pathlib import Path

import typer

from wspick import __version__
from wspick.cli_utils import (
    EXIT_CANCELLED,
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    _error,
    _info,
    _setup_logging,
    console,
)
from wspick.core.config import ConfigStore
from wspick.core.exceptions import ConfigError, PromptCancelledError, WspickError
from wspick.core.launcher import launch
from wspick.core.paths import CONFIG_ENV_VAR, resolve_config_path
from wspick.core.prompts import Prompter, _is_interactive
from wspick.core.selection import NEW_COMMAND, SelectionController

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="wspick",
    help="Pick a project or workspace directory and open it.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wspick {__version__}")
        raise typer.Exit()


@app.command()
def pick(
    cmd_or_path: str | None = typer.Argument(
        None,
        help="'new', 'edit' or a path to open directly, without the menu",
    ),
    new_path: str | None = typer.Argument(
        None,
        help="Path for the project when given after 'new'",
    ),
    print_path: bool = typer.Option(
        False,
        "--print",
        "-p",
        help="Always print the selected path (ignores configured open_cmd)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        envvar=CONFIG_ENV_VAR,
        help="Config file location (default: platform config dir)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Pick a project from the registry and open it with open_cmd."""
    _setup_logging(verbose=verbose, quiet=quiet)

    prompter = Prompter(console)
    store = ConfigStore(resolve_config_path(config), prompter)

    try:
        if store.ensure_exists():
            _info(f"Created config file {store.config_path}")
        registry = store.load()

        if cmd_or_path in (None, NEW_COMMAND) and not _is_interactive():
            _error("Non-interactive terminal: pass a path to open instead")
            raise typer.Exit(code=EXIT_ERROR)

        controller = SelectionController(store, registry, prompter)
        path = controller.start(cmd_or_path, new_path)
        if path is None:
            return

        launch(path, registry.open_cmd, force_print=print_path)
    except PromptCancelledError:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED) from None
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except WspickError as e:
        logger.debug("Aborting", exc_info=True)
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None


def main() -> None:
    """Console script entry point."""
    app()
