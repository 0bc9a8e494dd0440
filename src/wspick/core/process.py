"""External process helpers: editor discovery and spawn-and-wait.

The open command is started with the path as its single argument. The
editor value is a shell-style command line (`$EDITOR` conventions) and
the config file is appended to it. Both are waited on. Their exit
status is logged but never treated as an error; only a failure to start
the process is.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys

from wspick.core.exceptions import LaunchError

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

# Tried in order when neither VISUAL nor EDITOR is set
FALLBACK_EDITORS: tuple[str, ...] = ("notepad",) if IS_WINDOWS else ("nano", "vim", "vi")


def default_editor() -> str:
    """Discover the user's preferred text editor.

    Checks ``$VISUAL`` and ``$EDITOR`` first, then the first fallback
    editor found on PATH.

    Returns:
        Editor command. Falls back to the last candidate name even when it
        is not on PATH, so a fresh config always has a value to edit.

    """
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var, "").strip()
        if value:
            logger.debug("Editor from $%s: %s", var, value)
            return value

    for candidate in FALLBACK_EDITORS:
        found = shutil.which(candidate)
        if found:
            logger.debug("Editor found on PATH: %s", found)
            return found

    return FALLBACK_EDITORS[-1]


def run_and_wait(command: str, argument: str) -> int:
    """Spawn ``command argument`` and block until it exits.

    Args:
        command: Executable name or path.
        argument: Sole argument (a project path or the config file).

    Returns:
        Exit code of the spawned process.

    Raises:
        LaunchError: If the process could not be started.

    """
    if not command:
        raise LaunchError("No command configured", command=command)
    return _spawn([command, argument], command)


def run_editor(editor: str, path: str) -> int:
    """Open ``path`` in ``editor`` and block until it exits.

    ``editor`` is a command line in ``$EDITOR`` style, so values such as
    ``code --wait`` or ``emacsclient -t`` keep their flags.

    Raises:
        LaunchError: If the command line is empty, cannot be split, or the
            editor could not be started.

    """
    try:
        argv = shlex.split(editor, posix=not IS_WINDOWS)
    except ValueError as e:
        raise LaunchError(f"Cannot parse editor command {editor!r}: {e}", command=editor) from e
    if not argv:
        raise LaunchError("No editor configured", command=editor)
    return _spawn([*argv, path], editor)


def _spawn(argv: list[str], command: str) -> int:
    logger.info("Running %s", " ".join(argv))
    try:
        completed = subprocess.run(argv, check=False)
    except FileNotFoundError as e:
        raise LaunchError(f"Command not found: {command}", command=command) from e
    except OSError as e:
        raise LaunchError(f"Failed to start {command}: {e}", command=command) from e

    if completed.returncode != 0:
        logger.debug("%s exited with code %d", command, completed.returncode)
    return completed.returncode
