"""wspick: pick a project or workspace directory and open it.

Importing :mod:`wspick` exposes the Typer ``app`` and the ``main``
entry point used by the console script.
"""

__version__ = "0.4.0"

from wspick.cli import app, main  # noqa: E402

__all__ = ["__version__", "app", "main"]
