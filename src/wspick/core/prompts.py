"""Interactive prompts backed by questionary.

``Prompter`` is the only place wspick talks to questionary. Everything
else depends on the ``PrompterInterface`` protocol so tests can script
answers without a terminal.

Cancellation (Ctrl+C / Esc) makes questionary's ``ask()`` return None:
- ``select`` passes None through (the menu treats it as "nothing chosen").
- ``text`` and ``recovery_choice`` raise PromptCancelledError.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from typing import Any, Protocol

import questionary
from rich.console import Console
from rich.markup import escape

from wspick.core.exceptions import ConfigParseError, PromptCancelledError

logger = logging.getLogger(__name__)

RECOVERY_EDIT = "edit"
RECOVERY_GENERATE = "generate new"
RECOVERY_EXIT = "exit"
RECOVERY_CHOICES = [RECOVERY_EDIT, RECOVERY_GENERATE, RECOVERY_EXIT]

Validator = Callable[[str], bool | str]


class PrompterInterface(Protocol):
    """Prompt operations used by the config store and selection controller."""

    def select(self, message: str, options: Sequence[str]) -> str | None:
        """Single-select menu; None when dismissed."""
        ...

    def text(self, message: str, validate: Validator | None = None) -> str:
        """Free text input; raises PromptCancelledError when dismissed."""
        ...

    def recovery_choice(self, error: ConfigParseError) -> str:
        """Ask how to recover from a broken config file."""
        ...


def _is_interactive() -> bool:
    """Check whether prompts can be shown (stdin attached to a terminal)."""
    return sys.stdin.isatty()


def _prompt_kwargs() -> dict[str, Any]:
    """Extra questionary arguments for the current terminal setup.

    When stdout is captured (``cd "$(wspick -p)"``) the prompt is drawn on
    stderr so only the selected path reaches stdout.
    """
    if sys.stdout.isatty() or not sys.stderr.isatty():
        return {}
    from prompt_toolkit.output import create_output

    return {"output": create_output(stdout=sys.stderr)}


def validate_existing_path(value: str) -> bool | str:
    """Questionary validator accepting only paths that exist.

    Args:
        value: Text typed by the user.

    Returns:
        True when the path exists, otherwise the message shown under the prompt.

    """
    if not value.strip():
        return "path must not be empty"
    if not os.path.exists(os.path.expanduser(value)):
        return f"path '{value}' does not exist"
    return True


def validate_not_empty(value: str) -> bool | str:
    """Questionary validator rejecting blank input."""
    if not value.strip():
        return "value must not be empty"
    return True


class Prompter:
    """questionary implementation of PrompterInterface."""

    def __init__(self, console: Console) -> None:
        """Initialize the prompter.

        Args:
            console: Console used for messages shown around prompts.

        """
        self.console = console

    def select(self, message: str, options: Sequence[str]) -> str | None:
        """Show a single-select list and return the chosen option.

        Typing filters the list, so j/k navigation is turned off.

        Args:
            message: Question shown above the list.
            options: Menu entries in display order.

        Returns:
            The chosen entry, or None if the prompt was dismissed.

        """
        return questionary.select(
            message,
            choices=list(options),
            use_search_filter=True,
            use_jk_keys=False,
            **_prompt_kwargs(),
        ).ask()

    def text(self, message: str, validate: Validator | None = None) -> str:
        """Ask for free text, re-prompting until ``validate`` accepts it.

        Raises:
            PromptCancelledError: If the prompt was dismissed.

        """
        kwargs = _prompt_kwargs()
        if validate is not None:
            kwargs["validate"] = validate
        answer = questionary.text(message, **kwargs).ask()
        if answer is None:
            raise PromptCancelledError(f"Prompt cancelled: {message}")
        return answer.strip()

    def recovery_choice(self, error: ConfigParseError) -> str:
        """Explain a parse failure and ask for edit / generate new / exit.

        Raises:
            PromptCancelledError: If the prompt was dismissed.

        """
        self.console.print(f"[red]Error:[/red] {escape(str(error))}")
        if error.detail:
            self.console.print(escape(error.detail))
        answer = questionary.select(
            "The config file could not be parsed. What now?",
            choices=RECOVERY_CHOICES,
            **_prompt_kwargs(),
        ).ask()
        if answer is None:
            raise PromptCancelledError("Config recovery cancelled")
        return answer
