"""Selection controller: menu building and the choice state machine.

States and transitions::

    BUILDING_OPTIONS -> AWAITING_CHOICE
    AWAITING_CHOICE  -> RESOLVED | CANCELLED | NEW_PROJECT | NEW_DIRECTORY | EDIT
    NEW_PROJECT      -> RESOLVED
    NEW_DIRECTORY    -> BUILDING_OPTIONS
    EDIT             -> BUILDING_OPTIONS

Options are rebuilt from the registry and a fresh scan on every pass,
because adding a directory or editing the file changes both.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum

from wspick.core.config.models import Registry
from wspick.core.config.store import ConfigStore
from wspick.core.exceptions import InvalidSelectionError, PathValidationError
from wspick.core.prompts import PrompterInterface, validate_existing_path, validate_not_empty
from wspick.core.scanner import DirectoryScanner

logger = logging.getLogger(__name__)

NEW_PROJECT_OPTION = "[new project]"
NEW_DIR_OPTION = "[new dir]"
EDIT_OPTION = "[edit]"

# First positional CLI arguments with a meaning of their own
NEW_COMMAND = "new"
EDIT_COMMAND = "edit"

MENU_MESSAGE = "select project:"


class SelectionState(str, Enum):
    """States of the selection loop."""

    BUILDING_OPTIONS = "building_options"
    AWAITING_CHOICE = "awaiting_choice"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    NEW_PROJECT = "new_project"
    NEW_DIRECTORY = "new_directory"
    EDIT = "edit"


ACTION_STATES: dict[str, SelectionState] = {
    NEW_PROJECT_OPTION: SelectionState.NEW_PROJECT,
    NEW_DIR_OPTION: SelectionState.NEW_DIRECTORY,
    EDIT_OPTION: SelectionState.EDIT,
}


def validate_project_name(value: str) -> bool | str:
    """Questionary validator for project names.

    Names must not be blank or collide with a menu action, which would hide
    the action behind the project.
    """
    if value.strip() in ACTION_STATES:
        return f"'{value.strip()}' is reserved for a menu action"
    return validate_not_empty(value)


@dataclass
class Menu:
    """One rendering of the menu.

    Attributes:
        options: Entries in display order, action entries last.
        candidates: Scanned name -> path for this rendering only.

    """

    options: list[str]
    candidates: dict[str, str]


class SelectionController:
    """Drives the menu until a path is chosen or the user cancels.

    The controller holds the only reference to the registry while it
    runs; every change goes through the store before the next pass.
    """

    def __init__(
        self,
        store: ConfigStore,
        registry: Registry,
        prompter: PrompterInterface,
        scanner: DirectoryScanner | None = None,
    ) -> None:
        self.store = store
        self.registry = registry
        self.prompter = prompter
        self.scanner = scanner if scanner is not None else DirectoryScanner()

    def start(self, cmd_or_path: str | None = None, new_path: str | None = None) -> str | None:
        """Entry point honouring the positional command-line arguments.

        Args:
            cmd_or_path: ``new``, ``edit``, a literal path, or None for the menu.
            new_path: Project path given after ``new``.

        Returns:
            Path to launch, or None when there is nothing to launch
            (menu cancelled or ``edit``).

        """
        if cmd_or_path is None:
            return self.run()
        if cmd_or_path == NEW_COMMAND:
            return self.new_project(new_path)
        if cmd_or_path == EDIT_COMMAND:
            self.edit()
            return None
        logger.debug("Using path from command line: %s", cmd_or_path)
        return cmd_or_path

    def build_menu(self) -> Menu:
        """Combine named projects, scanned candidates and actions.

        Raises:
            ScanError: If a search directory cannot be listed.

        """
        scan = self.scanner.scan(self.registry)
        names = sorted(set(self.registry.paths) | set(scan.names))
        return Menu(options=names + list(ACTION_STATES), candidates=scan.candidates)

    def classify(self, choice: str, menu: Menu) -> tuple[SelectionState, str | None]:
        """Map a chosen option to the next state.

        Named projects win over scanned candidates of the same name.

        Returns:
            ``(RESOLVED, path)`` for projects and candidates, ``(action, None)``
            for action entries.

        Raises:
            InvalidSelectionError: If the option was not offered by the menu.

        """
        if choice in self.registry.paths:
            return SelectionState.RESOLVED, os.path.expanduser(self.registry.paths[choice])
        if choice in menu.candidates:
            return SelectionState.RESOLVED, menu.candidates[choice]
        if choice in ACTION_STATES:
            return ACTION_STATES[choice], None
        raise InvalidSelectionError(f"Unknown menu option: {choice!r}")

    def run(self) -> str | None:
        """Loop over the menu until a path is resolved or the menu is dismissed.

        Returns:
            Resolved path, or None if cancelled.

        """
        state = SelectionState.BUILDING_OPTIONS
        menu: Menu | None = None
        path: str | None = None

        while True:
            logger.debug("Selection state: %s", state.value)
            if state is SelectionState.BUILDING_OPTIONS:
                menu = self.build_menu()
                state = SelectionState.AWAITING_CHOICE
            elif state is SelectionState.AWAITING_CHOICE:
                assert menu is not None
                choice = self.prompter.select(MENU_MESSAGE, menu.options)
                if choice is None:
                    state = SelectionState.CANCELLED
                else:
                    state, path = self.classify(choice, menu)
            elif state is SelectionState.RESOLVED:
                return path
            elif state is SelectionState.CANCELLED:
                logger.debug("Selection cancelled")
                return None
            elif state is SelectionState.NEW_PROJECT:
                path = self.new_project()
                state = SelectionState.RESOLVED
            elif state is SelectionState.NEW_DIRECTORY:
                self.new_directory()
                state = SelectionState.BUILDING_OPTIONS
            elif state is SelectionState.EDIT:
                self.edit()
                state = SelectionState.BUILDING_OPTIONS

    def new_project(self, path: str | None = None) -> str:
        """Ask for a name (and path), store the project and return its path.

        Args:
            path: Path given on the command line; prompted for when None.

        Raises:
            PathValidationError: If a command-line path does not exist.
            PromptCancelledError: If a prompt is dismissed.

        """
        if path is not None:
            expanded = os.path.expanduser(path)
            if not os.path.exists(expanded):
                raise PathValidationError(f"path '{path}' does not exist")
            path = os.path.abspath(expanded)

        name = self.prompter.text("project name:", validate=validate_project_name)
        if path is None:
            path = self.prompter.text("project path:", validate=validate_existing_path)

        self.registry.add_project(name, path)
        self.store.save(self.registry)
        logger.info("Added project %s -> %s", name, path)
        return os.path.expanduser(path)

    def new_directory(self) -> None:
        """Ask for a search directory and store it."""
        directory = self.prompter.text("directory path:", validate=validate_existing_path)
        self.registry.add_dir(directory)
        self.store.save(self.registry)
        logger.info("Added search directory %s", directory)

    def edit(self) -> None:
        """Edit the config file and reload it into the registry."""
        self.store.edit(self.registry)
