"""Config store: create, load, migrate, save and edit the registry file.

The file is YAML with a ``# description`` comment above every documented
top-level key. Comments are regenerated on every save and ignored on load.

Load pipeline:
    read -> yaml.safe_load -> StoredRegistry (relaxed) -> migrate -> Registry

A file that cannot be parsed enters the recovery loop: the user can fix
it in an editor, replace it with defaults, or exit. The loop only returns
with a valid registry.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import ValidationError

from wspick.core.config.models import (
    DEFAULT_EXCLUDE_PROJ_DIRS,
    DEFAULT_SORT,
    Registry,
    StoredRegistry,
)
from wspick.core.exceptions import ConfigError, ConfigParseError, RecoveryAbortedError
from wspick.core.process import default_editor, run_editor
from wspick.core.prompts import RECOVERY_EDIT, RECOVERY_GENERATE, PrompterInterface

logger = logging.getLogger(__name__)

FILE_HEADER = "# wspick project registry"


def render_registry(registry: Registry) -> str:
    """Serialize a registry to annotated YAML.

    Args:
        registry: Registry to serialize.

    Returns:
        YAML text with a comment line above each documented top-level key.

    """
    body = yaml.safe_dump(
        registry.model_dump(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=120,
    )
    docs = Registry.field_docs()

    lines = [FILE_HEADER]
    for line in body.splitlines():
        # Top-level keys are the only unindented "key:" lines
        if line and not line[0].isspace():
            key = line.split(":", 1)[0]
            if key in docs:
                lines.append(f"# {docs[key]}")
        lines.append(line)
    return "\n".join(lines) + "\n"


class ConfigStore:
    """Owns the registry file at a given location.

    Attributes:
        config_path: Location of the YAML file.
        prompter: Prompts used by the recovery loop.

    """

    def __init__(
        self,
        config_path: Path,
        prompter: PrompterInterface,
        editor_finder: Callable[[], str] = default_editor,
        runner: Callable[[str, str], int] = run_editor,
    ) -> None:
        """Initialize the store.

        Args:
            config_path: Config file location (see ``paths.resolve_config_path``).
            prompter: Prompt implementation for the recovery loop.
            editor_finder: Returns the editor for new files and for repairing
                a file whose own ``editor`` cannot be read.
            runner: Spawn-and-wait primitive for the editor command line.

        """
        self.config_path = config_path
        self.prompter = prompter
        self.editor_finder = editor_finder
        self.runner = runner

    def ensure_exists(self) -> bool:
        """Write a default registry if no config file exists yet.

        Returns:
            True if a new file was created.

        Raises:
            ConfigError: If the directory or file cannot be created.

        """
        if self.config_path.exists():
            return False
        self.save(Registry.default(editor=self.editor_finder()))
        logger.info("Created config file %s", self.config_path)
        return True

    def load(self) -> Registry:
        """Read, recover if needed, and migrate the registry.

        Returns:
            Registry in the current schema.

        Raises:
            ConfigError: If the file cannot be read or written.
            RecoveryAbortedError: If the user chose "exit" while recovering.

        """
        return self.migrate(self._read_with_recovery())

    def migrate(self, stored: StoredRegistry) -> Registry:
        """Fill in fields missing from an older file and persist once.

        Args:
            stored: Registry as parsed from disk.

        Returns:
            Registry with every field set. When ``sort`` had to be defaulted
            the projects are sorted as well.

        """
        missing = stored.missing_fields()
        registry = Registry(
            paths=dict(stored.paths),
            dirs=list(stored.dirs) if stored.dirs is not None else [],
            open_cmd=stored.open_cmd,
            editor=stored.editor,
            sort=stored.sort if stored.sort is not None else DEFAULT_SORT,
            exclude_proj_dirs=(
                stored.exclude_proj_dirs
                if stored.exclude_proj_dirs is not None
                else DEFAULT_EXCLUDE_PROJ_DIRS
            ),
        )
        if not missing:
            return registry

        if "sort" in missing:
            registry.sort_paths()
        logger.info("Migrating config, added defaults for: %s", ", ".join(missing))
        self.save(registry)
        return registry

    def save(self, registry: Registry) -> None:
        """Write the registry atomically, recreating the directory if needed.

        Raises:
            ConfigError: If the file cannot be written.

        """
        path = self.config_path
        temp_path = path.with_name(f"{path.name}.tmp")
        content = render_registry(registry)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to write {path}: {e}") from e

        logger.debug("Saved config to %s", path)

    def edit(self, registry: Registry) -> None:
        """Open the file in the registry's editor and reload it in place.

        The editor's exit status is ignored. A file broken by the edit goes
        through the same recovery loop as ``load()``.

        Args:
            registry: Registry whose fields are replaced with the reloaded values.

        Raises:
            LaunchError: If the editor cannot be started.

        """
        self.runner(registry.editor, str(self.config_path))
        registry.replace_with(self.load())
        if registry.sort_paths():
            logger.info("Re-sorting projects after edit")
            self.save(registry)

    def _parse(self) -> StoredRegistry:
        path = self.config_path
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"Invalid encoding in {path}", path=path, detail=str(e)) from e
        except OSError as e:
            raise ConfigError(f"Failed to read {path}: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}", path=path, detail=str(e)) from e

        if not isinstance(data, dict):
            raise ConfigParseError(
                f"Invalid config in {path}",
                path=path,
                detail="expected a mapping of settings at the top level",
            )

        try:
            return StoredRegistry.model_validate(data)
        except ValidationError as e:
            raise ConfigParseError(
                f"Schema validation failed for {path}", path=path, detail=str(e)
            ) from e

    def _read_with_recovery(self) -> StoredRegistry:
        while True:
            try:
                return self._parse()
            except ConfigParseError as error:
                logger.warning("Config parse failed: %s", error)
                choice = self.prompter.recovery_choice(error)

            if choice == RECOVERY_EDIT:
                self.runner(self.editor_finder(), str(self.config_path))
            elif choice == RECOVERY_GENERATE:
                registry = Registry.default(editor=self.editor_finder())
                self.save(registry)
                logger.info("Replaced broken config with defaults")
                return StoredRegistry.model_validate(registry.model_dump())
            else:
                raise RecoveryAbortedError(f"Config file left unchanged: {self.config_path}")
