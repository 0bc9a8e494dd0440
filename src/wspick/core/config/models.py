"""Registry models.

Two shapes describe the config file:

- ``StoredRegistry`` is the relaxed on-disk shape. Fields added in later
  releases (``dirs``, ``sort``, ``exclude_proj_dirs``) are optional so that
  older files still parse.
- ``Registry`` is the current schema with every field required. It is
  produced from a StoredRegistry by ``ConfigStore.migrate()`` and is the only
  shape the rest of wspick works with.

Field descriptions on Registry double as the comments written above each
key when the file is saved.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

DEFAULT_DIRS: list[str] = []
DEFAULT_SORT = True
DEFAULT_EXCLUDE_PROJ_DIRS = False


class Registry(BaseModel):
    """Persisted project registry, current schema.

    Attributes:
        paths: Project name -> path, in display order.
        dirs: Directories whose subdirectories are offered as candidates.
        open_cmd: Command run with the selected path as its only argument.
        editor: Editor used to edit the raw config file.
        sort: Keep ``paths`` alphabetically ordered after every change.
        exclude_proj_dirs: Hide scanned directories that already have an entry.

    Example:
        >>> registry = Registry.default(editor="vi")
        >>> registry.add_project("b", "/tmp/b")
        >>> registry.add_project("a", "/tmp/a")
        >>> list(registry.paths)
        ['a', 'b']

    """

    model_config = ConfigDict(extra="ignore")

    paths: dict[str, str] = Field(
        description="named projects (name: path), shown first in the menu",
    )
    dirs: list[str] = Field(
        description="directories whose subdirectories are listed as projects",
    )
    open_cmd: str = Field(
        description="command to run with selected path as arg (empty: print the path)",
    )
    editor: str = Field(
        description="editor used by [edit] to change this file",
    )
    sort: bool = Field(
        description="sort projects alphabetically",
    )
    exclude_proj_dirs: bool = Field(
        description="exclude directories that contain projects from automatic list",
    )

    @field_validator("paths", "dirs", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: Any, info: ValidationInfo) -> Any:
        """YAML parses a key whose entries are all commented out as None."""
        if v is None:
            return {} if info.field_name == "paths" else []
        return v

    @classmethod
    def default(cls, editor: str) -> "Registry":
        """Build a fresh registry for a first run.

        Args:
            editor: Editor command to store (see ``process.default_editor``).

        Returns:
            Registry with no projects, no search dirs and sorting enabled.

        """
        return cls(
            paths={},
            dirs=list(DEFAULT_DIRS),
            open_cmd="",
            editor=editor,
            sort=DEFAULT_SORT,
            exclude_proj_dirs=DEFAULT_EXCLUDE_PROJ_DIRS,
        )

    @classmethod
    def field_docs(cls) -> dict[str, str]:
        """Return the comment text for every documented top-level key."""
        return {
            name: field.description
            for name, field in cls.model_fields.items()
            if field.description
        }

    def sort_paths(self) -> bool:
        """Sort ``paths`` by key when sorting is enabled.

        Returns:
            True if the key order changed.

        """
        if not self.sort:
            return False
        ordered = dict(sorted(self.paths.items()))
        changed = list(ordered) != list(self.paths)
        self.paths = ordered
        return changed

    def add_project(self, name: str, path: str) -> None:
        """Insert or overwrite a named project, keeping sort order."""
        if name in self.paths:
            logger.info("Overwriting project %r (was %s)", name, self.paths[name])
        self.paths[name] = path
        self.sort_paths()

    def add_dir(self, path: str) -> None:
        """Append a search directory."""
        self.dirs.append(path)
        self.sort_paths()

    def replace_with(self, other: "Registry") -> None:
        """Overwrite every field with the values of ``other``."""
        for name in type(self).model_fields:
            setattr(self, name, getattr(other, name))


class StoredRegistry(BaseModel):
    """Relaxed on-disk registry shape accepted from older config files.

    ``None`` on an optional field means the key was absent and has to be
    filled in by migration.
    """

    model_config = ConfigDict(extra="ignore")

    paths: dict[str, str]
    dirs: list[str] | None = None
    open_cmd: str
    editor: str
    sort: bool | None = None
    exclude_proj_dirs: bool | None = None

    @field_validator("paths", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: Any) -> Any:
        """A null ``paths`` key means no projects."""
        return {} if v is None else v

    def missing_fields(self) -> list[str]:
        """Names of optional fields absent from the file."""
        return [
            name
            for name in ("dirs", "sort", "exclude_proj_dirs")
            if getattr(self, name) is None
        ]
