"""Directory scanner producing menu candidates from search directories.

Each configured search directory contributes its immediate,
non-hidden subdirectories. Name collisions across search directories
keep the last one scanned; collisions with named projects are resolved
by the selection controller, which looks up named projects first.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from wspick.core.config.models import Registry
from wspick.core.exceptions import ScanError

logger = logging.getLogger(__name__)


class FilesystemInterface(Protocol):
    """Protocol for filesystem operations to enable dependency injection."""

    def scandir(self, path: Path) -> list[os.DirEntry[str]]:
        """List the entries of a directory.

        Args:
            path: Directory path to scan

        Returns:
            DirEntry objects for each entry in the directory

        Raises:
            OSError: If the directory cannot be read

        """
        ...


class RealFilesystem:
    """Real filesystem implementation using os.scandir."""

    def scandir(self, path: Path) -> list[os.DirEntry[str]]:
        """Scan directory using os.scandir; errors propagate to the caller."""
        with os.scandir(path) as it:
            return list(it)


@dataclass
class ScanResult:
    """Outcome of one scan.

    Attributes:
        candidates: Scanned directory name -> absolute path.
        names: Candidate names in scan order (may repeat across directories).

    """

    candidates: dict[str, str] = field(default_factory=dict)
    names: list[str] = field(default_factory=list)


def search_dir_name(directory: str) -> str | None:
    """Base name of a search directory, or None if it has none (e.g. ``/``)."""
    name = Path(os.path.expanduser(directory)).name
    if not name or name == "..":
        return None
    return name


def is_known_project(name: str, registry: Registry) -> bool:
    """Check whether a scanned name already appears in the registry.

    A name counts as known when it occurs as a substring of any named
    project path or any search directory path.
    """
    return any(name in path for path in registry.paths.values()) or any(
        name in directory for directory in registry.dirs
    )


class DirectoryScanner:
    """Expands the registry's search directories into candidates."""

    def __init__(self, filesystem: FilesystemInterface | None = None) -> None:
        """Initialize the scanner.

        Args:
            filesystem: Optional filesystem implementation for testing

        """
        self.filesystem = filesystem if filesystem is not None else RealFilesystem()

    def scan(self, registry: Registry) -> ScanResult:
        """Scan every search directory of ``registry``.

        Args:
            registry: Supplies ``dirs``, ``paths`` and ``exclude_proj_dirs``.

        Returns:
            ScanResult with all surviving candidates.

        Raises:
            ScanError: If a search directory cannot be listed.

        """
        result = ScanResult()
        for directory in registry.dirs:
            if search_dir_name(directory) is None:
                logger.warning("Skipping search directory without a name: %r", directory)
                continue

            for name, path in self._scan_directory(directory, registry):
                result.candidates[name] = path
                result.names.append(name)

        logger.debug("Scan found %d candidates", len(result.candidates))
        return result

    def _scan_directory(self, directory: str, registry: Registry) -> list[tuple[str, str]]:
        dir_path = Path(os.path.expanduser(directory))
        try:
            entries = self.filesystem.scandir(dir_path)
        except OSError as e:
            raise ScanError(f"Cannot read directory {directory}: {e}", directory=directory) from e

        found: list[tuple[str, str]] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.debug("Cannot stat %s: %s", entry.path, e)
                continue

            if not is_dir or entry.name.startswith("."):
                continue
            if registry.exclude_proj_dirs and is_known_project(entry.name, registry):
                logger.debug("Excluding %s, already has an entry", entry.name)
                continue

            found.append((entry.name, os.path.abspath(entry.path)))

        logger.debug("%s: %d candidates", directory, len(found))
        return found
