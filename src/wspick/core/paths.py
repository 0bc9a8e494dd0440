"""Config file location.

The location is resolved once by the CLI and handed to ConfigStore, so
tests can point the store at a temporary directory.

Registries are stored as YAML. Older TOML files (``wspick.toml``) are not
read; a warning points at one found next to the resolved path so it can
be converted by hand.
"""

import logging
import os
from pathlib import Path

import platformdirs

logger = logging.getLogger(__name__)

APP_NAME = "wspick"
CONFIG_FILENAME = "wspick.yaml"
LEGACY_CONFIG_FILENAME = "wspick.toml"
CONFIG_ENV_VAR = "WSPICK_CONFIG"


def default_config_path() -> Path:
    """Return the platform-standard config file path.

    Returns:
        ``<user config dir>/wspick/wspick.yaml`` as reported by platformdirs.

    """
    return platformdirs.user_config_path(APP_NAME, appauthor=False) / CONFIG_FILENAME


def resolve_config_path(override: Path | None = None) -> Path:
    """Resolve the config path from an explicit override or the default.

    Args:
        override: Path given via ``--config`` or the WSPICK_CONFIG variable.

    Returns:
        Absolute path to the config file (may not exist yet).

    """
    if override is not None:
        path = Path(os.path.expanduser(override)).absolute()
        logger.debug("Using config override: %s", path)
    else:
        path = default_config_path()
    _warn_legacy_config(path)
    return path


def _warn_legacy_config(path: Path) -> None:
    legacy = path.with_name(LEGACY_CONFIG_FILENAME)
    if legacy.exists() and not path.exists():
        logger.warning(
            "Found %s but wspick now reads %s; copy your projects into the new file",
            legacy,
            path.name,
        )
