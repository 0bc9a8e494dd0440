"""Registry schema and its on-disk store.

Usage:
    from wspick.core.config import ConfigStore

    store = ConfigStore(config_path, prompter)
    store.ensure_exists()
    registry = store.load()
"""

from wspick.core.config.models import Registry, StoredRegistry
from wspick.core.config.store import ConfigStore, render_registry

__all__ = ["ConfigStore", "Registry", "StoredRegistry", "render_registry"]
