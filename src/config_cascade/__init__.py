"""Hierarchical, lazily loaded configuration keyed by dot notation.

The module-level helpers operate on a process-wide :class:`ConfigStore`
created on first use. Applications that prefer explicit wiring can build
their own stores and pass them around instead.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from .loaders import ConfigError, ConfigLoadError, load_file
from .store import ConfigStore, PathLike

_store_singleton: Optional[ConfigStore] = None
_store_lock = threading.Lock()


def get_store() -> ConfigStore:
    """Return the process-wide store, creating it on first use."""
    global _store_singleton
    with _store_lock:
        if _store_singleton is None:
            _store_singleton = ConfigStore()
        return _store_singleton


def reset_store(store: Optional[ConfigStore] = None) -> ConfigStore:
    """Replace the process-wide store, returning the new instance."""
    global _store_singleton
    with _store_lock:
        _store_singleton = store if store is not None else ConfigStore()
        return _store_singleton


def register(name: str, path: PathLike) -> None:
    get_store().register(name, path)


def has(key: str) -> bool:
    return get_store().has(key)


def set(key: str, value: Any) -> None:  # noqa: A001 - mirrors ConfigStore.set
    get_store().set(key, value)


def mode(name: str) -> None:
    get_store().mode(name)


def get(key: str, default: Any = None) -> Any:
    return get_store().get(key, default)


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigStore",
    "get",
    "get_store",
    "has",
    "load_file",
    "mode",
    "register",
    "reset_store",
    "set",
]
