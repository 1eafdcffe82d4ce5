"""Dot-notation configuration store backed by cascading config folders."""

from __future__ import annotations

import copy
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from config_cascade.loaders import SUPPORTED_EXTENSIONS, find_config_file, load_file
from config_cascade.settings import DEFAULT_FOLDER, default_mode, default_root

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

DEFAULT_EXTENSIONS = (".yaml", ".yml", ".json", ".py")


def _strip_path(path: PathLike) -> str:
    raw = os.fspath(path)
    stripped = raw.rstrip("/")
    # Keep the filesystem root addressable.
    return stripped or ("/" if raw else raw)


def _overlay(loaded: Dict[str, Any], explicit: Dict[str, Any]) -> Dict[str, Any]:
    """Lay values written with ``set`` over a freshly loaded file mapping.

    Nested dicts on both sides are combined so an explicit ``db.user`` keeps
    the file's ``db.host``; anything else from ``explicit`` wins outright.
    """
    merged = dict(loaded)
    for key, value in explicit.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _overlay(current, value)
        merged[key] = value
    return merged


class ConfigStore:
    """Registry of config folders plus the tree of values read from them.

    Keys use dot notation. A key of the form ``folder.file.setting`` is
    resolved lazily: the first lookup that misses reads ``<folder>/<file>.*``
    and, when present, ``<folder>/<mode>/<file>.*``, with top-level keys from
    the mode file replacing those of the base file. Values written with
    :meth:`set` take precedence over anything read from disk.

    ``None`` is treated as "not configured": a setting explicitly stored as
    ``None`` makes :meth:`get` return the default and :meth:`has` return False.
    """

    def __init__(
        self,
        paths: Optional[Mapping[str, PathLike]] = None,
        *,
        mode: Optional[str] = None,
        extensions: Optional[Iterable[str]] = None,
    ):
        self._lock = threading.RLock()
        self._items: Dict[str, Any] = {}
        self._paths: Dict[str, str] = {DEFAULT_FOLDER: _strip_path(default_root())}
        self._mode = mode if mode is not None else default_mode()
        self._extensions = self._normalise_extensions(
            DEFAULT_EXTENSIONS if extensions is None else extensions
        )
        self._loaded: Set[Tuple[str, str]] = set()

        for name, path in (paths or {}).items():
            self.register(name, path)

    @staticmethod
    def _normalise_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
        normalised: List[str] = []
        for ext in extensions:
            ext = ext if ext.startswith(".") else f".{ext}"
            if ext.lower() not in SUPPORTED_EXTENSIONS:
                raise ValueError(f"Unsupported config extension: {ext}")
            normalised.append(ext)
        if not normalised:
            raise ValueError("At least one config extension is required")
        return tuple(normalised)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def register(self, name: str, path: PathLike) -> None:
        """Add (or replace) the folder ``name`` pointing at ``path``."""
        stripped = _strip_path(path)
        with self._lock:
            self._paths[name] = stripped
        logger.debug("Registered config folder %r -> %s", name, stripped)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def set(self, key: str, value: Any) -> None:
        segments = key.split(".")
        with self._lock:
            node = self._items
            for step in segments[:-1]:
                child = node.get(step)
                if not isinstance(child, dict):
                    child = node[step] = {}
                node = child
            node[segments[-1]] = value

    def mode(self, name: str) -> None:
        """Switch the environment subfolder used for files not loaded yet."""
        with self._lock:
            self._mode = name
        logger.debug("Config mode set to %r", name)

    def get(self, key: str, default: Any = None) -> Any:
        segments = key.split(".")
        with self._lock:
            value = self._lookup(segments)
            if value is not MISSING and value is not None:
                return value

            if len(segments) < 3:
                return default

            if not self._load(segments):
                return default

            value = self._lookup(segments)
        return default if value is MISSING or value is None else value

    @property
    def current_mode(self) -> str:
        return self._mode

    @property
    def paths(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._paths)

    def dump(self) -> Dict[str, Any]:
        """Deep copy of everything loaded or set so far."""
        with self._lock:
            return copy.deepcopy(self._items)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _lookup(self, segments: Sequence[str]) -> Any:
        node: Any = self._items
        for step in segments:
            if not isinstance(node, dict) or step not in node:
                return MISSING
            node = node[step]
        return node

    def _load(self, segments: Sequence[str]) -> bool:
        folder, file = segments[0], segments[1]
        if (folder, file) in self._loaded:
            return False

        base = self._paths.get(folder)
        if base is None:
            logger.debug("Config folder %r is not registered", folder)
            return False

        for prefix in ([folder], [folder, file]):
            node = self._lookup(prefix)
            if node is not MISSING and node is not None and not isinstance(node, dict):
                # An explicit scalar already occupies this part of the key.
                return False

        existing = self._lookup([folder, file])

        # Mode specific settings replace generic ones key by key at the top level.
        config: Dict[str, Any] = {}
        for directory in (Path(base), Path(base) / self._mode):
            path = find_config_file(directory, file, self._extensions)
            if path is not None:
                config.update(load_file(path))

        if not config:
            logger.debug("No settings found for %s.%s under %s (mode=%s)", folder, file, base, self._mode)
            return False

        if isinstance(existing, dict):
            config = _overlay(config, existing)

        folder_node = self._items.get(folder)
        if not isinstance(folder_node, dict):
            folder_node = self._items[folder] = {}
        folder_node[file] = config
        self._loaded.add((folder, file))
        logger.debug("Loaded %d settings for %s.%s (mode=%s)", len(config), folder, file, self._mode)
        return True


__all__ = ["ConfigStore", "DEFAULT_EXTENSIONS", "MISSING"]
