"""Parsers that turn configuration files into plain dictionaries."""

from __future__ import annotations

import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ConfigError(Exception):
    pass


class ConfigLoadError(ConfigError):
    """A configuration file exists but cannot be turned into a mapping."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path, f"invalid YAML ({exc})") from exc


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(path, f"invalid JSON ({exc})") from exc


def _load_py(path: Path) -> Any:
    spec = importlib.util.spec_from_file_location(f"_config_cascade_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(path, "cannot import Python config file")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigLoadError(path, f"error executing config module ({exc})") from exc
    if not hasattr(module, "config"):
        raise ConfigLoadError(path, "Python config files must define a top-level 'config' mapping")
    return getattr(module, "config")


_LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".json": _load_json,
    ".py": _load_py,
}

SUPPORTED_EXTENSIONS = tuple(_LOADERS)


def load_file(path: PathLike) -> Dict[str, Any]:
    """Parse ``path`` and return its top-level mapping.

    The parser is chosen by suffix. ``None``/empty documents load as ``{}``;
    any other non-mapping top-level value raises :class:`ConfigLoadError`.
    """
    path = Path(path)
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ConfigLoadError(path, f"unsupported config file type {path.suffix!r}")

    logger.debug("Reading config file %s", path)
    raw = loader(path)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigLoadError(path, f"top-level value must be a mapping, got {type(raw).__name__}")
    return dict(raw)


def find_config_file(base: PathLike, name: str, extensions: Iterable[str]) -> Optional[Path]:
    """Return the first ``<base>/<name><ext>`` that exists, in ``extensions`` order."""
    base = Path(base)
    for ext in extensions:
        candidate = base / f"{name}{ext}"
        if candidate.is_file():
            return candidate
    return None


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "SUPPORTED_EXTENSIONS",
    "find_config_file",
    "load_file",
]
