"""Environment-driven defaults for new configuration stores."""

from __future__ import annotations

import os
from typing import Optional

_ENV_PREFIX = "CONFIG_CASCADE"
_MODE_ENV_VAR = f"{_ENV_PREFIX}__MODE"
_ROOT_ENV_VAR = f"{_ENV_PREFIX}__ROOT"

DEFAULT_MODE = "development"
DEFAULT_FOLDER = "$"
DEFAULT_ROOT = "./config"


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def default_mode() -> str:
    """Mode used by stores that are not given one explicitly."""
    return _env(_MODE_ENV_VAR) or DEFAULT_MODE


def default_root() -> str:
    """Path registered under the ``"$"`` folder."""
    return _env(_ROOT_ENV_VAR) or DEFAULT_ROOT


__all__ = ["DEFAULT_FOLDER", "DEFAULT_MODE", "DEFAULT_ROOT", "default_mode", "default_root"]
