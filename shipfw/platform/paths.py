"""Per-user locations.

``config.toml`` (API endpoint, toolchain location) and ``credentials.toml``
(API token) live in ``user_config_dir()``. The default flutter checkout
lives under ``home()``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_windows

__all__ = [
    "APP_NAME",
    "clear_caches",
    "home",
    "user_config_dir",
]

APP_NAME = "shipfw"


@lru_cache(maxsize=1)
def home() -> Path:
    """Home directory; HOME (USERPROFILE on Windows) wins over the account database."""
    value = os.environ.get("USERPROFILE" if is_windows() else "HOME")
    return Path(value) if value else Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/shipfw``, ``~/.config/shipfw`` or ``%APPDATA%/shipfw``."""
    if is_windows():
        base = os.environ.get("APPDATA")
        root = Path(base) if base else home() / "AppData" / "Roaming"
    else:
        base = os.environ.get("XDG_CONFIG_HOME")
        root = Path(base) if base else home() / ".config"
    return root / APP_NAME


def clear_caches() -> None:
    """Forget cached paths after a test changes HOME or XDG_CONFIG_HOME."""
    for cached in (home, user_config_dir):
        cached.cache_clear()
