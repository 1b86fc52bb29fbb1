"""Which operating system ``shipfw`` is running on.

iOS framework builds need Xcode, so the release command checks the host
before anything else. The answer is computed once per process; tests either
clear the cache or use ``Platform.from_sys_platform`` directly.
"""

from __future__ import annotations

import sys
from enum import Enum
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
    "is_linux",
    "is_macos",
    "is_windows",
]

# sys.platform prefix -> Platform value; first match wins.
_SYS_PLATFORM_PREFIXES: tuple[tuple[str, str], ...] = (
    ("darwin", "macos"),
    ("linux", "linux"),
    ("win32", "windows"),
    ("cygwin", "windows"),
    ("msys", "windows"),
)


class Platform(Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Name used in user-facing messages ("macOS", "Linux", ...)."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_sys_platform(cls, value: str) -> Platform:
        value = value.lower()
        for prefix, name in _SYS_PLATFORM_PREFIXES:
            if value.startswith(prefix):
                return cls(name)
        return cls.UNKNOWN


_DISPLAY_NAMES = {
    Platform.LINUX: "Linux",
    Platform.MACOS: "macOS",
    Platform.WINDOWS: "Windows",
    Platform.UNKNOWN: "an unknown platform",
}


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    # sys.platform only; platform.system() may shell out on some hosts.
    return Platform.from_sys_platform(sys.platform)


def is_macos() -> bool:
    return detect_platform() is Platform.MACOS


def is_linux() -> bool:
    return detect_platform() is Platform.LINUX


def is_windows() -> bool:
    return detect_platform() is Platform.WINDOWS
