"""Host platform abstraction (OS detection, user paths, subprocesses)."""

from .detection import Platform, detect_platform, is_macos, is_windows
from .paths import user_config_dir
from .process import ProcessError, run

__all__ = [
    "Platform",
    "ProcessError",
    "detect_platform",
    "is_macos",
    "is_windows",
    "run",
    "user_config_dir",
]
