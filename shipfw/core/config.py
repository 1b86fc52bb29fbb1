"""Typed user configuration.

The user config lives in ``<user-config-dir>/config.toml``::

    [api]
    base_url = "https://api.shipfw.dev"
    timeout = 60

    [flutter]
    dir = "~/.shipfw/flutter"

Every key is optional; a missing file yields the defaults.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from shipfw.platform.paths import home, user_config_dir

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "ApiConfig",
    "Config",
    "ConfigError",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_API_TIMEOUT_SECONDS",
    "FlutterConfig",
    "default_config_path",
    "load_config",
    "load_config_or_default",
    "read_toml",
]

DEFAULT_API_BASE_URL = "https://api.shipfw.dev"
DEFAULT_API_TIMEOUT_SECONDS = 60


def _default_flutter_dir() -> Path:
    return home() / ".shipfw" / "flutter"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file could not be read or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ApiConfig:
    base_url: str = DEFAULT_API_BASE_URL
    timeout: int = DEFAULT_API_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class FlutterConfig:
    """Location of the flutter toolchain checkout used for release builds."""

    dir: Path = field(default_factory=_default_flutter_dir)

    @property
    def executable(self) -> Path:
        return self.dir / "bin" / "flutter"


@dataclass(frozen=True, slots=True)
class Config:
    api: ApiConfig = field(default_factory=ApiConfig)
    flutter: FlutterConfig = field(default_factory=FlutterConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Build from a parsed TOML mapping; unknown keys are ignored."""
        api: StrDict = get_table(data, "api") or {}
        flutter: StrDict = get_table(data, "flutter") or {}

        timeout = get_int(api, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"api.timeout must be positive, got {timeout}")

        flutter_dir = get_str(flutter, "dir")

        return cls(
            api=ApiConfig(
                base_url=(get_str(api, "base_url") or DEFAULT_API_BASE_URL).rstrip("/"),
                timeout=timeout or DEFAULT_API_TIMEOUT_SECONDS,
            ),
            flutter=FlutterConfig(
                dir=Path(flutter_dir).expanduser() if flutter_dir else _default_flutter_dir()
            ),
        )


def default_config_path() -> Path:
    return user_config_dir() / "config.toml"


def read_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file whose root is a table."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"{path} does not exist", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"cannot read {path}: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"{path.name} is not valid TOML: {e}", path=path))

    table = as_str_dict(data)
    if table is None:
        return Err(ConfigError(f"{path.name} must be a TOML table", path=path))
    return Ok(table)


def load_config(path: Path) -> Result[Config, ConfigError]:
    parsed = read_toml(path)
    if isinstance(parsed, Err):
        return parsed
    try:
        return Ok(Config.from_dict(parsed.value))
    except ValueError as e:
        return Err(ConfigError(f"invalid {path.name}: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like ``load_config`` but a missing file means defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
