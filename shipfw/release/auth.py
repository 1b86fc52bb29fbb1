"""API credentials.

Lookup order:
1. ``SHIPFW_TOKEN`` environment variable (CI)
2. ``token`` key in ``<user-config-dir>/credentials.toml``
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from shipfw.core.config import ConfigError, read_toml
from shipfw.core.result import Err, Ok, Result
from shipfw.core.structured import get_str
from shipfw.platform.paths import user_config_dir

__all__ = ["Credentials", "TOKEN_ENV_VAR", "credentials_path", "load_credentials"]

TOKEN_ENV_VAR = "SHIPFW_TOKEN"


@dataclass(frozen=True, slots=True)
class Credentials:
    token: str

    def __repr__(self) -> str:
        return "Credentials(token=***)"


def credentials_path() -> Path:
    return user_config_dir() / "credentials.toml"


def load_credentials(
    *,
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Result[Credentials | None, ConfigError]:
    """Ok(None) means "not logged in"; Err means the credentials file is broken."""
    env = os.environ if environ is None else environ
    token = env.get(TOKEN_ENV_VAR, "").strip()
    if token:
        return Ok(Credentials(token=token))

    path = path or credentials_path()
    if not path.exists():
        return Ok(None)
    parsed = read_toml(path)
    if isinstance(parsed, Err):
        return parsed

    token = get_str(parsed.value, "token")
    return Ok(Credentials(token=token) if token else None)
