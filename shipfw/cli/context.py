from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from shipfw.core.config import Config, default_config_path, load_config_or_default
from shipfw.core.errors import ErrorCode
from shipfw.core.project import Project
from shipfw.core.result import Err
from shipfw.output.console import ConsoleProtocol, RichConsole
from shipfw.platform.detection import Platform, detect_platform
from shipfw.release.auth import Credentials, load_credentials


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    host: Platform
    config: Config
    credentials: Credentials | None
    console: ConsoleProtocol


def build_context(*, project_root: Path | None = None) -> CLIContext:
    console = RichConsole()

    config_result = load_config_or_default(default_config_path())
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG))

    credentials_result = load_credentials()
    if isinstance(credentials_result, Err):
        console.error(credentials_result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG))

    return CLIContext(
        project=Project((project_root or Path.cwd()).resolve()),
        host=detect_platform(),
        config=config_result.value,
        credentials=credentials_result.value,
        console=console,
    )
