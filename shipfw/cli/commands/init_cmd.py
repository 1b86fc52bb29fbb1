from __future__ import annotations

from pathlib import Path

import typer

from shipfw.core.errors import ErrorCode
from shipfw.core.project import PUBSPEC_YAML, SHOREBIRD_YAML, Project
from shipfw.core.result import Err
from shipfw.output.console import ConsoleProtocol, RichConsole, Style


def init_project(
    project: Project,
    *,
    app_id: str,
    force: bool,
    console: ConsoleProtocol,
) -> None:
    """Write shorebird.yaml and bundle it; safe to run again."""
    app_id = app_id.strip()
    if not app_id:
        console.error("--app-id must not be empty")
        raise typer.Exit(code=int(ErrorCode.USAGE))

    if not project.has_pubspec():
        console.error(f"No {PUBSPEC_YAML} found in {project.root}")
        console.print("  hint: run this command from the root of a Flutter module", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.NO_INPUT))

    written = project.write_shorebird_yaml(app_id, force=force)
    if isinstance(written, Err):
        console.error(written.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG))
    if written.value:
        console.success(f"Wrote {SHOREBIRD_YAML} (app_id: {app_id})")
    else:
        console.info(f"{SHOREBIRD_YAML} already names {app_id}")

    bundled = project.add_shorebird_yaml_to_assets()
    if isinstance(bundled, Err):
        console.error(bundled.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG))
    if bundled.value:
        console.success(f"Added {SHOREBIRD_YAML} to flutter.assets in {PUBSPEC_YAML}")
    else:
        console.info(f"{PUBSPEC_YAML} already bundles {SHOREBIRD_YAML}")


def init(
    app_id: str = typer.Option(
        ..., "--app-id", help="App id assigned by the code push service."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Replace an existing shorebird.yaml."
    ),
) -> None:
    """Prepare the Flutter module in the current directory for releases."""
    init_project(
        Project(Path.cwd().resolve()),
        app_id=app_id,
        force=force,
        console=RichConsole(),
    )
