from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from shipfw.cli.app import app
from shipfw.cli.commands.init_cmd import init_project
from shipfw.core.errors import ErrorCode
from shipfw.core.project import Project
from shipfw.core.result import Ok
from shipfw.output.console import MockConsole

PUBSPEC = "name: demo\nflutter:\n  assets:\n    - images/\n"


def _project(tmp_path: Path, pubspec: str | None = PUBSPEC) -> Project:
    if pubspec is not None:
        (tmp_path / "pubspec.yaml").write_text(pubspec, encoding="utf-8")
    return Project(tmp_path)


def test_init_prepares_project(tmp_path: Path) -> None:
    project = _project(tmp_path)
    console = MockConsole()

    init_project(project, app_id="app-1", force=False, console=console)

    assert project.is_initialized()
    assert project.load_app_id() == Ok("app-1")
    assert console.find("Wrote shorebird.yaml (app_id: app-1)")
    assert console.find("Added shorebird.yaml to flutter.assets")


def test_init_twice_changes_nothing(tmp_path: Path) -> None:
    project = _project(tmp_path)
    init_project(project, app_id="app-1", force=False, console=MockConsole())
    shorebird = project.shorebird_yaml_path.read_text()
    pubspec = project.pubspec_path.read_text()

    console = MockConsole()
    init_project(project, app_id="app-1", force=False, console=console)

    assert project.shorebird_yaml_path.read_text() == shorebird
    assert project.pubspec_path.read_text() == pubspec
    assert not console.has_success()
    assert console.find("already names app-1")
    assert console.find("already bundles shorebird.yaml")


def test_other_app_id_without_force_is_config_error(tmp_path: Path) -> None:
    project = _project(tmp_path)
    (tmp_path / "shorebird.yaml").write_text("app_id: other\n", encoding="utf-8")
    console = MockConsole()

    with pytest.raises(typer.Exit) as exc:
        init_project(project, app_id="app-1", force=False, console=console)

    assert exc.value.exit_code == int(ErrorCode.CONFIG)
    assert project.load_app_id() == Ok("other")
    assert "shorebird.yaml" not in project.pubspec_path.read_text()


def test_missing_pubspec_is_no_input(tmp_path: Path) -> None:
    project = _project(tmp_path, pubspec=None)
    console = MockConsole()

    with pytest.raises(typer.Exit) as exc:
        init_project(project, app_id="app-1", force=False, console=console)

    assert exc.value.exit_code == int(ErrorCode.NO_INPUT)
    assert not project.has_shorebird_yaml()
    assert console.has_error()


def test_blank_app_id_is_usage_error(tmp_path: Path) -> None:
    project = _project(tmp_path)

    with pytest.raises(typer.Exit) as exc:
        init_project(project, app_id="  ", force=False, console=MockConsole())

    assert exc.value.exit_code == int(ErrorCode.USAGE)
    assert not project.has_shorebird_yaml()


def test_init_command_uses_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    project = _project(tmp_path)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(app, ["init", "--app-id", "app-1"])

    assert result.exit_code == 0
    assert project.is_initialized()
