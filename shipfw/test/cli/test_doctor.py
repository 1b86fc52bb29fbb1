from __future__ import annotations

from pathlib import Path

import pytest
import typer

from shipfw.cli.context import CLIContext
from shipfw.core.config import Config, FlutterConfig
from shipfw.core.errors import ErrorCode
from shipfw.core.project import Project
from shipfw.output.console import MockConsole
from shipfw.platform.detection import Platform
from shipfw.release.auth import Credentials
from shipfw.release.checks import ToolValidator


def _ctx(tmp_path: Path, *, credentials: Credentials | None) -> CLIContext:
    return CLIContext(
        project=Project(tmp_path),
        host=Platform.MACOS,
        config=Config(flutter=FlutterConfig(dir=tmp_path / "flutter")),
        credentials=credentials,
        console=MockConsole(),
    )


def _patch(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext, *, tools_found: bool) -> None:
    import shipfw.cli.commands.doctor as doctor_cmd

    which = (lambda name: f"/usr/bin/{name}") if tools_found else (lambda name: None)
    monkeypatch.setattr(doctor_cmd, "build_context", lambda: ctx)
    monkeypatch.setattr(
        doctor_cmd,
        "ios_validators",
        lambda *, flutter_dir: (ToolValidator("xcodebuild", which=which),),
    )


def test_doctor_passes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import shipfw.cli.commands.doctor as doctor_cmd

    ctx = _ctx(tmp_path, credentials=Credentials("t0ken"))
    _patch(monkeypatch, ctx, tools_found=True)

    doctor_cmd.doctor()

    assert isinstance(ctx.console, MockConsole)
    assert not ctx.console.has_error()
    assert ctx.console.find("xcodebuild: /usr/bin/xcodebuild")
    # An uninitialized project is only a warning.
    assert ctx.console.has_warning()


def test_doctor_fails_on_missing_tool(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import shipfw.cli.commands.doctor as doctor_cmd

    ctx = _ctx(tmp_path, credentials=Credentials("t0ken"))
    _patch(monkeypatch, ctx, tools_found=False)

    with pytest.raises(typer.Exit) as exc:
        doctor_cmd.doctor()

    assert exc.value.exit_code == int(ErrorCode.CONFIG)


def test_doctor_fails_when_logged_out(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import shipfw.cli.commands.doctor as doctor_cmd

    ctx = _ctx(tmp_path, credentials=None)
    _patch(monkeypatch, ctx, tools_found=True)

    with pytest.raises(typer.Exit) as exc:
        doctor_cmd.doctor()

    assert exc.value.exit_code == int(ErrorCode.CONFIG)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("not logged in")
