"""Tests for shipfw.release.preconditions module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shipfw.core.project import Project
from shipfw.core.result import Err, Ok
from shipfw.output.console import MockConsole
from shipfw.platform.detection import Platform
from shipfw.release.auth import Credentials
from shipfw.release.checks import CheckResult
from shipfw.release.errors import (
    NotAuthenticated,
    ProjectNotInitialized,
    UnsupportedHost,
    ValidationFailed,
)
from shipfw.release.preconditions import PreconditionRequirements, PreconditionValidator

ALL = PreconditionRequirements(
    supported_platforms=(Platform.MACOS,),
    check_authenticated=True,
    check_initialized=True,
)


@dataclass
class StubValidator:
    results: list[CheckResult]
    calls: int = 0

    @property
    def description(self) -> str:
        return "stub"

    def validate(self) -> list[CheckResult]:
        self.calls += 1
        return self.results


def _validator(
    root: Path,
    *,
    host: Platform = Platform.MACOS,
    credentials: Credentials | None = Credentials("t0ken"),
    console: MockConsole | None = None,
) -> PreconditionValidator:
    return PreconditionValidator(
        host=host,
        project=Project(root),
        credentials=credentials,
        console=console or MockConsole(),
    )


class TestOrder:
    def test_all_satisfied(self, make_project) -> None:
        assert _validator(make_project()).validate(ALL) == Ok(None)

    def test_host_checked_first(self, tmp_path: Path) -> None:
        # Neither authenticated nor initialized: the host still wins.
        result = _validator(tmp_path, host=Platform.WINDOWS, credentials=None).validate(ALL)

        assert result == Err(UnsupportedHost(host=Platform.WINDOWS, supported=(Platform.MACOS,)))

    def test_auth_before_initialization(self, tmp_path: Path) -> None:
        result = _validator(tmp_path, credentials=None).validate(ALL)

        assert isinstance(result, Err)
        assert isinstance(result.error, NotAuthenticated)

    def test_validators_not_run_when_uninitialized(self, tmp_path: Path) -> None:
        stub = StubValidator([CheckResult.error("x", "bad")])
        req = PreconditionRequirements(check_initialized=True, validators=(stub,))

        result = _validator(tmp_path).validate(req)

        assert isinstance(result, Err)
        assert isinstance(result.error, ProjectNotInitialized)
        assert stub.calls == 0

    def test_empty_requirements_accept_anything(self, tmp_path: Path) -> None:
        result = _validator(tmp_path, host=Platform.UNKNOWN, credentials=None).validate(
            PreconditionRequirements()
        )
        assert result == Ok(None)


class TestInitialization:
    def test_missing_pubspec(self, tmp_path: Path) -> None:
        result = _validator(tmp_path).validate(ALL)

        assert isinstance(result, Err)
        assert isinstance(result.error, ProjectNotInitialized)
        assert "pubspec.yaml" in result.error.reason

    def test_missing_shorebird_yaml(self, make_project) -> None:
        root = make_project()
        (root / "shorebird.yaml").unlink()

        result = _validator(root).validate(ALL)

        assert isinstance(result, Err)
        assert "no shorebird.yaml" in result.error.reason

    def test_asset_not_bundled(self, make_project) -> None:
        root = make_project()
        (root / "pubspec.yaml").write_text("name: demo\n")

        result = _validator(root).validate(ALL)

        assert isinstance(result, Err)
        assert "flutter.assets" in result.error.reason


class TestValidators:
    def test_errors_are_aggregated(self, make_project) -> None:
        first = StubValidator([CheckResult.error("xcodebuild", "missing")])
        second = StubValidator(
            [CheckResult.success("git", "/usr/bin/git"), CheckResult.error("flutter", "missing")]
        )
        req = PreconditionRequirements(validators=(first, second))

        result = _validator(make_project()).validate(req)

        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationFailed)
        assert [i.name for i in result.error.issues] == ["xcodebuild", "flutter"]
        assert second.calls == 1

    def test_warnings_are_printed_and_pass(self, make_project) -> None:
        console = MockConsole()
        stub = StubValidator([CheckResult.warning("git", "old version")])
        req = PreconditionRequirements(validators=(stub,))

        result = _validator(make_project(), console=console).validate(req)

        assert result == Ok(None)
        assert console.messages == ["warning: git: old version"]
