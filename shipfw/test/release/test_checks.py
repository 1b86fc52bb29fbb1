"""Tests for shipfw.release.checks module."""

from __future__ import annotations

from pathlib import Path

from shipfw.release.checks import (
    CheckStatus,
    FlutterCheckoutValidator,
    ToolValidator,
    ios_validators,
)


class TestToolValidator:
    def test_found(self) -> None:
        validator = ToolValidator("git", which=lambda name: f"/usr/bin/{name}")

        [result] = validator.validate()

        assert result.status == CheckStatus.OK
        assert result.message == "/usr/bin/git"

    def test_missing_required(self) -> None:
        validator = ToolValidator("xcodebuild", hint="install Xcode", which=lambda name: None)

        [result] = validator.validate()

        assert result.is_error
        assert result.hint == "install Xcode"

    def test_missing_optional(self) -> None:
        validator = ToolValidator("pod", required=False, which=lambda name: None)

        [result] = validator.validate()

        assert result.is_warning

    def test_description(self) -> None:
        assert ToolValidator("git").description == "git is installed"


class TestFlutterCheckoutValidator:
    def test_missing_dir(self, tmp_path: Path) -> None:
        results = FlutterCheckoutValidator(tmp_path / "nope").validate()

        assert len(results) == 1
        assert results[0].is_error

    def test_valid_checkout(self, tmp_path: Path) -> None:
        (tmp_path / "bin").mkdir()
        (tmp_path / "bin" / "flutter").write_text("#!/bin/sh\n")
        (tmp_path / ".git").mkdir()

        results = FlutterCheckoutValidator(tmp_path).validate()

        assert results
        assert not any(r.is_error for r in results)

    def test_not_a_git_checkout(self, tmp_path: Path) -> None:
        (tmp_path / "bin").mkdir()
        (tmp_path / "bin" / "flutter").write_text("#!/bin/sh\n")

        results = FlutterCheckoutValidator(tmp_path).validate()

        assert [r.name for r in results if r.is_error] == ["flutter checkout"]


def test_ios_validators(tmp_path: Path) -> None:
    validators = ios_validators(flutter_dir=tmp_path)

    assert [v.description for v in validators] == [
        "xcodebuild is installed",
        "git is installed",
        "flutter toolchain checkout",
    ]
