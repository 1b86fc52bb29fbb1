"""Pluggable environment validators.

A validator inspects one aspect of the machine (a tool on PATH, the flutter
checkout) and reports ``CheckResult`` values. Errors block a release;
warnings are shown and ignored. ``shipfw doctor`` runs the same validators
and prints every result.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Protocol

from shipfw.git.repository import Repository


class CheckStatus(Enum):
    OK = auto()
    WARNING = auto()
    """Passed, with something the operator should know about."""
    ERROR = auto()
    """Failed; publishing must not proceed."""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check.

    Attributes:
        name: Short identifier for what was checked (e.g., "xcodebuild")
        status: Whether the check passed, warned, or failed
        message: Human-readable result message
        hint: Optional fix command or URL
    """

    name: str
    status: CheckStatus
    message: str
    hint: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == CheckStatus.ERROR

    @property
    def is_warning(self) -> bool:
        return self.status == CheckStatus.WARNING

    @classmethod
    def success(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.WARNING, message=message, hint=hint)

    @classmethod
    def error(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.ERROR, message=message, hint=hint)


class Validator(Protocol):
    @property
    def description(self) -> str: ...

    def validate(self) -> list[CheckResult]: ...


Which = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class ToolValidator:
    """A command-line tool must be on PATH."""

    tool: str
    hint: str | None = None
    required: bool = True
    which: Which = field(default=shutil.which)

    @property
    def description(self) -> str:
        return f"{self.tool} is installed"

    def validate(self) -> list[CheckResult]:
        path = self.which(self.tool)
        if path:
            return [CheckResult.success(self.tool, path)]
        if self.required:
            return [CheckResult.error(self.tool, "missing", hint=self.hint)]
        return [CheckResult.warning(self.tool, "missing (optional)", hint=self.hint)]


@dataclass(frozen=True, slots=True)
class FlutterCheckoutValidator:
    """The release toolchain must be a git checkout with a flutter executable.

    Both are needed: the executable builds the framework, the checkout's HEAD
    is recorded on the release.
    """

    flutter_dir: Path

    @property
    def description(self) -> str:
        return "flutter toolchain checkout"

    def validate(self) -> list[CheckResult]:
        hint = "Set [flutter] dir in config.toml to your flutter checkout"
        if not self.flutter_dir.is_dir():
            return [CheckResult.error("flutter", f"not found: {self.flutter_dir}", hint=hint)]

        results: list[CheckResult] = []
        executable = self.flutter_dir / "bin" / "flutter"
        if executable.exists():
            results.append(CheckResult.success("flutter", str(executable)))
        else:
            results.append(CheckResult.error("flutter", f"missing {executable}", hint=hint))

        if Repository(self.flutter_dir).exists():
            results.append(CheckResult.success("flutter checkout", "git checkout"))
        else:
            results.append(
                CheckResult.error(
                    "flutter checkout",
                    f"{self.flutter_dir} is not a git checkout",
                    hint="The toolchain revision is read with `git rev-parse HEAD`",
                )
            )
        return results


def ios_validators(*, flutter_dir: Path) -> tuple[Validator, ...]:
    """Validators every iOS release must pass."""
    return (
        ToolValidator(
            "xcodebuild",
            hint="Install Xcode from the App Store, then run: xcode-select --install",
        ),
        ToolValidator("git", hint="Install git: https://git-scm.com/downloads"),
        FlutterCheckoutValidator(flutter_dir),
    )
