"""Eligibility checks run before any other workflow stage.

Checks run in a fixed order and stop at the first unmet requirement:
host platform, authentication, project initialization, then the pluggable
validators. Later stages assume all of them hold and never re-check.
"""

from __future__ import annotations

from dataclasses import dataclass

from shipfw.core.project import Project
from shipfw.core.result import Err, Ok, Result
from shipfw.output.console import ConsoleProtocol
from shipfw.platform.detection import Platform
from shipfw.release.auth import Credentials
from shipfw.release.checks import CheckResult, Validator
from shipfw.release.errors import (
    NotAuthenticated,
    PreconditionFailure,
    ProjectNotInitialized,
    UnsupportedHost,
    ValidationFailed,
)


@dataclass(frozen=True, slots=True)
class PreconditionRequirements:
    """What a command needs before it may run.

    An empty ``supported_platforms`` accepts every host.
    """

    supported_platforms: tuple[Platform, ...] = ()
    check_authenticated: bool = False
    check_initialized: bool = False
    validators: tuple[Validator, ...] = ()


class PreconditionValidator:
    def __init__(
        self,
        *,
        host: Platform,
        project: Project,
        credentials: Credentials | None,
        console: ConsoleProtocol,
    ) -> None:
        self._host = host
        self._project = project
        self._credentials = credentials
        self._console = console

    def validate(self, requirements: PreconditionRequirements) -> Result[None, PreconditionFailure]:
        supported = requirements.supported_platforms
        if supported and self._host not in supported:
            return Err(UnsupportedHost(host=self._host, supported=supported))

        if requirements.check_authenticated and self._credentials is None:
            return Err(NotAuthenticated())

        if requirements.check_initialized:
            reason = self._initialization_problem()
            if reason is not None:
                return Err(ProjectNotInitialized(reason=reason))

        issues: list[CheckResult] = []
        for validator in requirements.validators:
            for result in validator.validate():
                if result.is_error:
                    issues.append(result)
                elif result.is_warning:
                    self._console.warning(f"{result.name}: {result.message}")
        if issues:
            return Err(ValidationFailed(issues=tuple(issues)))

        return Ok(None)

    def _initialization_problem(self) -> str | None:
        if not self._project.has_pubspec():
            return f"no pubspec.yaml in {self._project.root}"
        if not self._project.has_shorebird_yaml():
            return f"no shorebird.yaml in {self._project.root}"
        if not self._project.pubspec_bundles_shorebird_yaml():
            return "pubspec.yaml does not list shorebird.yaml under flutter.assets"
        return None
