"""Failure kinds of the release workflow.

Each kind is a frozen dataclass; ``WorkflowFailure`` is the closed union the
orchestrator returns. Rendering and exit-code mapping live in
``shipfw.output.errors`` so that the mapping exists in exactly one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shipfw.platform.detection import Platform
from shipfw.release.checks import CheckResult
from shipfw.release.model import ReleasePlatform

# Preconditions


@dataclass(frozen=True, slots=True)
class UnsupportedHost:
    host: Platform
    supported: tuple[Platform, ...]


@dataclass(frozen=True, slots=True)
class NotAuthenticated:
    hint: str = "Set SHIPFW_TOKEN or add `token = \"...\"` to credentials.toml"


@dataclass(frozen=True, slots=True)
class ProjectNotInitialized:
    reason: str
    hint: str = "Run `shipfw init --app-id <app-id>` in the module root"


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    issues: tuple[CheckResult, ...]


PreconditionFailure = UnsupportedHost | NotAuthenticated | ProjectNotInitialized | ValidationFailed


# Remote reads and release creation


@dataclass(frozen=True, slots=True)
class ApiFailure:
    operation: str
    message: str
    status: int = 0


@dataclass(frozen=True, slots=True)
class ReleaseAlreadyActive:
    version: str
    platform: ReleasePlatform


# Local toolchain


@dataclass(frozen=True, slots=True)
class BuildFailed:
    cause: str


@dataclass(frozen=True, slots=True)
class RevisionResolutionFailed:
    message: str


# Publication


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class UploadFailed:
    release_id: int
    message: str


@dataclass(frozen=True, slots=True)
class ActivationFailed:
    """Status update failed after the artifact was uploaded.

    ``ambiguous`` is True when no response was received or a gateway
    answered, so the server may or may not have applied the change.
    """

    release_id: int
    message: str
    ambiguous: bool


WorkflowFailure = (
    PreconditionFailure
    | ApiFailure
    | ReleaseAlreadyActive
    | BuildFailed
    | RevisionResolutionFailed
    | ArtifactMissing
    | UploadFailed
    | ActivationFailed
)
