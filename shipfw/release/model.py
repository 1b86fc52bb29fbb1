from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ReleasePlatform(Enum):
    ANDROID = "android"
    IOS = "ios"

    def __str__(self) -> str:
        return self.value


class ReleaseStatus(Enum):
    """Lifecycle of a release on one platform. Only draft -> active is allowed."""

    DRAFT = "draft"
    ACTIVE = "active"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class App:
    app_id: str
    display_name: str


def _no_statuses() -> dict[ReleasePlatform, ReleaseStatus]:
    return {}


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    app_id: str
    version: str
    flutter_revision: str
    platform_statuses: dict[ReleasePlatform, ReleaseStatus] = field(default_factory=_no_statuses)

    def status_for(self, platform: ReleasePlatform) -> ReleaseStatus:
        # A platform the server has no entry for has never been activated.
        return self.platform_statuses.get(platform, ReleaseStatus.DRAFT)

    def is_active_for(self, platform: ReleasePlatform) -> bool:
        return self.status_for(platform) == ReleaseStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class BuildOutput:
    """Location of a finished build.

    Attributes:
        platform: Platform the build targets
        framework_dir: build/<platform>/framework/Release
        artifact_path: The bundle uploaded for the release (App.xcframework)
    """

    platform: ReleasePlatform
    framework_dir: Path
    artifact_path: Path


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    """What the operator is asked to confirm."""

    app: App
    version: str
    platform: ReleasePlatform
