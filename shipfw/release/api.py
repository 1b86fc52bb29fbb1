"""Remote release API contract.

``CodePushClient`` is what the workflow talks to. Each method is a single
remote call: no retries, no batching. The production implementation is
``shipfw.release.http_client.HttpCodePushClient``; ``FakeCodePushClient``
keeps releases in memory and records every call for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Protocol, runtime_checkable

from shipfw.core.result import Err, Ok, Result
from shipfw.release.model import App, Release, ReleasePlatform, ReleaseStatus

__all__ = [
    "ApiError",
    "CodePushClient",
    "FakeCodePushClient",
]


# Gateway answers: the upstream may or may not have applied the request.
_GATEWAY_STATUSES = frozenset({502, 503, 504})


@dataclass(frozen=True, slots=True)
class ApiError:
    """A failed API call.

    Attributes:
        operation: Logical operation name (e.g. "create release")
        status: HTTP status code, 0 when there is none
        message: Server or transport error message
        no_response: The request was sent but no HTTP response came back
    """

    operation: str
    status: int
    message: str
    no_response: bool = False

    @property
    def ambiguous(self) -> bool:
        """True if the request may have been applied without us seeing the outcome."""
        return self.no_response or self.status in _GATEWAY_STATUSES

    def __str__(self) -> str:
        if self.status:
            return f"{self.operation}: HTTP {self.status}: {self.message}"
        return f"{self.operation}: {self.message}"


@runtime_checkable
class CodePushClient(Protocol):
    def get_app(self, app_id: str) -> Result[App, ApiError]: ...

    def get_release(self, app_id: str, version: str) -> Result[Release | None, ApiError]:
        """The release for ``version``, or None if it does not exist."""
        ...

    def create_release(
        self,
        app_id: str,
        version: str,
        flutter_revision: str,
        platform: ReleasePlatform,
    ) -> Result[Release, ApiError]:
        """Create a draft release."""
        ...

    def upload_artifact(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        arch: str,
        path: Path,
    ) -> Result[None, ApiError]: ...

    def update_release_status(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        status: ReleaseStatus,
    ) -> Result[None, ApiError]: ...


@dataclass
class FakeCodePushClient:
    """In-memory client for tests.

    Failures are injected per operation name through ``failures``; the
    operation names are the method names ("create_release", ...).

    Usage:
        client = FakeCodePushClient(apps={"app-1": App("app-1", "Demo")})
        client.failures["upload_artifact"] = ApiError("upload artifact", 500, "boom")
    """

    apps: dict[str, App] = field(default_factory=dict)
    releases: list[Release] = field(default_factory=list)
    failures: dict[str, ApiError] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    uploads: list[tuple[int, ReleasePlatform, str, Path]] = field(default_factory=list)
    status_updates: list[tuple[int, ReleasePlatform, ReleaseStatus]] = field(default_factory=list)

    def _fail(self, operation: str) -> ApiError | None:
        self.calls.append(operation)
        return self.failures.get(operation)

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    def get_app(self, app_id: str) -> Result[App, ApiError]:
        if (error := self._fail("get_app")) is not None:
            return Err(error)
        app = self.apps.get(app_id)
        if app is None:
            return Err(ApiError("get app", 404, f"app {app_id} not found"))
        return Ok(app)

    def get_release(self, app_id: str, version: str) -> Result[Release | None, ApiError]:
        if (error := self._fail("get_release")) is not None:
            return Err(error)
        for release in self.releases:
            if release.app_id == app_id and release.version == version:
                return Ok(release)
        return Ok(None)

    def create_release(
        self,
        app_id: str,
        version: str,
        flutter_revision: str,
        platform: ReleasePlatform,
    ) -> Result[Release, ApiError]:
        if (error := self._fail("create_release")) is not None:
            return Err(error)
        if any(r.app_id == app_id and r.version == version for r in self.releases):
            return Err(ApiError("create release", 409, f"release {version} already exists"))
        release = Release(
            id=len(self.releases) + 1,
            app_id=app_id,
            version=version,
            flutter_revision=flutter_revision,
            platform_statuses={platform: ReleaseStatus.DRAFT},
        )
        self.releases.append(release)
        return Ok(release)

    def upload_artifact(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        arch: str,
        path: Path,
    ) -> Result[None, ApiError]:
        if (error := self._fail("upload_artifact")) is not None:
            return Err(error)
        self.uploads.append((release_id, platform, arch, path))
        return Ok(None)

    def update_release_status(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        status: ReleaseStatus,
    ) -> Result[None, ApiError]:
        if (error := self._fail("update_release_status")) is not None:
            return Err(error)
        for i, release in enumerate(self.releases):
            if release.id == release_id:
                statuses = {**release.platform_statuses, platform: status}
                self.releases[i] = replace(release, platform_statuses=statuses)
                break
        self.status_updates.append((release_id, platform, status))
        return Ok(None)
