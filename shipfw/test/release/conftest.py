from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from shipfw.core.result import Err, Ok, Result
from shipfw.output.console import MockConsole
from shipfw.output.prompt import ScriptedConfirmer
from shipfw.platform.detection import Platform
from shipfw.release.api import FakeCodePushClient
from shipfw.release.auth import Credentials
from shipfw.release.errors import BuildFailed, RevisionResolutionFailed
from shipfw.release.model import App, BuildOutput, ReleasePlatform
from shipfw.release.preconditions import PreconditionRequirements
from shipfw.release.workflow import WorkflowConfig, WorkflowOrchestrator

APP_ID = "app-123"
REVISION = "abc123def456"


def write_project(root: Path, *, app_id: str = APP_ID) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "shorebird.yaml").write_text(f"app_id: {app_id}\n", encoding="utf-8")
    (root / "pubspec.yaml").write_text(
        "name: demo_module\nflutter:\n  assets:\n    - shorebird.yaml\n",
        encoding="utf-8",
    )
    return root


@dataclass
class FakeBuilder:
    """Builder that writes a tiny xcframework instead of running flutter."""

    project_root: Path
    calls: list[str]
    build_error: str | None = None
    revision_error: str | None = None

    def build(self, platform: ReleasePlatform) -> Result[BuildOutput, BuildFailed]:
        self.calls.append("build")
        if self.build_error is not None:
            return Err(BuildFailed(cause=self.build_error))
        framework_dir = self.project_root / "build" / platform.value / "framework" / "Release"
        artifact = framework_dir / "App.xcframework"
        (artifact / "ios-arm64").mkdir(parents=True, exist_ok=True)
        (artifact / "Info.plist").write_text("<plist/>", encoding="utf-8")
        return Ok(BuildOutput(platform=platform, framework_dir=framework_dir, artifact_path=artifact))

    def resolve_toolchain_revision(self) -> Result[str, RevisionResolutionFailed]:
        self.calls.append("resolve_toolchain_revision")
        if self.revision_error is not None:
            return Err(RevisionResolutionFailed(message=self.revision_error))
        return Ok(REVISION)


@dataclass
class Harness:
    project_root: Path
    client: FakeCodePushClient
    builder: FakeBuilder
    console: MockConsole
    confirmer: ScriptedConfirmer

    @property
    def calls(self) -> list[str]:
        """Builder and API calls, interleaved in the order they happened."""
        return self.client.calls

    def orchestrator(
        self,
        *,
        version: str = "1.0.0",
        force: bool = True,
        host: Platform = Platform.MACOS,
        credentials: Credentials | None = Credentials(token="t0ken"),
        requirements: PreconditionRequirements | None = None,
    ) -> WorkflowOrchestrator:
        return WorkflowOrchestrator.create(
            config=WorkflowConfig(
                project_root=self.project_root,
                release_version=version,
                platform=ReleasePlatform.IOS,
                force=force,
            ),
            client=self.client,
            builder=self.builder,
            confirmer=self.confirmer,
            console=self.console,
            host=host,
            credentials=credentials,
            requirements=requirements
            or PreconditionRequirements(
                supported_platforms=(Platform.MACOS,),
                check_authenticated=True,
                check_initialized=True,
            ),
        )

    def remote_writes(self) -> list[str]:
        writes = {"create_release", "upload_artifact", "update_release_status"}
        return [c for c in self.client.calls if c in writes]


@pytest.fixture
def harness(tmp_path: Path) -> Harness:
    root = write_project(tmp_path / "module")
    client = FakeCodePushClient(apps={APP_ID: App(app_id=APP_ID, display_name="Demo")})
    return Harness(
        project_root=root,
        client=client,
        builder=FakeBuilder(project_root=root, calls=client.calls),
        console=MockConsole(),
        confirmer=ScriptedConfirmer(),
    )


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory writing an initialized Flutter module under tmp_path."""

    def _make(name: str = "module", *, app_id: str = APP_ID) -> Path:
        return write_project(tmp_path / name, app_id=app_id)

    return _make
