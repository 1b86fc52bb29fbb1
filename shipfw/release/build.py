"""Drive the flutter build and record the toolchain revision.

Build outputs land in a fixed layout under the project root::

    build/<platform>/framework/Release/App.xcframework

so the publisher finds the artifact from the platform name alone.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from shipfw.core.project import Project
from shipfw.core.result import Err, Ok, Result
from shipfw.git.repository import Repository
from shipfw.platform.process import ProcessError
from shipfw.platform.process import run as run_process
from shipfw.release.errors import BuildFailed, RevisionResolutionFailed
from shipfw.release.model import BuildOutput, ReleasePlatform

RunProcess = Callable[..., Result[str, ProcessError]]

FRAMEWORK_NAME = "App.xcframework"


class BuildCoordinator:
    def __init__(
        self,
        *,
        project_root: Path,
        flutter_dir: Path,
        run: RunProcess = run_process,
    ) -> None:
        self._project = Project(project_root)
        self._flutter_dir = flutter_dir
        self._run = run

    @property
    def flutter_executable(self) -> Path:
        return self._flutter_dir / "bin" / "flutter"

    def output_for(self, platform: ReleasePlatform) -> BuildOutput:
        framework_dir = self._project.build_dir / platform.value / "framework" / "Release"
        return BuildOutput(
            platform=platform,
            framework_dir=framework_dir,
            artifact_path=framework_dir / FRAMEWORK_NAME,
        )

    def build(self, platform: ReleasePlatform) -> Result[BuildOutput, BuildFailed]:
        """Build the release framework; blocks until the toolchain exits."""
        if platform != ReleasePlatform.IOS:
            return Err(BuildFailed(cause=f"framework builds are not supported for {platform}"))

        cmd = [
            str(self.flutter_executable),
            "build",
            "ios-framework",
            "--no-debug",
            "--no-profile",
        ]
        result = self._run(cmd, cwd=self._project.root)
        if isinstance(result, Err):
            return Err(BuildFailed(cause=result.error.diagnostic))
        return Ok(self.output_for(platform))

    def resolve_toolchain_revision(self) -> Result[str, RevisionResolutionFailed]:
        result = Repository(self._flutter_dir).head_revision()
        if isinstance(result, Err):
            return Err(
                RevisionResolutionFailed(
                    message=f"Unable to determine flutter revision: {result.error.message}"
                )
            )
        return result
