"""Upload the built framework for a release.

The xcframework is a directory, so it is zipped into a temporary archive
first; the archive is removed whether or not the upload succeeds.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from shipfw.core.result import Err, Ok, Result
from shipfw.release.api import CodePushClient
from shipfw.release.errors import ArtifactMissing, UploadFailed
from shipfw.release.model import BuildOutput

XCFRAMEWORK_ARCH = "xcframework"


class ArtifactPublisher:
    def __init__(self, client: CodePushClient) -> None:
        self._client = client

    def publish(
        self,
        app_id: str,
        release_id: int,
        build_output: BuildOutput,
    ) -> Result[None, ArtifactMissing | UploadFailed]:
        artifact = build_output.artifact_path
        if not artifact.exists():
            return Err(ArtifactMissing(path=artifact))

        with tempfile.TemporaryDirectory(prefix="shipfw-") as tmp:
            try:
                archive = _zip_artifact(artifact, Path(tmp) / f"{artifact.name}.zip")
            except OSError as e:
                return Err(UploadFailed(release_id=release_id, message=f"cannot archive: {e}"))

            result = self._client.upload_artifact(
                app_id=app_id,
                release_id=release_id,
                platform=build_output.platform,
                arch=XCFRAMEWORK_ARCH,
                path=archive,
            )
        if isinstance(result, Err):
            return Err(UploadFailed(release_id=release_id, message=str(result.error)))
        return Ok(None)


def _zip_artifact(artifact: Path, zip_path: Path) -> Path:
    """Zip ``artifact`` (file or directory) keeping its own name as the top-level entry."""
    files = [artifact] if artifact.is_file() else sorted(p for p in artifact.rglob("*") if p.is_file())
    # strict_timestamps=False: toolchains may emit files with pre-1980 mtimes.
    with ZipFile(zip_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for src in files:
            zf.write(src, arcname=src.relative_to(artifact.parent).as_posix())
    return zip_path
