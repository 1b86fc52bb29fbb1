"""The single place that activates a release."""

from __future__ import annotations

from shipfw.core.result import Err, Ok, Result
from shipfw.release.api import CodePushClient
from shipfw.release.errors import ActivationFailed
from shipfw.release.model import ReleasePlatform, ReleaseStatus


class StatusTransitioner:
    def __init__(self, client: CodePushClient) -> None:
        self._client = client

    def activate(
        self, app_id: str, release_id: int, platform: ReleasePlatform
    ) -> Result[None, ActivationFailed]:
        """Flip the release to active for ``platform``.

        Called once per workflow run and never retried; an ambiguous failure
        is returned as-is for the operator to verify.
        """
        result = self._client.update_release_status(
            app_id=app_id,
            release_id=release_id,
            platform=platform,
            status=ReleaseStatus.ACTIVE,
        )
        if isinstance(result, Err):
            return Err(
                ActivationFailed(
                    release_id=release_id,
                    message=str(result.error),
                    ambiguous=result.error.ambiguous,
                )
            )
        return Ok(None)
