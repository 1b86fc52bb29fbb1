"""Find or create the release record for an (app, version) pair.

``lookup`` is read-only and runs before the build so that an already
published version fails fast. ``resolve`` runs after the build and the
operator's confirmation and only then creates the release, which keeps
remote writes for the very end.

Idempotence is best-effort: lookup-then-create cannot stop two concurrent
invocations from both creating. The server's uniqueness constraint on
(app, version) is the real arbiter; a create rejected by it surfaces as an
``ApiFailure`` and re-running the workflow picks the winner's draft up.
"""

from __future__ import annotations

from shipfw.core.result import Err, Ok, Result
from shipfw.release.api import ApiError, CodePushClient
from shipfw.release.errors import ApiFailure, ReleaseAlreadyActive
from shipfw.release.model import Release, ReleasePlatform

_Key = tuple[str, str]


def _api_failure(error: ApiError) -> ApiFailure:
    return ApiFailure(operation=error.operation, message=error.message, status=error.status)


class ReleaseResolver:
    def __init__(self, client: CodePushClient) -> None:
        self._client = client
        # Last known answer per (app_id, version); None records "does not exist".
        self._known: dict[_Key, Release | None] = {}

    def lookup(self, app_id: str, version: str) -> Result[Release | None, ApiFailure]:
        result = self._client.get_release(app_id, version).map_err(_api_failure)
        if isinstance(result, Ok):
            self._known[(app_id, version)] = result.value
        return result

    def ensure_not_active(
        self, release: Release, platform: ReleasePlatform
    ) -> Result[None, ReleaseAlreadyActive]:
        if release.is_active_for(platform):
            return Err(ReleaseAlreadyActive(version=release.version, platform=platform))
        return Ok(None)

    def resolve(
        self,
        app_id: str,
        version: str,
        platform: ReleasePlatform,
        flutter_revision: str,
    ) -> Result[Release, ApiFailure | ReleaseAlreadyActive]:
        """Return the existing draft release, creating one only if none exists."""
        key = (app_id, version)
        if key not in self._known:
            looked_up = self.lookup(app_id, version)
            if isinstance(looked_up, Err):
                return looked_up

        existing = self._known[key]
        if existing is not None:
            not_active = self.ensure_not_active(existing, platform)
            if isinstance(not_active, Err):
                return not_active
            return Ok(existing)

        created = self._client.create_release(
            app_id=app_id,
            version=version,
            flutter_revision=flutter_revision,
            platform=platform,
        )
        if isinstance(created, Err):
            return created.map_err(_api_failure)
        self._known[key] = created.value
        return created
