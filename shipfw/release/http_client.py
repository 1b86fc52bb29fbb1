"""HTTP implementation of ``CodePushClient``.

Endpoints (relative to ``base_url``)::

    GET   /api/v1/apps/{app_id}
    GET   /api/v1/apps/{app_id}/releases
    POST  /api/v1/apps/{app_id}/releases
    POST  /api/v1/apps/{app_id}/releases/{release_id}/artifacts  -> {"url": upload_url}
    PUT   {upload_url}                                             (artifact bytes)
    PATCH /api/v1/apps/{app_id}/releases/{release_id}

Every call is attempted once. A transport failure (timeout, refused
connection, dropped response) is reported with ``no_response=True``.
"""

from __future__ import annotations

import hashlib
import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

from shipfw import __version__
from shipfw.core.result import Err, Ok, Result
from shipfw.core.structured import StrDict, as_obj_list, as_str_dict, get_int, get_str, get_table
from shipfw.release.api import ApiError
from shipfw.release.model import App, Release, ReleasePlatform, ReleaseStatus

__all__ = ["HttpCodePushClient", "parse_release"]

_CHUNK_SIZE = 1024 * 1024


class HttpCodePushClient:
    """Code push API client over urllib."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        timeout: float = 60.0,
        user_agent: str = f"shipfw/{__version__}",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    # -- CodePushClient -------------------------------------------------

    def get_app(self, app_id: str) -> Result[App, ApiError]:
        operation = "get app"
        result = self._json("GET", self._app_url(app_id), operation=operation)
        if isinstance(result, Err):
            return result
        data = as_str_dict(result.value)
        display_name = get_str(data, "display_name") if data is not None else None
        if data is None or display_name is None:
            return Err(ApiError(operation, 0, "malformed app payload"))
        return Ok(App(app_id=get_str(data, "app_id") or app_id, display_name=display_name))

    def get_release(self, app_id: str, version: str) -> Result[Release | None, ApiError]:
        operation = "get releases"
        result = self._json("GET", f"{self._app_url(app_id)}/releases", operation=operation)
        if isinstance(result, Err):
            return result
        items = as_obj_list(result.value)
        if items is None:
            return Err(ApiError(operation, 0, "expected a JSON list of releases"))
        for item in items:
            data = as_str_dict(item)
            if data is None or get_str(data, "version") != version:
                continue
            release = parse_release(data)
            if release is None:
                return Err(ApiError(operation, 0, f"malformed payload for release {version}"))
            return Ok(release)
        return Ok(None)

    def create_release(
        self,
        app_id: str,
        version: str,
        flutter_revision: str,
        platform: ReleasePlatform,
    ) -> Result[Release, ApiError]:
        operation = "create release"
        body = {
            "version": version,
            "flutter_revision": flutter_revision,
            "platform": platform.value,
        }
        result = self._json(
            "POST", f"{self._app_url(app_id)}/releases", operation=operation, body=body
        )
        if isinstance(result, Err):
            return result
        release = parse_release(result.value)
        if release is None:
            return Err(ApiError(operation, 0, "malformed release payload"))
        return Ok(release)

    def upload_artifact(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        arch: str,
        path: Path,
    ) -> Result[None, ApiError]:
        operation = "upload artifact"
        try:
            size = path.stat().st_size
            digest = _sha256_file(path)
        except OSError as e:
            return Err(ApiError(operation, 0, f"cannot read {path}: {e}"))

        body = {"arch": arch, "platform": platform.value, "hash": digest, "size": size}
        created = self._json(
            "POST",
            f"{self._app_url(app_id)}/releases/{release_id}/artifacts",
            operation=operation,
            body=body,
        )
        if isinstance(created, Err):
            return created
        data = as_str_dict(created.value)
        upload_url = get_str(data, "url") if data is not None else None
        if upload_url is None:
            return Err(ApiError(operation, 0, "server did not return an upload url"))

        try:
            payload = path.read_bytes()
        except OSError as e:
            return Err(ApiError(operation, 0, f"cannot read {path}: {e}"))

        # The upload URL is pre-signed: no bearer token.
        sent = self._send(
            "PUT",
            upload_url,
            operation=operation,
            data=payload,
            headers={"Content-Type": "application/octet-stream"},
            authenticated=False,
        )
        if isinstance(sent, Err):
            return sent
        return Ok(None)

    def update_release_status(
        self,
        app_id: str,
        release_id: int,
        platform: ReleasePlatform,
        status: ReleaseStatus,
    ) -> Result[None, ApiError]:
        operation = "update release status"
        # Any 2xx is success; the body is not inspected.
        result = self._call(
            "PATCH",
            f"{self._app_url(app_id)}/releases/{release_id}",
            operation=operation,
            body={"status": status.value, "platform": platform.value},
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    # -- transport ------------------------------------------------------

    def _app_url(self, app_id: str) -> str:
        return f"{self.base_url}/api/v1/apps/{urllib.parse.quote(app_id, safe='')}"

    def _call(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        body: StrDict | None = None,
    ) -> Result[bytes, ApiError]:
        data = None
        headers = {"Accept": "application/json"}
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        return self._send(method, url, operation=operation, data=data, headers=headers)

    def _json(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        body: StrDict | None = None,
    ) -> Result[object, ApiError]:
        result = self._call(method, url, operation=operation, body=body)
        if isinstance(result, Err):
            return result
        if not result.value:
            return Ok(None)
        try:
            return Ok(json.loads(result.value.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(ApiError(operation, 0, f"JSON parse error: {e}"))

    def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        data: bytes | None,
        headers: dict[str, str],
        authenticated: bool = True,
    ) -> Result[bytes, ApiError]:
        all_headers = {"User-Agent": self.user_agent, **headers}
        if authenticated:
            all_headers["Authorization"] = f"Bearer {self._token}"
        req = urllib.request.Request(url, data=data, headers=all_headers, method=method)
        try:
            with urllib.request.urlopen(
                req, timeout=self.timeout, context=self._ssl_context
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(ApiError(operation, e.code, _error_message(e)))
        except urllib.error.URLError as e:
            return Err(ApiError(operation, 0, str(e.reason), no_response=True))
        except TimeoutError:
            return Err(ApiError(operation, 0, "request timed out", no_response=True))
        except OSError as e:
            return Err(ApiError(operation, 0, str(e), no_response=True))


def parse_release(obj: object) -> Release | None:
    """Decode a release payload; None when required fields are missing.

    Platform keys the client does not know about are skipped.
    """
    data = as_str_dict(obj)
    if data is None:
        return None
    release_id = get_int(data, "id")
    app_id = get_str(data, "app_id")
    version = get_str(data, "version")
    if release_id is None or app_id is None or version is None:
        return None

    statuses: dict[ReleasePlatform, ReleaseStatus] = {}
    for key, value in (get_table(data, "platform_statuses") or {}).items():
        try:
            statuses[ReleasePlatform(key)] = ReleaseStatus(value)
        except ValueError:
            continue

    return Release(
        id=release_id,
        app_id=app_id,
        version=version,
        flutter_revision=get_str(data, "flutter_revision") or "",
        platform_statuses=statuses,
    )


def _error_message(error: urllib.error.HTTPError) -> str:
    """Prefer the API's {"message": ...} body over the HTTP reason phrase."""
    try:
        body = error.read()
    except OSError:
        body = b""
    try:
        data = as_str_dict(json.loads(body.decode("utf-8"))) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = None
    if data is not None:
        message = get_str(data, "message")
        if message:
            return message
    return str(error.reason)


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()
