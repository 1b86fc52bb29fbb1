from __future__ import annotations

import re
from dataclasses import dataclass

# Flutter app versions: MAJOR.MINOR.PATCH with an optional "+BUILD" suffix.
_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-([0-9A-Za-z.-]+))?(?:\+([0-9A-Za-z.-]+))?$"
)


@dataclass(frozen=True, slots=True)
class ReleaseVersion:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += f"-{self.prerelease}"
        if self.build:
            out += f"+{self.build}"
        return out


def parse_release_version(text: str) -> ReleaseVersion | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return ReleaseVersion(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=m.group(4),
        build=m.group(5),
    )
