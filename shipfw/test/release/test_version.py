"""Tests for shipfw.release.version module."""

from __future__ import annotations

import pytest

from shipfw.release.version import ReleaseVersion, parse_release_version


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.0.0", ReleaseVersion(1, 0, 0)),
        ("2.10.3+42", ReleaseVersion(2, 10, 3, build="42")),
        ("1.0.0-beta.1", ReleaseVersion(1, 0, 0, prerelease="beta.1")),
        ("1.0.0-rc.1+5", ReleaseVersion(1, 0, 0, prerelease="rc.1", build="5")),
        (" 3.2.1 ", ReleaseVersion(3, 2, 1)),
    ],
)
def test_parse_valid(text: str, expected: ReleaseVersion) -> None:
    assert parse_release_version(text) == expected


@pytest.mark.parametrize("text", ["", "1.0", "v1.0.0", "01.0.0", "1.0.0+", "latest"])
def test_parse_invalid(text: str) -> None:
    assert parse_release_version(text) is None


def test_str_round_trips_text() -> None:
    assert str(ReleaseVersion(1, 2, 3, prerelease="rc.1", build="9")) == "1.2.3-rc.1+9"
