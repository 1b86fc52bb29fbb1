"""Tests for shipfw.platform.detection module."""

from __future__ import annotations

import pytest

from shipfw.platform import detection
from shipfw.platform.detection import Platform, detect_platform


@pytest.fixture(autouse=True)
def _clear_cache():
    detect_platform.cache_clear()
    yield
    detect_platform.cache_clear()


class TestFromSysPlatform:
    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [
            ("linux", Platform.LINUX),
            ("darwin", Platform.MACOS),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
            ("msys", Platform.WINDOWS),
            ("sunos5", Platform.UNKNOWN),
            ("", Platform.UNKNOWN),
        ],
    )
    def test_mapping(self, sys_platform: str, expected: Platform) -> None:
        assert Platform.from_sys_platform(sys_platform) == expected


class TestDetectPlatform:
    def test_reads_sys_platform(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(detection.sys, "platform", "darwin")
        assert detect_platform() == Platform.MACOS
        assert detection.is_macos()
        assert not detection.is_linux()
        assert not detection.is_windows()

    def test_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(detection.sys, "platform", "darwin")
        first = detect_platform()
        monkeypatch.setattr(detection.sys, "platform", "linux")
        assert detect_platform() is first


class TestPlatform:
    def test_str_is_value(self) -> None:
        assert str(Platform.MACOS) == "macos"

    def test_display_name(self) -> None:
        assert Platform.MACOS.display_name == "macOS"
        assert Platform.UNKNOWN.display_name == "an unknown platform"
