"""Tests for shipfw.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from shipfw.core.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT_SECONDS,
    Config,
    load_config,
    load_config_or_default,
)
from shipfw.core.result import Err, Ok


class TestFromDict:
    def test_empty_uses_defaults(self) -> None:
        config = Config.from_dict({})
        assert config.api.base_url == DEFAULT_API_BASE_URL
        assert config.api.timeout == DEFAULT_API_TIMEOUT_SECONDS
        assert config.flutter.dir.name == "flutter"

    def test_values(self, tmp_path: Path) -> None:
        config = Config.from_dict(
            {
                "api": {"base_url": "https://example.test/", "timeout": 5},
                "flutter": {"dir": str(tmp_path / "flutter")},
            }
        )
        assert config.api.base_url == "https://example.test"
        assert config.api.timeout == 5
        assert config.flutter.dir == tmp_path / "flutter"
        assert config.flutter.executable == tmp_path / "flutter" / "bin" / "flutter"

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="timeout"):
            Config.from_dict({"api": {"timeout": 0}})

    def test_unknown_keys_ignored(self) -> None:
        config = Config.from_dict({"telemetry": {"enabled": True}})
        assert config.api.base_url == DEFAULT_API_BASE_URL


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[api]\nbase_url = "https://staging.test"\ntimeout = 10\n')

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.api.base_url == "https://staging.test"
        assert result.value.api.timeout == 10

    def test_missing_file_is_error(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")

        assert isinstance(result, Err)
        assert "does not exist" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[api\n")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "not valid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[api]\ntimeout = -1\n")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "invalid config.toml" in result.error.message


class TestLoadConfigOrDefault:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "missing.toml")

        assert isinstance(result, Ok)
        assert result.value.api.base_url == DEFAULT_API_BASE_URL

    def test_broken_file_is_still_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("not = [valid")

        assert isinstance(load_config_or_default(path), Err)
