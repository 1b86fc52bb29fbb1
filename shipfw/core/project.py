"""Flutter project detection.

A project is ready for releases when:
- ``shorebird.yaml`` exists at the project root and names an ``app_id``
- ``pubspec.yaml`` bundles ``shorebird.yaml`` under ``flutter.assets``

The updater reads the app id from the bundled asset at runtime.

``shipfw init`` establishes both through ``write_shorebird_yaml`` and
``add_shorebird_yaml_to_assets``; each is a no-op when already satisfied.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_list, get_str, get_table, is_str_dict

__all__ = [
    "PUBSPEC_YAML",
    "Project",
    "ProjectError",
    "SHOREBIRD_YAML",
]

SHOREBIRD_YAML = "shorebird.yaml"
PUBSPEC_YAML = "pubspec.yaml"

_SHOREBIRD_YAML_HEADER = """\
# Configures the updater bundled with your application.
# Check this file into version control.

# Unique identifier of your app; the updater sends it with every patch check.
"""


@dataclass(frozen=True, slots=True)
class ProjectError:
    """Project file missing, unreadable or malformed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A Flutter module checkout rooted at ``root``."""

    root: Path

    @property
    def shorebird_yaml_path(self) -> Path:
        return self.root / SHOREBIRD_YAML

    @property
    def pubspec_path(self) -> Path:
        return self.root / PUBSPEC_YAML

    @property
    def build_dir(self) -> Path:
        return self.root / "build"

    def has_shorebird_yaml(self) -> bool:
        return self.shorebird_yaml_path.is_file()

    def has_pubspec(self) -> bool:
        return self.pubspec_path.is_file()

    def pubspec_bundles_shorebird_yaml(self) -> bool:
        """True if pubspec.yaml lists shorebird.yaml in flutter.assets.

        An unreadable or malformed pubspec counts as False.
        """
        result = _load_yaml(self.pubspec_path)
        if isinstance(result, Err):
            return False
        flutter = get_table(result.value, "flutter")
        if flutter is None:
            return False
        assets = get_list(flutter, "assets") or []
        return SHOREBIRD_YAML in assets

    def is_initialized(self) -> bool:
        return self.has_shorebird_yaml() and self.pubspec_bundles_shorebird_yaml()

    def load_app_id(self) -> Result[str, ProjectError]:
        """Read ``app_id`` from shorebird.yaml."""
        result = _load_yaml(self.shorebird_yaml_path)
        if isinstance(result, Err):
            return result

        app_id = get_str(result.value, "app_id")
        if app_id is None:
            return Err(
                ProjectError(
                    f"{SHOREBIRD_YAML} has no app_id",
                    path=self.shorebird_yaml_path,
                )
            )
        return Ok(app_id)

    def write_shorebird_yaml(
        self, app_id: str, *, force: bool = False
    ) -> Result[bool, ProjectError]:
        """Create shorebird.yaml naming ``app_id``.

        Ok(False) when the file already names ``app_id``. A file naming
        anything else is only replaced with ``force``.
        """
        path = self.shorebird_yaml_path
        if path.exists():
            current = self.load_app_id()
            if isinstance(current, Ok) and current.value == app_id:
                return Ok(False)
            if not force:
                message = f"{SHOREBIRD_YAML} already exists; use --force to replace it"
                return Err(ProjectError(message, path))

        content = _SHOREBIRD_YAML_HEADER + yaml.safe_dump({"app_id": app_id}, sort_keys=False)
        return _write(path, content)

    def add_shorebird_yaml_to_assets(self) -> Result[bool, ProjectError]:
        """Append shorebird.yaml to ``flutter.assets`` in pubspec.yaml.

        Ok(False) when it is already listed; the file is then left untouched.
        Existing keys and assets keep their order. Comments in pubspec.yaml
        do not survive a rewrite.
        """
        path = self.pubspec_path
        loaded = _load_yaml(path)
        if isinstance(loaded, Err):
            return loaded
        pubspec = loaded.value

        flutter = pubspec.get("flutter") or {}
        if not is_str_dict(flutter):
            return Err(ProjectError(f"{PUBSPEC_YAML}: flutter must be a mapping", path))

        assets = flutter.get("assets") or []
        if not isinstance(assets, list):
            return Err(ProjectError(f"{PUBSPEC_YAML}: flutter.assets must be a list", path))

        if SHOREBIRD_YAML in assets:
            return Ok(False)

        pubspec["flutter"] = {**flutter, "assets": [*assets, SHOREBIRD_YAML]}
        content = yaml.safe_dump(pubspec, sort_keys=False, allow_unicode=True)
        return _write(path, content)


def _write(path: Path, content: str) -> Result[bool, ProjectError]:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        return Err(ProjectError(f"cannot write {path}: {e}", path=path))
    return Ok(True)


def _load_yaml(path: Path) -> Result[StrDict, ProjectError]:
    try:
        data: object = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ProjectError(f"{path} does not exist", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ProjectError(f"cannot read {path}: {e}", path=path))
    except yaml.YAMLError as e:
        return Err(ProjectError(f"{path.name} is not valid YAML: {e}", path=path))

    table = as_str_dict(data)
    if table is None:
        return Err(ProjectError(f"{path.name} must contain a mapping", path=path))
    return Ok(table)
