"""Project discovery and per-project settings overrides.

A project is one of the configured project directories that contains the
file being compiled. Its ``package.json`` (keys ``"sass"`` and
``"autoprefixer"``) and ``stylekit.yaml`` (same keys) override the user
settings for files inside it; ``stylekit.yaml`` wins over ``package.json``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from stylekit_core.errors import ConfigurationError
from stylekit_core.schemas import CompileOptions, PrefixOptions, StylekitSettings
from stylekit_core.schemas.settings import SECTION_NAMES

logger = structlog.get_logger(__name__)

PACKAGE_JSON_FILE_NAME = "package.json"
PROJECT_CONFIG_FILE_NAME = "stylekit.yaml"

# Environment variable pointing at the user settings file
SETTINGS_ENV_VAR = "STYLEKIT_SETTINGS"


@dataclass(frozen=True)
class ProjectContext:
    """Settings resolved for one file.

    Attributes:
        project_root: Containing project directory, or None.
        settings: User settings with project overrides applied.
    """

    project_root: Path | None
    settings: StylekitSettings

    def compile_options(self) -> CompileOptions:
        return self.settings.to_compile_options(self.project_root)

    def prefix_options(self) -> PrefixOptions:
        return self.settings.to_prefix_options()


def find_project_root(file_path: Path | str, project_paths: Iterable[Path | str]) -> Path | None:
    """Return the project directory containing ``file_path``.

    Candidates are the project paths that are a string prefix of the file
    path; the lexicographically greatest candidate wins, which picks the
    innermost of nested projects.
    """
    file_str = os.fspath(file_path)
    candidates = sorted(
        os.fspath(path) for path in project_paths if file_str.startswith(os.fspath(path))
    )
    if not candidates:
        return None
    return Path(candidates[-1])


def load_project_overrides(project_root: Path) -> dict[str, dict[str, Any]]:
    """Read the override sections from a project's config files.

    Missing files contribute nothing. In ``package.json`` a ``"sass"`` or
    ``"autoprefixer"`` key that is not an object belongs to another tool
    (e.g., a ``"sass": "scss/main.scss"`` entry point) and is skipped.

    Raises:
        ConfigurationError: If a config file cannot be parsed or a
            ``stylekit.yaml`` section is not a mapping.
    """
    overrides: dict[str, dict[str, Any]] = {}
    for data, source in (
        (_read_package_json(project_root / PACKAGE_JSON_FILE_NAME), PACKAGE_JSON_FILE_NAME),
        (_read_project_yaml(project_root / PROJECT_CONFIG_FILE_NAME), PROJECT_CONFIG_FILE_NAME),
    ):
        if not data:
            continue
        for section in SECTION_NAMES:
            values = data.get(section)
            if values is None:
                continue
            if not isinstance(values, dict):
                if source == PACKAGE_JSON_FILE_NAME:
                    logger.debug(
                        "package_json_section_ignored",
                        section=section,
                        value_type=type(values).__name__,
                    )
                    continue
                raise ConfigurationError(
                    "Parse config error",
                    file_path=str(project_root / source),
                    field_path=section,
                    internal_details=f"expected an object, got {type(values).__name__}",
                )
            overrides.setdefault(section, {}).update(values)
    return overrides


def resolve_project(
    file_path: Path | str,
    settings: StylekitSettings,
    project_paths: Iterable[Path | str] = (),
    overrides: Mapping[str, Any] | None = None,
) -> ProjectContext:
    """Resolve the project root and effective settings for ``file_path``.

    Precedence, lowest to highest: ``settings``, the project's
    ``package.json``, the project's ``stylekit.yaml``, ``overrides``.

    Args:
        file_path: File being compiled.
        settings: User-level settings.
        project_paths: Candidate project directories.
        overrides: Per-request overrides (e.g., command line flags).

    Raises:
        ConfigurationError: If project overrides are unreadable or invalid.
    """
    project_root = find_project_root(file_path, project_paths)
    project_overrides = load_project_overrides(project_root) if project_root else {}

    merged = settings
    for layer, source in (
        (project_overrides, str(project_root)),
        (overrides or {}, "command line"),
    ):
        if not layer:
            continue
        try:
            merged = merged.merged_with(layer)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            raise ConfigurationError(
                "Invalid project settings",
                file_path=source,
                field_path=".".join(str(part) for part in first["loc"]),
                internal_details=str(exc),
            ) from exc

    logger.debug(
        "project_resolved",
        project_root=str(project_root) if project_root else None,
        sections=sorted(project_overrides),
    )
    return ProjectContext(project_root=project_root, settings=merged)


def _read_package_json(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(
            "Parse config error",
            file_path=str(path),
            internal_details=str(exc),
        ) from exc
    return data if isinstance(data, dict) else None


def _read_project_yaml(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            "Parse config error",
            file_path=str(path),
            internal_details=str(exc),
        ) from exc
    return data if isinstance(data, dict) else None


def default_settings_path() -> Path:
    """Return the user settings path (``STYLEKIT_SETTINGS`` or the XDG default)."""
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "stylekit" / "settings.yaml"


def load_user_settings(path: Path | str | None = None) -> StylekitSettings:
    """Load user-level settings.

    Args:
        path: Explicit settings file. If None, uses :func:`default_settings_path`
            and falls back to built-in defaults when that file does not exist.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigurationError: If the file cannot be parsed or validated.
    """
    if path is None:
        path = default_settings_path()
        if not path.is_file():
            return StylekitSettings()

    try:
        return StylekitSettings.from_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            "Parse config error", file_path=str(path), internal_details=str(exc)
        ) from exc
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise ConfigurationError(
            "Invalid settings",
            file_path=str(path),
            field_path=".".join(str(part) for part in first["loc"]),
            internal_details=str(exc),
        ) from exc
