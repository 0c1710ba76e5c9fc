"""User and project settings for stylekit.

Settings mirror the keys users already write in ``package.json`` under
``"sass"`` and ``"autoprefixer"`` (camelCase), and the same keys in a
``stylekit.yaml`` file. Snake_case field names are accepted as well.

This module defines:
- SassSettings: Transformer settings and the optional dependency index
- AutoprefixerSettings: Post-processing settings and path rules
- StylekitSettings: Both sections, with YAML loading and overlay merging
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from stylekit_core.schemas.compile_options import CompileOptions, OutputStyle
from stylekit_core.schemas.prefix_options import DEFAULT_BROWSER_TARGETS, PrefixOptions

SECTION_NAMES = ("sass", "autoprefixer")


class SassSettings(BaseModel):
    """Sass section of the settings.

    Attributes:
        compile_on_save: Compile automatically when a file is saved.
        output_style: CSS output style.
        precision: Digits after the decimal point.
        include_paths: Load paths for the transformer.
        dependent_list: Optional dependency index (partial -> dependents).
    """

    # External files may carry keys for other tools
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    compile_on_save: bool = Field(default=True, alias="compileOnSave")
    output_style: OutputStyle = Field(default=OutputStyle.EXPANDED, alias="outputStyle")
    precision: int = Field(default=5, ge=0)
    include_paths: tuple[str, ...] = Field(default=(), alias="includePaths")
    dependent_list: dict[str, tuple[str, ...]] | None = Field(
        default=None, alias="dependentList"
    )


class AutoprefixerSettings(BaseModel):
    """Autoprefixer section of the settings.

    ``execute`` and ``ignore`` are path prefixes relative to the project
    root; see :func:`stylekit_core.compiler.inclusion_policy.applies`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    enabled: bool = False
    cascade: bool = False
    remove: bool = True
    browsers: tuple[str, ...] = DEFAULT_BROWSER_TARGETS
    execute: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()


class StylekitSettings(BaseModel):
    """Complete stylekit settings.

    Example:
        >>> settings = StylekitSettings.from_yaml("~/.config/stylekit.yaml")
        >>> project = settings.merged_with({"sass": {"outputStyle": "Compressed"}})
        >>> project.sass.output_style
        <OutputStyle.COMPRESSED: 'compressed'>
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sass: SassSettings = Field(default_factory=SassSettings)
    autoprefixer: AutoprefixerSettings = Field(default_factory=AutoprefixerSettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> StylekitSettings:
        """Load and validate settings from a YAML file.

        Args:
            path: Path to the settings file.

        Returns:
            Validated StylekitSettings instance. An empty file yields defaults.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If validation fails.
        """
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            data: dict[str, Any] | None = yaml.safe_load(f)

        return cls.model_validate(data or {})

    def merged_with(self, overrides: Mapping[str, Any]) -> StylekitSettings:
        """Overlay per-section overrides onto these settings.

        Only keys present in an override section replace the current
        values; everything else is kept (a shallow, per-section merge).

        Args:
            overrides: Mapping with optional "sass" and "autoprefixer" sections.

        Returns:
            New StylekitSettings with the overrides applied.

        Raises:
            pydantic.ValidationError: If an override value is invalid.
        """
        sass = _overlay(self.sass, overrides.get("sass"))
        autoprefixer = _overlay(self.autoprefixer, overrides.get("autoprefixer"))
        return StylekitSettings(sass=sass, autoprefixer=autoprefixer)

    def to_compile_options(self, project_root: Path | None = None) -> CompileOptions:
        """Build the per-run CompileOptions snapshot."""
        return CompileOptions(
            output_style=self.sass.output_style,
            precision=self.sass.precision,
            include_paths=self.sass.include_paths,
            project_root=project_root,
            dependency_index=self.sass.dependent_list,
        )

    def to_prefix_options(self) -> PrefixOptions:
        """Build the per-run PrefixOptions snapshot."""
        ap = self.autoprefixer
        return PrefixOptions(
            enabled=ap.enabled,
            cascade=ap.cascade,
            remove=ap.remove,
            browser_targets=ap.browsers,
            include_rules=ap.execute,
            exclude_rules=ap.ignore,
        )


def _overlay(base: BaseModel, section: Any) -> Any:
    if not section:
        return base
    if not isinstance(section, Mapping):
        msg = f"settings section must be a mapping, got {type(section).__name__}"
        raise TypeError(msg)
    parsed = type(base).model_validate(dict(section))
    update = {name: getattr(parsed, name) for name in parsed.model_fields_set}
    return base.model_copy(update=update)
