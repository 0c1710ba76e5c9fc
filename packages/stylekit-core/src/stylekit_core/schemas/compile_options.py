"""Compile option models for stylekit.

This module defines:
- OutputStyle: CSS output style accepted by the Sass transformer
- CompileOptions: Immutable per-run snapshot of transformer options,
  project root and the optional dependency index
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class OutputStyle(str, Enum):
    """CSS output style.

    Values:
        COMPRESSED: Minified output, no whitespace.
        COMPACT: One rule per line.
        NESTED: Indentation follows the source nesting.
        EXPANDED: One declaration per line (default).

    Parsing is case-insensitive, so settings written as "Expanded"
    resolve to ``OutputStyle.EXPANDED``.
    """

    COMPRESSED = "compressed"
    COMPACT = "compact"
    NESTED = "nested"
    EXPANDED = "expanded"

    @classmethod
    def _missing_(cls, value: object) -> OutputStyle | None:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class CompileOptions(BaseModel):
    """Options for one compile run.

    Attributes:
        output_style: CSS output style passed to the transformer.
        precision: Number of digits after the decimal point in emitted values.
        include_paths: Ordered load paths for @import/@use resolution.
        project_root: Root that dependency index entries and inclusion
            rules are relative to. None when the file is outside any project.
        dependency_index: Mapping from project-relative partial path to the
            project-relative top-level files that depend on it.

    Example:
        >>> options = CompileOptions(
        ...     output_style=OutputStyle.COMPRESSED,
        ...     precision=3,
        ...     project_root=Path("/work/site"),
        ...     dependency_index={"scss/_vars.scss": ("scss/app.scss",)},
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_style: OutputStyle = Field(
        default=OutputStyle.EXPANDED,
        description="CSS output style",
    )
    precision: int = Field(
        default=5,
        ge=0,
        description="Digits after the decimal point in emitted numbers",
    )
    include_paths: tuple[str, ...] = Field(
        default=(),
        description="Load paths searched by the transformer",
    )
    project_root: Path | None = Field(
        default=None,
        description="Project root for relative lookups",
    )
    dependency_index: dict[str, tuple[str, ...]] | None = Field(
        default=None,
        description="Partial path -> dependent top-level paths (project-relative)",
    )
