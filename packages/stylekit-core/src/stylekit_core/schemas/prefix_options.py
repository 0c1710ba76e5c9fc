"""Post-processing (vendor prefix) option models for stylekit."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BROWSER_TARGETS: tuple[str, ...] = (
    "> 1%",
    "last 2 versions",
    "Firefox ESR",
    "not dead",
)


class PrefixOptions(BaseModel):
    """Options controlling the Autoprefixer post-processing step.

    Attributes:
        enabled: Whether post-processing runs at all.
        cascade: Align prefixed declarations visually (Autoprefixer ``cascade``).
        remove: Remove outdated prefixes (Autoprefixer ``remove``).
        browser_targets: Browserslist queries.
        include_rules: Project-relative path prefixes that opt files in.
            Empty means every file is included.
        exclude_rules: Project-relative path prefixes that opt files out.
            Exclusion always wins over inclusion.

    Example:
        >>> PrefixOptions(enabled=True, exclude_rules=("vendor/",))
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = Field(default=False, description="Run Autoprefixer")
    cascade: bool = Field(default=False, description="Cascade prefixes")
    remove: bool = Field(default=True, description="Remove unneeded prefixes")
    browser_targets: tuple[str, ...] = Field(
        default=DEFAULT_BROWSER_TARGETS,
        description="Browserslist queries",
    )
    include_rules: tuple[str, ...] = Field(
        default=(),
        description="Path prefixes (relative to project root) to post-process",
    )
    exclude_rules: tuple[str, ...] = Field(
        default=(),
        description="Path prefixes (relative to project root) to skip",
    )
