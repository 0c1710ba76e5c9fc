"""Pydantic schemas for stylekit options and settings."""

from __future__ import annotations

from stylekit_core.schemas.compile_options import CompileOptions, OutputStyle
from stylekit_core.schemas.prefix_options import DEFAULT_BROWSER_TARGETS, PrefixOptions
from stylekit_core.schemas.settings import (
    AutoprefixerSettings,
    SassSettings,
    StylekitSettings,
)

__all__ = [
    "CompileOptions",
    "OutputStyle",
    "PrefixOptions",
    "DEFAULT_BROWSER_TARGETS",
    "SassSettings",
    "AutoprefixerSettings",
    "StylekitSettings",
]
