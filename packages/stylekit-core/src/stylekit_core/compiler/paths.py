"""Stylesheet file classification helpers."""

from __future__ import annotations

import os
from pathlib import Path

# Extensions the transformer accepts as compile inputs
SOURCE_EXTENSIONS = (".scss", ".sass")

OUTPUT_EXTENSION = ".css"

# Base names starting with this marker are include-only partials
PARTIAL_PREFIX = "_"


def is_source_file(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` has a recognized stylesheet source extension."""
    return os.path.splitext(os.fspath(path))[1] in SOURCE_EXTENSIONS


def is_partial(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` names a partial (include-only) file."""
    return os.path.basename(os.fspath(path)).startswith(PARTIAL_PREFIX)


def output_name(path: str | os.PathLike[str]) -> str:
    """Return the output file name for a source file.

    The source extension is stripped case-insensitively:
    ``Theme.SCSS`` becomes ``Theme.css``.
    """
    name = Path(path).name
    stem, ext = os.path.splitext(name)
    if ext.lower() in SOURCE_EXTENSIONS:
        name = stem
    return f"{name}{OUTPUT_EXTENSION}"
