"""Resolve where a compiled stylesheet is written.

Resolution order for ``<dir>/<name>.scss``:
1. ``<dir>/<name>.css`` if that file already exists (sticky output).
2. ``<parent-of-dir>/<conventional>/<name>.css`` for each existing
   conventional directory name; the LAST existing one in
   ``OUTPUT_DIRECTORY_NAMES`` wins.
3. ``<dir>/<name>.css``.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from stylekit_core.compiler.paths import output_name

logger = structlog.get_logger(__name__)

# Sibling directory names checked next to the source directory, in order
OUTPUT_DIRECTORY_NAMES: tuple[str, ...] = ("css", "style", "styles", "stylesheets")


class OutputPathResolver:
    """Compute the output path for a source stylesheet.

    Only performs read-only existence checks.

    Attributes:
        directory_names: Ordered conventional output directory names.

    Example:
        >>> OutputPathResolver().resolve(Path("/site/scss/app.scss"))
        PosixPath('/site/css/app.css')
    """

    def __init__(self, directory_names: tuple[str, ...] = OUTPUT_DIRECTORY_NAMES) -> None:
        self.directory_names = directory_names

    def resolve(self, source_path: Path | str) -> Path:
        """Return the absolute output path for ``source_path``."""
        source = Path(source_path)
        source_dir = source.parent
        name = output_name(source)

        candidate = source_dir / name
        if candidate.is_file():
            return candidate

        return self._output_directory(source_dir) / name

    def _output_directory(self, source_dir: Path) -> Path:
        chosen = source_dir
        parent = source_dir.parent
        # No early exit: when several conventional directories exist the last
        # one listed is used. Keep this ordering; existing projects rely on it.
        for dir_name in self.directory_names:
            candidate = parent / dir_name
            if candidate.is_dir():
                chosen = candidate
        if chosen != source_dir:
            logger.debug("output_directory_selected", directory=str(chosen))
        return chosen
