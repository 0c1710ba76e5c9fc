"""Resolve which stylesheets must be recompiled when one file changes.

Partials (``_name.scss``) are never compiled on their own. When a partial
changes, the files that include it are found through the project's
dependency index if it has an entry, and otherwise by compiling every
non-partial stylesheet in the partial's directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from stylekit_core.compiler.paths import is_partial, is_source_file
from stylekit_core.schemas import CompileOptions

logger = structlog.get_logger(__name__)


class ChangeResolver:
    """Map a changed file to the ordered list of files to compile.

    Example:
        >>> resolver = ChangeResolver()
        >>> resolver.resolve(Path("/site/scss/_vars.scss"), options)
        [PosixPath('/site/scss/app.scss'), PosixPath('/site/scss/print.scss')]
    """

    def resolve(self, changed_file: Path | str, options: CompileOptions) -> list[Path]:
        """Resolve the files to recompile for a change to ``changed_file``.

        Args:
            changed_file: Absolute path of the file that changed.
            options: Compile options carrying project root and dependency index.

        Returns:
            Ordered, deduplicated absolute source paths. May be empty when a
            partial's directory holds no compilable file.
        """
        changed = Path(changed_file)

        if not is_partial(changed):
            return [changed]

        dependents = self._lookup_dependents(changed, options)
        if dependents:
            logger.debug("dependents_from_index", file=str(changed), count=len(dependents))
            return _dedupe(dependents)

        siblings = self._scan_directory(changed.parent)
        logger.debug("dependents_from_scan", file=str(changed), count=len(siblings))
        return _dedupe(siblings)

    def _lookup_dependents(self, changed: Path, options: CompileOptions) -> list[Path]:
        index = options.dependency_index
        if not index or options.project_root is None:
            return []

        root = options.project_root
        relative = Path(os.path.relpath(changed, root)).as_posix()
        entries = index.get(relative)
        if not entries:
            # A miss degrades to the directory scan
            return []
        return [root / entry for entry in entries]

    def _scan_directory(self, directory: Path) -> list[Path]:
        return [
            directory / name
            for name in os.listdir(directory)
            if is_source_file(name) and not is_partial(name)
        ]


def _dedupe(paths: list[Path]) -> list[Path]:
    seen: set[Path] = set()
    result: list[Path] = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result
