"""Decide whether post-processing applies to a source file.

Rules are project-relative path prefixes matched literally (no globbing)
against the absolute source path.
"""

from __future__ import annotations

import os
from pathlib import Path

from stylekit_core.schemas import PrefixOptions


def applies(
    source_path: Path | str,
    prefix_options: PrefixOptions,
    project_root: Path | str | None,
) -> bool:
    """Return True if post-processing should run for ``source_path``.

    Args:
        source_path: Absolute source path.
        prefix_options: Include and exclude rules.
        project_root: Root the rules are relative to. Without a root the
            rules cannot be scoped and every file is included.

    Returns:
        ``included and not excluded``. An empty include list includes
        everything; a matching exclude rule always wins.

    Example:
        >>> opts = PrefixOptions(include_rules=("components/",))
        >>> applies("/p/components/x.scss", opts, "/p")
        True
        >>> applies("/p/pages/x.scss", opts, "/p")
        False
    """
    if not project_root:
        return True

    source = os.fspath(source_path)
    root = os.fspath(project_root)

    def matches(rule: str) -> bool:
        return source.startswith(os.path.join(root, rule))

    is_exclude = bool(prefix_options.exclude_rules) and any(
        matches(rule) for rule in prefix_options.exclude_rules
    )
    if prefix_options.include_rules:
        is_include = any(matches(rule) for rule in prefix_options.include_rules)
    else:
        is_include = True

    return is_include and not is_exclude


def should_post_process(
    source_path: Path | str,
    prefix_options: PrefixOptions,
    project_root: Path | str | None,
) -> bool:
    """Return True if post-processing is enabled and applies to the file."""
    return prefix_options.enabled and applies(source_path, prefix_options, project_root)
