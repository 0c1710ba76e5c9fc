"""Cache-busting version stamps for asset URLs in stylesheets.

``url(img/logo.png)`` becomes ``url(img/logo.png?v=#{$version})`` so a
``$version`` variable in the stylesheet invalidates cached assets when it
changes. Removal strips the query again.
"""

from __future__ import annotations

import re
from pathlib import Path

VERSION_QUERY = "?v=#{$version}"

ASSET_EXTENSIONS = ("png", "gif", "jpg", "jpeg", "svg", "ttf", "eot", "woff2", "woff")

ASSET_URL_PATTERN = re.compile(
    r"(url\(['\"]?[^'\")]+\.)"
    r"(" + "|".join(ASSET_EXTENSIONS) + r")"
    r"(\?v=[^'\")]+)?"
    r"(['\"]?\))",
    re.IGNORECASE,
)


def _restamp(text: str, insert: bool) -> str:
    def replace(match: re.Match[str]) -> str:
        prefix, extension, _stamp, suffix = match.groups()
        return f"{prefix}{extension}{VERSION_QUERY if insert else ''}{suffix}"

    return ASSET_URL_PATTERN.sub(replace, text)


def insert_stamps(text: str) -> str:
    """Add (or normalize) the version query on every asset url()."""
    return _restamp(text, insert=True)


def remove_stamps(text: str) -> str:
    """Strip the version query from every asset url()."""
    return _restamp(text, insert=False)


def restamp_file(path: Path | str, *, insert: bool = True) -> bool:
    """Rewrite a stylesheet in place.

    Returns:
        True if the file content changed.
    """
    path = Path(path)
    original = path.read_text(encoding="utf-8")
    updated = _restamp(original, insert)
    if updated == original:
        return False
    path.write_text(updated, encoding="utf-8")
    return True
