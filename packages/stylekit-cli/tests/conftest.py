"""Shared test fixtures for stylekit-cli tests.

Provides CliRunner fixtures, a small Sass project on disk and a shell
script standing in for the sass executable.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest
from click.testing import CliRunner

from stylekit_cli import output

# Echoes the arguments as a comment, then the source; fails on "error"
FAKE_SASS_SCRIPT = """#!/bin/sh
for last; do :; done
if grep -q error "$last"; then
    echo "Error: Undefined variable." >&2
    exit 65
fi
echo "/* $* */"
cat "$last"
"""


@pytest.fixture(autouse=True)
def isolated_user_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point user settings at a file that does not exist, so defaults apply."""
    monkeypatch.setenv("STYLEKIT_SETTINGS", str(tmp_path / "no-user-settings.yaml"))


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give the CLI console a wide, colorless terminal so long tmp paths never wrap."""
    console = output.create_console(no_color=True)
    console.width = 500
    monkeypatch.setattr(output, "console", console)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Create a project with one partial, one stylesheet and a css/ directory.

    Returns:
        Resolved project root.
    """
    root = (tmp_path / "site").resolve()
    (root / "scss").mkdir(parents=True)
    (root / "css").mkdir()
    (root / "scss" / "_vars.scss").write_text("$brand: red;\n")
    (root / "scss" / "app.scss").write_text(".app { color: red; }\n")
    return root


@pytest.fixture
def fake_sass(tmp_path: Path) -> Path:
    """Write an executable shell script that behaves like sass.

    Returns:
        Path to the script, for ``--sass``.
    """
    path = tmp_path / "bin" / "sass"
    path.parent.mkdir()
    path.write_text(FAKE_SASS_SCRIPT)
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path
