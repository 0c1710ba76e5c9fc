"""Unit tests for stylekit_cli.output module."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from stylekit_cli import output
from stylekit_core.compiler import Job


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Swap in a colorless, wide console for the duration of a test."""
    original = output.console
    output.console = output.create_console(no_color=True)
    output.console.width = 200
    try:
        yield
    finally:
        output.console = original


class TestCreateConsole:
    """Tests for create_console function."""

    def test_no_color(self) -> None:
        assert output.create_console(no_color=True).no_color is True

    def test_set_no_color_replaces_console(self) -> None:
        original = output.console
        try:
            output.set_no_color(True)
            assert output.console is not original
            assert output.console.no_color is True
        finally:
            output.console = original


@pytest.mark.usefixtures("plain_console")
class TestMessages:
    """Tests for the message helpers."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Compile app success, output at css/app.css")

        out = capsys.readouterr().out
        assert "✓" in out
        assert "Compile app success" in out

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("Compile app error")

        out = capsys.readouterr().out
        assert "✗" in out
        assert "Compile app error" in out

    def test_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.warning("Nothing to compile")

        assert "⚠" in capsys.readouterr().out

    def test_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.info("Compiled 2 file(s)")

        assert "Compiled 2 file(s)" in capsys.readouterr().out


@pytest.mark.usefixtures("plain_console")
class TestPrintJobs:
    """Tests for print_jobs()."""

    def test_paths_relative_to_project(self, capsys: pytest.CaptureFixture[str]) -> None:
        root = Path("/work/site")
        jobs = [
            Job(
                source_path=root / "scss/app.scss",
                output_path=root / "css/app.css",
                apply_post_processing=True,
            ),
            Job(source_path=Path("/elsewhere/x.scss"), output_path=Path("/elsewhere/x.css")),
        ]

        output.print_jobs(jobs, root)

        out = capsys.readouterr().out
        assert "Autoprefixer" in out
        assert "scss/app.scss" in out
        assert "/work/site/css" not in out
        assert "/elsewhere/x.css" in out
        assert "yes" in out
        assert "no" in out
