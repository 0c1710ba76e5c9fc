"""Unit tests for the stamp command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from stylekit_cli.main import cli

STYLESHEET = ".logo { background: url(img/logo.png); }\n"


class TestStamp:
    """Tests for stylekit stamp."""

    def test_insert_then_remove(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "app.scss"
        path.write_text(STYLESHEET)

        result = cli_runner.invoke(cli, ["stamp", str(path)])
        assert result.exit_code == 0, result.output
        assert "Stamped" in result.output
        assert "logo.png?v=#{$version}" in path.read_text()

        result = cli_runner.invoke(cli, ["stamp", "--remove", str(path)])
        assert result.exit_code == 0, result.output
        assert "Unstamped" in result.output
        assert path.read_text() == STYLESHEET

    def test_no_changes(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "plain.scss"
        path.write_text(".a { color: red; }\n")

        result = cli_runner.invoke(cli, ["stamp", str(path)])

        assert result.exit_code == 0
        assert "No changes" in result.output

    def test_non_sass_files_skipped(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "app.css"
        path.write_text(STYLESHEET)

        result = cli_runner.invoke(cli, ["stamp", str(path)])

        assert result.exit_code == 0
        assert "not a Sass file" in result.output
        assert path.read_text() == STYLESHEET

    def test_requires_a_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["stamp"])
        assert result.exit_code != 0
