"""Options shared by commands that resolve and compile stylesheets."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

import click

from stylekit_cli.errors import handle_configuration_error, handle_file_not_found
from stylekit_core import BuildSession, CompileOrchestrator, ConfigurationError
from stylekit_core.compiler import SassCliTransformer
from stylekit_core.project import load_user_settings
from stylekit_core.schemas import OutputStyle

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class SessionOptions:
    """Grouped session CLI options."""

    projects: tuple[str, ...]
    settings_path: str | None
    style: str | None
    precision: int | None
    include_paths: tuple[str, ...]
    autoprefix: bool | None
    sass_executable: str

    def overrides(self) -> dict[str, dict[str, Any]]:
        """Settings sections for the flags that were given."""
        sass: dict[str, Any] = {}
        if self.style is not None:
            sass["outputStyle"] = self.style
        if self.precision is not None:
            sass["precision"] = self.precision
        if self.include_paths:
            sass["includePaths"] = list(self.include_paths)

        result: dict[str, dict[str, Any]] = {}
        if sass:
            result["sass"] = sass
        if self.autoprefix is not None:
            result["autoprefixer"] = {"enabled": self.autoprefix}
        return result


def session_options(func: F) -> F:
    """Attach the shared session options to a command."""
    decorators = [
        click.option(
            "-p",
            "--project",
            "projects",
            multiple=True,
            type=click.Path(file_okay=False),
            help="Project directory (repeatable) [default: current directory]",
        ),
        click.option(
            "-s",
            "--settings",
            "settings_path",
            type=click.Path(dir_okay=False),
            default=None,
            help="User settings YAML [default: $STYLEKIT_SETTINGS or ~/.config/stylekit]",
        ),
        click.option(
            "--style",
            type=click.Choice([style.value for style in OutputStyle], case_sensitive=False),
            default=None,
            help="Output style override",
        ),
        click.option(
            "--precision",
            type=click.IntRange(min=0),
            default=None,
            help="Numeric precision override",
        ),
        click.option(
            "-I",
            "--include-path",
            "include_paths",
            multiple=True,
            help="Load path for imports (repeatable)",
        ),
        click.option(
            "--autoprefix/--no-autoprefix",
            default=None,
            help="Force Autoprefixer on or off",
        ),
        click.option(
            "--sass",
            "sass_executable",
            default="sass",
            show_default=True,
            help="sass executable",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def resolve_input(file_path: str) -> Path:
    """Return the absolute input path, failing if it does not exist."""
    path = Path(file_path)
    if not path.exists():
        handle_file_not_found(file_path)
    return path.resolve()


def build_session(
    opts: SessionOptions,
    orchestrator: CompileOrchestrator | None = None,
) -> BuildSession:
    """Build a BuildSession from CLI options.

    Raises:
        CLIError: If the settings file is missing or invalid.
    """
    if opts.settings_path is not None and not Path(opts.settings_path).exists():
        handle_file_not_found(opts.settings_path)
    try:
        settings = load_user_settings(opts.settings_path)
    except ConfigurationError as err:
        handle_configuration_error(err)

    projects = opts.projects or (".",)
    if orchestrator is None:
        orchestrator = CompileOrchestrator(transformer=SassCliTransformer(opts.sass_executable))
    return BuildSession(
        settings=settings,
        project_paths=[Path(p).resolve() for p in projects],
        orchestrator=orchestrator,
        overrides=opts.overrides(),
    )
