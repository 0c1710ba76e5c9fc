"""stylekit plan command - Show what a compile would do."""

from __future__ import annotations

import click

from stylekit_cli.commands.common import (
    SessionOptions,
    build_session,
    resolve_input,
    session_options,
)
from stylekit_cli.errors import handle_configuration_error
from stylekit_cli.output import info, print_jobs, warning
from stylekit_core import ConfigurationError


@click.command()
@click.argument("file_path", type=click.Path(dir_okay=False))
@session_options
def plan(file_path: str, **options: object) -> None:
    """Show which stylesheets FILE would compile, and where they would be written.

    Nothing is compiled or written.

    Examples:

        stylekit plan scss/_variables.scss
    """
    opts = SessionOptions(**options)  # type: ignore[arg-type]
    path = resolve_input(file_path)
    session = build_session(opts)

    try:
        context, compile_plan = session.plan(path)
    except ConfigurationError as err:
        handle_configuration_error(err)

    if compile_plan.skipped:
        reason = compile_plan.skip_reason.value if compile_plan.skip_reason else "skipped"
        warning(f"Nothing to compile for {file_path} ({reason})")
        return

    if context.project_root is not None:
        info(f"Project: {context.project_root}")
    print_jobs(compile_plan.jobs, context.project_root)
