"""stylekit compile command - Compile the stylesheets a file requires."""

from __future__ import annotations

import asyncio

import click

from stylekit_cli.commands.common import (
    SessionOptions,
    build_session,
    resolve_input,
    session_options,
)
from stylekit_cli.errors import EXIT_USER_ERROR, handle_configuration_error
from stylekit_cli.output import error, info, success, warning
from stylekit_core import ConfigurationError, EventChannel, SessionStatus
from stylekit_core.observability import configure_logging

SKIP_MESSAGES = {
    "unrecognized_extension": "is not a Sass file",
    "no_jobs": "has no stylesheets to compile",
}


@click.command("compile")
@click.argument("file_path", type=click.Path(dir_okay=False))
@session_options
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging")
def compile_cmd(file_path: str, verbose: bool, **options: object) -> None:
    """Compile the stylesheets affected by FILE.

    A partial (`_name.scss`) compiles the files that depend on it; any
    other Sass file compiles itself.

    Examples:

        stylekit compile scss/app.scss

        stylekit compile scss/_variables.scss --style compressed

        stylekit compile scss/app.scss --project ~/sites/blog --autoprefix
    """
    configure_logging(log_level="DEBUG" if verbose else "WARNING", json_format=False)

    opts = SessionOptions(**options)  # type: ignore[arg-type]
    path = resolve_input(file_path)
    session = build_session(opts)

    events = EventChannel()
    events.on_success(lambda e: success(f"Compile {e.name} success, output at {e.path}"))
    events.on_error(lambda e: error(f"Compile {e.name} error\n{e.error}"))

    try:
        result = asyncio.run(session.compile_path(path, manual=True, events=events))
    except ConfigurationError as err:
        handle_configuration_error(err)

    if result.status == SessionStatus.SKIPPED:
        outcome = result.outcome
        reason = outcome.skip_reason.value if outcome and outcome.skip_reason else ""
        warning(f"Nothing to compile: {file_path} {SKIP_MESSAGES.get(reason, 'was skipped')}")
        return

    summary = result.summary
    if summary is None:
        return
    info(
        f"Compiled {len(summary.succeeded)} file(s), "
        f"{len(summary.failed)} failed in {summary.duration_ms} ms"
    )
    if not summary.ok:
        raise SystemExit(EXIT_USER_ERROR)
