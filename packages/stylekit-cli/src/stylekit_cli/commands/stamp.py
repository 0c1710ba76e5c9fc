"""stylekit stamp command - Add or remove asset version stamps."""

from __future__ import annotations

import click

from stylekit_cli.commands.common import resolve_input
from stylekit_cli.errors import handle_permission_error
from stylekit_cli.output import info, success
from stylekit_core import restamp_file
from stylekit_core.compiler import is_source_file


@click.command()
@click.argument("file_paths", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--remove",
    is_flag=True,
    default=False,
    help="Remove stamps instead of inserting them",
)
def stamp(file_paths: tuple[str, ...], remove: bool) -> None:
    """Add `?v=#{$version}` to asset url()s in Sass files.

    Examples:

        stylekit stamp scss/app.scss

        stylekit stamp scss/*.scss --remove
    """
    for file_path in file_paths:
        path = resolve_input(file_path)
        if not is_source_file(path):
            info(f"Skipped {file_path} (not a Sass file)")
            continue
        try:
            changed = restamp_file(path, insert=not remove)
        except PermissionError:
            handle_permission_error(file_path, "write")
        if changed:
            success(f"{'Unstamped' if remove else 'Stamped'} {file_path}")
        else:
            info(f"No changes in {file_path}")
