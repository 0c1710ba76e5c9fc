"""Rich console output utilities for stylekit-cli.

Formatted console output with Rich: colored success/error/warning
messages, job tables, and respect for the NO_COLOR environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from stylekit_core.compiler import Job

# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Compile app success, output at css/app.css")
        ✓ Compile app success, output at css/app.css
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("Compile app error")
        ✗ Compile app error
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_jobs(jobs: Iterable[Job], project_root: Path | None = None) -> None:
    """Print planned jobs as a table.

    Paths inside ``project_root`` are shown relative to it.
    """

    def show(path: Path) -> str:
        if project_root is not None and path.is_relative_to(project_root):
            return str(path.relative_to(project_root))
        return str(path)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Source")
    table.add_column("Output")
    table.add_column("Autoprefixer", justify="center")
    for job in jobs:
        table.add_row(
            show(job.source_path),
            show(job.output_path),
            "yes" if job.apply_post_processing else "no",
        )
    console.print(table)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
