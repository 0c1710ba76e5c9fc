"""CLI error handling for stylekit-cli.

Wraps stylekit-core exceptions into user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click

from stylekit_cli.output import error
from stylekit_core.errors import ConfigurationError

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (invalid settings, failed stylesheet)
EXIT_SYSTEM_ERROR = 2  # System error (missing file, permissions)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def handle_configuration_error(err: ConfigurationError) -> NoReturn:
    """Raise a CLIError for an unusable settings or project config file."""
    raise CLIError(err.user_message)


def handle_file_not_found(file_path: str) -> NoReturn:
    """Raise a CLIError for a missing input file."""
    raise CLIError(f"File not found: {file_path}", exit_code=EXIT_SYSTEM_ERROR)


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Raise a CLIError for a permission failure."""
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
