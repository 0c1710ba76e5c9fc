"""Custom exception hierarchy for stylekit-core.

This module defines the exception classes used throughout stylekit:
- StylekitError: Base exception for all stylekit errors
- ConfigurationError: Raised when settings or project config cannot be loaded
- TransformError: Raised when the Sass transformer fails for a file
- PostProcessError: Raised when CSS post-processing fails for a file
- PersistError: Raised when a compiled stylesheet cannot be written

User-facing messages are safe to display. Technical details (stderr dumps,
OS error codes) are logged internally via structlog.
"""

from __future__ import annotations

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class StylekitError(Exception):
    """Base exception for stylekit.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. Logged
            internally but never part of ``str(error)``.

    Example:
        >>> raise StylekitError(
        ...     "Compile failed",
        ...     internal_details="sass exited with status 65",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize StylekitError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "stylekit_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(StylekitError):
    """Raised when a settings file or project config cannot be used.

    Use this exception when:
    - package.json or stylekit.yaml is not valid JSON/YAML
    - A settings value fails validation

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Parse config error",
        ...     file_path="package.json",
        ...     internal_details="Expecting ',' delimiter: line 3 column 5",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class TransformError(StylekitError):
    """Raised when the source-to-CSS transformer fails for one file.

    The message carries the transformer's diagnostic output (for sass, its
    stderr), which is what the user needs to fix the stylesheet.

    Attributes:
        source_path: The stylesheet that failed to compile.
    """

    def __init__(
        self,
        message: str,
        *,
        source_path: Path | str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(message, internal_details=internal_details)
        self.source_path = Path(source_path) if source_path is not None else None


class PostProcessError(StylekitError):
    """Raised when post-processing (Autoprefixer) fails for one file."""

    def __init__(
        self,
        message: str,
        *,
        source_path: Path | str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(message, internal_details=internal_details)
        self.source_path = Path(source_path) if source_path is not None else None


class PersistError(StylekitError):
    """Raised when a compiled stylesheet cannot be written.

    Typically a permission or disk-space problem.

    Attributes:
        path: Output path that could not be written.
        cause: The underlying OS error.

    Example:
        >>> raise PersistError(Path("css/app.css"), PermissionError(13, "denied"))
        # User sees: "Cannot write css/app.css: denied"
    """

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause) or type(cause).__name__
        super().__init__(
            f"Cannot write {self.path}: {reason}",
            internal_details=repr(cause),
        )
