"""Unit tests for the stylekit exception hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from stylekit_core.errors import (
    ConfigurationError,
    PersistError,
    PostProcessError,
    StylekitError,
    TransformError,
)


class TestStylekitError:
    """Tests for the base exception."""

    def test_internal_details_not_in_message(self) -> None:
        error = StylekitError("Compile failed", internal_details="exit status 65")

        assert str(error) == "Compile failed"
        assert error.user_message == "Compile failed"
        assert "65" not in str(error)

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("bad"),
            TransformError("bad"),
            PostProcessError("bad"),
            PersistError("out.css", OSError("bad")),
        ],
    )
    def test_subclasses(self, error: StylekitError) -> None:
        assert isinstance(error, StylekitError)


class TestConfigurationError:
    """Tests for ConfigurationError message context."""

    def test_file_and_field(self) -> None:
        error = ConfigurationError(
            "Invalid project settings",
            file_path="/site",
            field_path="sass.precision",
        )

        assert str(error) == "Invalid project settings (in /site, field 'sass.precision')"
        assert error.file_path == "/site"
        assert error.field_path == "sass.precision"

    def test_file_only(self) -> None:
        error = ConfigurationError("Parse config error", file_path="package.json")
        assert str(error) == "Parse config error (in package.json)"

    def test_no_context(self) -> None:
        assert str(ConfigurationError("Parse config error")) == "Parse config error"


class TestPersistError:
    """Tests for PersistError."""

    def test_uses_os_reason(self) -> None:
        error = PersistError(Path("css/app.css"), PermissionError(13, "Permission denied"))

        assert str(error) == "Cannot write css/app.css: Permission denied"
        assert error.path == Path("css/app.css")
        assert isinstance(error.cause, PermissionError)

    def test_falls_back_to_exception_name(self) -> None:
        error = PersistError("app.css", OSError())
        assert str(error) == "Cannot write app.css: OSError"


class TestTransformError:
    """Tests for TransformError."""

    def test_source_path_is_normalized(self) -> None:
        error = TransformError("Undefined variable", source_path="scss/app.scss")

        assert error.source_path == Path("scss/app.scss")
        assert str(error) == "Undefined variable"

    def test_source_path_optional(self) -> None:
        assert TransformError("x").source_path is None
