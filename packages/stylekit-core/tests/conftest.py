"""Shared pytest fixtures for stylekit-core tests.

Provides structlog configuration, a project tree builder and fake
collaborators for orchestrator tests.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from stylekit_core.compiler import EventChannel, EventKind
from stylekit_core.errors import PersistError, PostProcessError, TransformError
from stylekit_core.schemas import CompileOptions, PrefixOptions


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., list[Path]]:
    """Factory creating files (and parent directories) under tmp_path.

    Returns:
        Function taking relative paths and returning the absolute paths created.
    """

    def _make(*relative_paths: str, content: str = "") -> list[Path]:
        created = []
        for relative in relative_paths:
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            created.append(path)
        return created

    return _make


class FakeTransformer:
    """Transformer returning canned CSS; fails for configured file names."""

    def __init__(
        self,
        failures: dict[str, str] | None = None,
        crashes: set[str] | None = None,
        delay: float = 0.01,
    ) -> None:
        self.failures = failures or {}
        self.crashes = crashes or set()
        self.delay = delay
        self.calls: list[Path] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def transform(self, source_path: Path, options: CompileOptions) -> str:
        self.calls.append(source_path)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if source_path.name in self.crashes:
            raise RuntimeError("transformer crashed")
        if source_path.name in self.failures:
            raise TransformError(self.failures[source_path.name], source_path=source_path)
        return f".{source_path.stem} {{ display: flex; }}\n"


class FakePostProcessor:
    """PostProcessor tagging the CSS, or failing on demand."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, PrefixOptions]] = []

    async def process(self, css: str, options: PrefixOptions) -> str:
        self.calls.append((css, options))
        await asyncio.sleep(0)
        if self.fail:
            raise PostProcessError("Unknown word")
        return f"/* prefixed */\n{css}"


class RecordingPersister:
    """Persister that writes to disk and records writes; can refuse paths."""

    def __init__(self, refuse: set[str] | None = None) -> None:
        self.refuse = refuse or set()
        self.writes: dict[Path, str] = {}

    async def write(self, path: Path, text: str) -> None:
        await asyncio.sleep(0)
        if path.name in self.refuse:
            raise PersistError(path, PermissionError(13, "Permission denied"))
        path.write_text(text)
        self.writes[path] = text


@pytest.fixture
def transformer() -> FakeTransformer:
    return FakeTransformer()


@pytest.fixture
def post_processor() -> FakePostProcessor:
    return FakePostProcessor()


@pytest.fixture
def persister() -> RecordingPersister:
    return RecordingPersister()


@pytest.fixture
def fakes() -> type:
    """Expose the fake collaborator classes for tests needing custom instances."""

    class Fakes:
        Transformer = FakeTransformer
        PostProcessor = FakePostProcessor
        Persister = RecordingPersister

    return Fakes


@pytest.fixture
def recorded_events() -> Callable[[EventChannel], list]:
    """Return a function that subscribes a list to every event kind of a channel."""

    def _record(channel: EventChannel) -> list:
        events: list = []
        for kind in EventKind:
            channel.on(kind, events.append)
        return events

    return _record
