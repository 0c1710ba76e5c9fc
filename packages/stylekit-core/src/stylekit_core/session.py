"""Host-side compile session.

The session is what an editor integration or the CLI holds: it owns the
"a compile is running" gate, resolves per-project settings for a file,
and drives one orchestrator run per request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from stylekit_core.compiler import (
    CompileOrchestrator,
    CompilePlan,
    EventChannel,
    RunOutcome,
    RunSummary,
)
from stylekit_core.project import ProjectContext, resolve_project
from stylekit_core.schemas import StylekitSettings

logger = structlog.get_logger(__name__)


class CompileGate:
    """Explicit "compile in progress" state held by the host.

    Runs are serialized by acquiring the gate before starting one.
    """

    def __init__(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def try_acquire(self) -> bool:
        """Take the gate. Returns False if a compile is already running."""
        if self._running:
            return False
        self._running = True
        return True

    def release(self) -> None:
        self._running = False


class SessionStatus(str, Enum):
    """Result of a session compile request.

    Attributes:
        COMPLETED: The run started and finished.
        SKIPPED: Nothing to compile for this file.
        BUSY: Another compile holds the gate; nothing was done.
        DISABLED: compileOnSave is off and the request was not manual.
    """

    COMPLETED = "completed"
    SKIPPED = "skipped"
    BUSY = "busy"
    DISABLED = "disabled"


class SessionResult(BaseModel):
    """Outcome of :meth:`BuildSession.compile_path`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: SessionStatus
    project_root: Path | None = None
    outcome: RunOutcome | None = None
    summary: RunSummary | None = None

    @property
    def ok(self) -> bool:
        """False only when the run completed with failed files."""
        return self.summary is None or self.summary.ok


class BuildSession:
    """Compile files on request, one run at a time.

    Attributes:
        settings: User-level settings (project overrides are applied per file).
        project_paths: Directories treated as project roots.
        orchestrator: Orchestrator used for every run.
        gate: The host's compile gate.
        overrides: Settings sections applied over project settings (e.g., CLI flags).

    Example:
        >>> session = BuildSession(StylekitSettings(), project_paths=[Path("/site")])
        >>> result = await session.compile_path(Path("/site/scss/app.scss"), manual=True)
        >>> result.status
        <SessionStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        settings: StylekitSettings | None = None,
        project_paths: Iterable[Path | str] = (),
        orchestrator: CompileOrchestrator | None = None,
        gate: CompileGate | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self.settings = settings or StylekitSettings()
        self.overrides = dict(overrides or {})
        self.project_paths = tuple(Path(p) for p in project_paths)
        self.orchestrator = orchestrator or CompileOrchestrator()
        self.gate = gate or CompileGate()

    def context_for(self, file_path: Path | str) -> ProjectContext:
        """Resolve project root and effective settings for ``file_path``."""
        return resolve_project(file_path, self.settings, self.project_paths, self.overrides)

    def plan(self, file_path: Path | str) -> tuple[ProjectContext, CompilePlan]:
        """Plan the jobs for ``file_path`` without compiling."""
        context = self.context_for(file_path)
        plan = self.orchestrator.plan(
            Path(file_path), context.compile_options(), context.prefix_options()
        )
        return context, plan

    async def compile_path(
        self,
        file_path: Path | str,
        *,
        manual: bool = False,
        events: EventChannel | None = None,
    ) -> SessionResult:
        """Compile what ``file_path`` requires.

        Args:
            file_path: File that changed or was selected.
            manual: True for an explicit request; bypasses compileOnSave.
            events: Channel to receive the run's events.

        Returns:
            SessionResult describing what happened.

        Raises:
            ConfigurationError: If the project's settings are invalid.
        """
        path = Path(file_path)
        if self.gate.is_running:
            logger.info("compile_refused_busy", file=str(path))
            return SessionResult(status=SessionStatus.BUSY)

        context = self.context_for(path)
        if not (context.settings.sass.compile_on_save or manual):
            return SessionResult(status=SessionStatus.DISABLED, project_root=context.project_root)

        if not self.gate.try_acquire():
            return SessionResult(status=SessionStatus.BUSY)
        try:
            run = self.orchestrator.run(
                path,
                context.compile_options(),
                context.prefix_options(),
                events,
            )
            if run.skipped:
                return SessionResult(
                    status=SessionStatus.SKIPPED,
                    project_root=context.project_root,
                    outcome=run.outcome,
                )
            summary = await run.wait()
        finally:
            self.gate.release()

        return SessionResult(
            status=SessionStatus.COMPLETED,
            project_root=context.project_root,
            outcome=run.outcome,
            summary=summary,
        )
