"""Compile run models.

Models for planned jobs, run outcomes, run events and summaries.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Job(BaseModel):
    """One planned compilation of a source file.

    The output path is resolved once at plan time and never revisited.

    Attributes:
        source_path: Absolute path of the stylesheet to compile.
        output_path: Absolute path the CSS is written to.
        apply_post_processing: Whether Autoprefixer runs on the result.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_path: Path = Field(..., description="Stylesheet to compile")
    output_path: Path = Field(..., description="Resolved CSS output path")
    apply_post_processing: bool = Field(default=False, description="Run post-processor")

    @property
    def name(self) -> str:
        """Display name used in events: the output file name without ``.css``."""
        return self.output_path.stem


class RunState(str, Enum):
    """Lifecycle state of a compile run."""

    IDLE = "idle"
    PLANNING = "planning"
    RUNNING = "running"
    FINISHED = "finished"


class RunStatus(str, Enum):
    """Outcome of starting a run.

    Attributes:
        STARTED: Jobs were launched; a ``finished`` event will follow.
        SKIPPED: Nothing to do; no events are emitted at all.
    """

    STARTED = "started"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why a run was skipped."""

    UNRECOGNIZED_EXTENSION = "unrecognized_extension"
    NO_JOBS = "no_jobs"


class CompilePlan(BaseModel):
    """Result of planning a run for a changed file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    changed_file: Path
    jobs: tuple[Job, ...] = ()
    skip_reason: SkipReason | None = None

    @property
    def skipped(self) -> bool:
        """True if there is nothing to run."""
        return self.skip_reason is not None


class RunOutcome(BaseModel):
    """Synchronous result of ``CompileOrchestrator.run``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: RunStatus
    skip_reason: SkipReason | None = None
    jobs: tuple[Job, ...] = ()

    @property
    def skipped(self) -> bool:
        return self.status == RunStatus.SKIPPED


class EventKind(str, Enum):
    """Run event kinds."""

    START = "start"
    SUCCESS = "success"
    ERROR = "error"
    FINISHED = "finished"


class RunStarted(BaseModel):
    """Emitted once, before any job result."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EventKind = EventKind.START
    job_count: int = Field(..., ge=1)
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class JobSucceeded(BaseModel):
    """Emitted when a job's output has been written."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EventKind = EventKind.SUCCESS
    name: str
    path: Path


class JobFailed(BaseModel):
    """Emitted when a job failed at transform, post-process or persist."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EventKind = EventKind.ERROR
    name: str
    source_path: Path
    error: str = Field(..., description="User-facing error detail")
    error_type: str = Field(..., description="Exception class name")


class RunFinished(BaseModel):
    """Emitted exactly once, after every job has reported."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EventKind = EventKind.FINISHED
    succeeded: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)


RunEvent = RunStarted | JobSucceeded | JobFailed | RunFinished


class RunSummary(BaseModel):
    """Aggregated result of a finished run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    succeeded: tuple[JobSucceeded, ...] = ()
    failed: tuple[JobFailed, ...] = ()
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None
    duration_ms: int = Field(default=0, ge=0)

    @property
    def ok(self) -> bool:
        """True if no job failed."""
        return not self.failed
