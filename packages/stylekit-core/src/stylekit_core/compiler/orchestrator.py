"""Compile orchestrator.

Turns one "file changed" trigger into a set of compile jobs, runs them
concurrently and reports each job's result plus one final ``finished``.

State machine per run: Idle -> Planning -> Running -> Finished. A run
with nothing to do (unrecognized extension, empty job list) returns to
Idle with a SKIPPED outcome and emits no events.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from stylekit_core.compiler.change_resolver import ChangeResolver
from stylekit_core.compiler.collaborators import (
    AutoprefixerPostProcessor,
    FilesystemPersister,
    SassCliTransformer,
)
from stylekit_core.compiler.events import EventChannel
from stylekit_core.compiler.inclusion_policy import should_post_process
from stylekit_core.compiler.models import (
    CompilePlan,
    Job,
    JobFailed,
    JobSucceeded,
    RunFinished,
    RunOutcome,
    RunStarted,
    RunState,
    RunStatus,
    RunSummary,
    SkipReason,
)
from stylekit_core.compiler.output_resolver import OutputPathResolver
from stylekit_core.compiler.paths import is_source_file
from stylekit_core.errors import StylekitError
from stylekit_core.observability import operation

if TYPE_CHECKING:
    from stylekit_core.compiler.collaborators import Persister, PostProcessor, Transformer
    from stylekit_core.schemas import CompileOptions, PrefixOptions

logger = structlog.get_logger(__name__)


class CompileRun:
    """One execution of a compile plan.

    Holds the completion counter and the run's own event channel. The
    counter starts at the job count, is decremented exactly once per job
    and fires ``finished`` exactly once when it reaches zero.

    Attributes:
        run_id: Short identifier bound into log entries.
        outcome: STARTED or SKIPPED, known as soon as ``run()`` returns.
        jobs: Planned jobs.
        events: The run's event channel.
        remaining: Jobs that have not reported yet.
        state: Current lifecycle state.
        transitions: Every state the run has entered, in order.
    """

    def __init__(self, events: EventChannel, run_id: str | None = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex[:8]
        self.outcome: RunOutcome | None = None
        self.jobs: tuple[Job, ...] = ()
        self.events = events
        self.remaining = 0
        self.state = RunState.IDLE
        self.transitions: list[RunState] = [RunState.IDLE]
        self.started_at = datetime.now(UTC)
        self._start_clock = time.monotonic()
        self._succeeded: list[JobSucceeded] = []
        self._failed: list[JobFailed] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._done: asyncio.Future[RunSummary] | None = None
        self._summary: RunSummary | None = None
        self._log = logger.bind(component="compile_run", run_id=self.run_id)

    @property
    def skipped(self) -> bool:
        return self.outcome is not None and self.outcome.skipped

    @property
    def finished(self) -> bool:
        return self.state == RunState.FINISHED

    async def wait(self) -> RunSummary:
        """Wait for ``finished`` and return the run summary.

        A skipped run returns an empty summary immediately.
        """
        if self._summary is not None:
            return self._summary
        if self._done is None:
            return RunSummary(started_at=self.started_at, finished_at=self.started_at)
        return await self._done

    def dispose(self) -> None:
        """Detach the event channel.

        Jobs still in flight keep running, persist their output and count
        down, but their events are no longer delivered.
        """
        self.events.dispose()

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.transitions.append(state)

    def _skip(self, reason: SkipReason | None) -> None:
        self.outcome = RunOutcome(status=RunStatus.SKIPPED, skip_reason=reason)
        self._enter(RunState.IDLE)

    def _begin(self, loop: asyncio.AbstractEventLoop, jobs: tuple[Job, ...]) -> None:
        self.outcome = RunOutcome(status=RunStatus.STARTED, jobs=jobs)
        self.jobs = jobs
        self.remaining = len(jobs)
        self._done = loop.create_future()
        self._enter(RunState.RUNNING)
        self._log.info("run_started", job_count=self.remaining)
        self.events.emit(RunStarted(job_count=self.remaining, started_at=self.started_at))

    def _track(self, task: asyncio.Task[None]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _report_success(self, job: Job) -> None:
        event = JobSucceeded(name=job.name, path=job.output_path)
        self._succeeded.append(event)
        self._log.info("job_succeeded", job=job.name, output=str(job.output_path))
        self.events.emit(event)
        self._release()

    def _report_failure(self, job: Job, exc: BaseException) -> None:
        detail = exc.user_message if isinstance(exc, StylekitError) else str(exc)
        event = JobFailed(
            name=job.name,
            source_path=job.source_path,
            error=detail or type(exc).__name__,
            error_type=type(exc).__name__,
        )
        self._failed.append(event)
        self._log.warning("job_failed", job=job.name, error_type=event.error_type)
        self.events.emit(event)
        self._release()

    def _release(self) -> None:
        if self.remaining <= 0:
            msg = "Compile run counter released more times than it has jobs"
            raise RuntimeError(msg)
        self.remaining -= 1
        if self.remaining == 0:
            self._finish()

    def _finish(self) -> None:
        self._enter(RunState.FINISHED)
        finished_at = datetime.now(UTC)
        duration_ms = int((time.monotonic() - self._start_clock) * 1000)
        self._summary = RunSummary(
            succeeded=tuple(self._succeeded),
            failed=tuple(self._failed),
            started_at=self.started_at,
            finished_at=finished_at,
            duration_ms=duration_ms,
        )
        self._log.info(
            "run_finished",
            succeeded=len(self._succeeded),
            failed=len(self._failed),
            duration_ms=duration_ms,
        )
        self.events.emit(RunFinished(succeeded=len(self._succeeded), failed=len(self._failed)))
        if self._done is not None and not self._done.done():
            self._done.set_result(self._summary)


class CompileOrchestrator:
    """Plan and run compile jobs for a changed stylesheet.

    The orchestrator does not prevent overlapping runs; the host gates
    runs (see :class:`stylekit_core.session.CompileGate`).

    Example:
        >>> orchestrator = CompileOrchestrator()
        >>> events = EventChannel()
        >>> events.on_success(lambda e: print(f"Compile {e.name} success, output at {e.path}"))
        >>> run = orchestrator.run(Path("/site/scss/_vars.scss"), options, prefix, events)
        >>> if not run.skipped:
        ...     summary = await run.wait()
    """

    def __init__(
        self,
        transformer: Transformer | None = None,
        post_processor: PostProcessor | None = None,
        persister: Persister | None = None,
        change_resolver: ChangeResolver | None = None,
        output_resolver: OutputPathResolver | None = None,
    ) -> None:
        self.transformer: Transformer = transformer or SassCliTransformer()
        self.post_processor: PostProcessor = post_processor or AutoprefixerPostProcessor()
        self.persister: Persister = persister or FilesystemPersister()
        self.change_resolver = change_resolver or ChangeResolver()
        self.output_resolver = output_resolver or OutputPathResolver()

    def plan(
        self,
        changed_file: Path | str,
        compile_options: CompileOptions,
        prefix_options: PrefixOptions,
    ) -> CompilePlan:
        """Resolve jobs for ``changed_file`` without running anything.

        Returns:
            CompilePlan with jobs, or with a skip reason when there is
            nothing to compile.
        """
        changed = Path(changed_file)
        if not is_source_file(changed):
            return CompilePlan(changed_file=changed, skip_reason=SkipReason.UNRECOGNIZED_EXTENSION)

        sources = self.change_resolver.resolve(changed, compile_options)
        if not sources:
            return CompilePlan(changed_file=changed, skip_reason=SkipReason.NO_JOBS)

        jobs = tuple(
            Job(
                source_path=source,
                output_path=self.output_resolver.resolve(source),
                apply_post_processing=should_post_process(
                    source, prefix_options, compile_options.project_root
                ),
            )
            for source in sources
        )
        return CompilePlan(changed_file=changed, jobs=jobs)

    def run(
        self,
        changed_file: Path | str,
        compile_options: CompileOptions,
        prefix_options: PrefixOptions,
        events: EventChannel | None = None,
    ) -> CompileRun:
        """Start a compile run for ``changed_file``.

        Must be called from a coroutine: jobs are scheduled on the running
        event loop. ``start`` is emitted before this returns; job results
        and ``finished`` follow as the jobs complete.

        Args:
            changed_file: The file that changed (absolute path).
            compile_options: Transformer options, project root, dependency index.
            prefix_options: Post-processing options and path rules.
            events: Channel to report on. Register listeners before calling.

        Returns:
            The CompileRun. ``run.outcome`` tells whether it was skipped.
        """
        run = CompileRun(events if events is not None else EventChannel())
        run._enter(RunState.PLANNING)
        plan = self.plan(changed_file, compile_options, prefix_options)

        if plan.skipped:
            logger.debug("run_skipped", file=str(plan.changed_file), reason=plan.skip_reason)
            run._skip(plan.skip_reason)
            return run

        loop = asyncio.get_running_loop()
        run._begin(loop, plan.jobs)
        for job in plan.jobs:
            task = loop.create_task(self._execute(run, job, compile_options, prefix_options))
            run._track(task)
        return run

    async def compile(
        self,
        changed_file: Path | str,
        compile_options: CompileOptions,
        prefix_options: PrefixOptions,
        events: EventChannel | None = None,
    ) -> tuple[RunOutcome, RunSummary]:
        """Run and wait for completion in one call."""
        run = self.run(changed_file, compile_options, prefix_options, events)
        summary = await run.wait()
        return run.outcome, summary

    async def _execute(
        self,
        run: CompileRun,
        job: Job,
        compile_options: CompileOptions,
        prefix_options: PrefixOptions,
    ) -> None:
        log = logger.bind(run_id=run.run_id, job=job.name)
        try:
            with operation("transform", log=log, file=str(job.source_path)):
                css = await self.transformer.transform(job.source_path, compile_options)
            if job.apply_post_processing:
                with operation("post_process", log=log):
                    css = await self.post_processor.process(css, prefix_options)
            with operation("persist", log=log, output=str(job.output_path)):
                await self.persister.write(job.output_path, css)
        except StylekitError as exc:
            run._report_failure(job, exc)
        except Exception as exc:
            # A misbehaving collaborator still only fails its own job
            log.exception("job_crashed")
            run._report_failure(job, exc)
        else:
            run._report_success(job)
