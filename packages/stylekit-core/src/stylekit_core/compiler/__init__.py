"""Compile planning and orchestration for stylekit.

This module exports:
- ChangeResolver: which files to rebuild for a changed file
- OutputPathResolver: where each compiled file is written
- applies / should_post_process: post-processing inclusion policy
- CompileOrchestrator / CompileRun: concurrent fan-out/fan-in execution
- EventChannel: per-run event listeners
- Collaborator protocols and their default implementations
"""

from __future__ import annotations

from stylekit_core.compiler.change_resolver import ChangeResolver
from stylekit_core.compiler.collaborators import (
    AutoprefixerPostProcessor,
    FilesystemPersister,
    Persister,
    PostProcessor,
    SassCliTransformer,
    Transformer,
)
from stylekit_core.compiler.events import EventChannel, Subscription
from stylekit_core.compiler.inclusion_policy import applies, should_post_process
from stylekit_core.compiler.models import (
    CompilePlan,
    EventKind,
    Job,
    JobFailed,
    JobSucceeded,
    RunEvent,
    RunFinished,
    RunOutcome,
    RunStarted,
    RunState,
    RunStatus,
    RunSummary,
    SkipReason,
)
from stylekit_core.compiler.orchestrator import CompileOrchestrator, CompileRun
from stylekit_core.compiler.output_resolver import OUTPUT_DIRECTORY_NAMES, OutputPathResolver
from stylekit_core.compiler.paths import (
    OUTPUT_EXTENSION,
    SOURCE_EXTENSIONS,
    is_partial,
    is_source_file,
)

__all__ = [
    # Planning
    "ChangeResolver",
    "OutputPathResolver",
    "OUTPUT_DIRECTORY_NAMES",
    "applies",
    "should_post_process",
    "is_partial",
    "is_source_file",
    "SOURCE_EXTENSIONS",
    "OUTPUT_EXTENSION",
    # Execution
    "CompileOrchestrator",
    "CompileRun",
    "EventChannel",
    "Subscription",
    # Collaborators
    "Transformer",
    "PostProcessor",
    "Persister",
    "SassCliTransformer",
    "AutoprefixerPostProcessor",
    "FilesystemPersister",
    # Models
    "CompilePlan",
    "Job",
    "EventKind",
    "RunEvent",
    "RunStarted",
    "JobSucceeded",
    "JobFailed",
    "RunFinished",
    "RunOutcome",
    "RunState",
    "RunStatus",
    "RunSummary",
    "SkipReason",
]
