"""stylekit-core: Stylesheet build orchestration.

This package provides:
- CompileOrchestrator: Plan and run concurrent Sass compile jobs for a changed file
- ChangeResolver / OutputPathResolver: Which files to build and where to write them
- Inclusion policy for the Autoprefixer post-processing step
- Settings schemas with per-project overrides
- BuildSession / CompileGate: Host-side run serialization
"""

from __future__ import annotations

__version__ = "0.1.0"

from stylekit_core.asset_stamps import insert_stamps, remove_stamps, restamp_file
from stylekit_core.compiler import (
    ChangeResolver,
    CompileOrchestrator,
    CompilePlan,
    CompileRun,
    EventChannel,
    Job,
    JobFailed,
    JobSucceeded,
    OutputPathResolver,
    RunFinished,
    RunOutcome,
    RunStarted,
    RunStatus,
    RunSummary,
    SkipReason,
    applies,
)

# Error types
from stylekit_core.errors import (
    ConfigurationError,
    PersistError,
    PostProcessError,
    StylekitError,
    TransformError,
)
from stylekit_core.observability import configure_logging, get_logger
from stylekit_core.project import (
    ProjectContext,
    find_project_root,
    load_user_settings,
    resolve_project,
)

# Schema models
from stylekit_core.schemas import (
    AutoprefixerSettings,
    CompileOptions,
    OutputStyle,
    PrefixOptions,
    SassSettings,
    StylekitSettings,
)
from stylekit_core.session import BuildSession, CompileGate, SessionResult, SessionStatus

__all__ = [
    "__version__",
    # Orchestration
    "CompileOrchestrator",
    "CompileRun",
    "CompilePlan",
    "ChangeResolver",
    "OutputPathResolver",
    "applies",
    "EventChannel",
    "Job",
    "RunStarted",
    "JobSucceeded",
    "JobFailed",
    "RunFinished",
    "RunOutcome",
    "RunStatus",
    "RunSummary",
    "SkipReason",
    # Session
    "BuildSession",
    "CompileGate",
    "SessionResult",
    "SessionStatus",
    "ProjectContext",
    "find_project_root",
    "resolve_project",
    "load_user_settings",
    # Errors
    "StylekitError",
    "ConfigurationError",
    "TransformError",
    "PostProcessError",
    "PersistError",
    # Schemas
    "CompileOptions",
    "OutputStyle",
    "PrefixOptions",
    "SassSettings",
    "AutoprefixerSettings",
    "StylekitSettings",
    # Asset stamps
    "insert_stamps",
    "remove_stamps",
    "restamp_file",
    # Logging
    "configure_logging",
    "get_logger",
]
