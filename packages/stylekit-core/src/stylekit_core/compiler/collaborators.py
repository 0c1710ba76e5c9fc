"""External collaborators consumed by the compile orchestrator.

The orchestrator depends only on the three protocols below. The default
implementations shell out to the ``sass`` executable and to ``node``
running PostCSS with Autoprefixer, and write files on the local disk.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Protocol

import structlog

from stylekit_core.errors import PersistError, PostProcessError, TransformError
from stylekit_core.schemas import CompileOptions, PrefixOptions

logger = structlog.get_logger(__name__)

DEFAULT_SASS_EXECUTABLE = "sass"
DEFAULT_NODE_EXECUTABLE = "node"

# Reads CSS on stdin, writes prefixed CSS on stdout. argv[1] holds the
# Autoprefixer options as JSON.
AUTOPREFIXER_SCRIPT = """
const postcss = require('postcss');
const autoprefixer = require('autoprefixer');
const options = JSON.parse(process.argv[1]);
let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', chunk => { input += chunk; });
process.stdin.on('end', () => {
    postcss([autoprefixer(options)])
        .process(input, { from: undefined })
        .then(result => { process.stdout.write(result.css); })
        .catch(err => { process.stderr.write(String(err)); process.exit(1); });
});
"""


class Transformer(Protocol):
    """Compiles one stylesheet source file to CSS text."""

    async def transform(self, source_path: Path, options: CompileOptions) -> str:
        """Return the CSS for ``source_path``; raise TransformError on failure."""
        ...


class PostProcessor(Protocol):
    """Rewrites compiled CSS (e.g., adds vendor prefixes)."""

    async def process(self, css: str, options: PrefixOptions) -> str:
        """Return the processed CSS; raise PostProcessError on failure."""
        ...


class Persister(Protocol):
    """Writes compiled CSS to its output location."""

    async def write(self, path: Path, text: str) -> None:
        """Write ``text`` to ``path``; raise PersistError on failure."""
        ...


async def _run_process(
    *cmd: str,
    stdin_text: str | None = None,
) -> tuple[int, str, str]:
    """Run a subprocess and return (returncode, stdout, stderr).

    Note: ``asyncio.create_subprocess_exec`` does not support ``text=True``.
    We work with bytes and decode to UTF-8.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.PIPE if stdin_text is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdin_bytes = stdin_text.encode("utf-8") if stdin_text is not None else None
    stdout_b, stderr_b = await process.communicate(stdin_bytes)
    stdout = stdout_b.decode("utf-8", errors="replace") if stdout_b is not None else ""
    stderr = stderr_b.decode("utf-8", errors="replace") if stderr_b is not None else ""
    returncode = process.returncode if process.returncode is not None else -1
    return returncode, stdout, stderr


class SassCliTransformer:
    """Transformer backed by the ``sass`` command line tool.

    Requires the Ruby Sass executable (``sass`` 3.x). The ``--precision``
    and ``--default-encoding`` flags and the ``nested``/``compact`` styles
    exist only in Ruby Sass; Dart Sass rejects them.

    Attributes:
        executable: Command used to invoke sass.
        extra_args: Arguments appended after the option flags.

    Example:
        >>> transformer = SassCliTransformer()
        >>> css = await transformer.transform(Path("scss/app.scss"), CompileOptions())
    """

    def __init__(
        self,
        executable: str = DEFAULT_SASS_EXECUTABLE,
        extra_args: tuple[str, ...] = ("--default-encoding", "utf-8"),
    ) -> None:
        self.executable = executable
        self.extra_args = extra_args

    def build_args(self, source_path: Path, options: CompileOptions) -> list[str]:
        """Build the sass argument list (without the executable)."""
        args = ["--style", options.output_style.value, "--precision", str(options.precision)]
        for include_path in options.include_paths:
            args.extend(["--load-path", include_path])
        args.extend(self.extra_args)
        args.append(str(source_path))
        return args

    async def transform(self, source_path: Path, options: CompileOptions) -> str:
        args = self.build_args(source_path, options)
        try:
            returncode, stdout, stderr = await _run_process(self.executable, *args)
        except OSError as exc:
            raise TransformError(
                f"Cannot run {self.executable}",
                source_path=source_path,
                internal_details=repr(exc),
            ) from exc

        if returncode != 0:
            message = stderr.strip() or f"{self.executable} exited with status {returncode}"
            raise TransformError(message, source_path=source_path)
        if stderr.strip():
            # Deprecation notices and @warn output; the CSS is still valid
            logger.warning("transform_warnings", file=str(source_path), stderr=stderr.strip())
        return stdout


class AutoprefixerPostProcessor:
    """PostProcessor running PostCSS + Autoprefixer through ``node``.

    ``postcss`` and ``autoprefixer`` must be resolvable by node (installed
    globally or in the working directory's ``node_modules``).
    """

    def __init__(self, node_executable: str = DEFAULT_NODE_EXECUTABLE) -> None:
        self.node_executable = node_executable

    @staticmethod
    def autoprefixer_options(options: PrefixOptions) -> dict[str, object]:
        """Translate PrefixOptions to Autoprefixer's option object."""
        return {
            "cascade": options.cascade,
            "remove": options.remove,
            "overrideBrowserslist": list(options.browser_targets),
        }

    async def process(self, css: str, options: PrefixOptions) -> str:
        payload = json.dumps(self.autoprefixer_options(options))
        try:
            returncode, stdout, stderr = await _run_process(
                self.node_executable,
                "-e",
                AUTOPREFIXER_SCRIPT,
                payload,
                stdin_text=css,
            )
        except OSError as exc:
            raise PostProcessError(
                f"Cannot run {self.node_executable}",
                internal_details=repr(exc),
            ) from exc

        if returncode != 0:
            message = stderr.strip() or f"autoprefixer exited with status {returncode}"
            raise PostProcessError(message)
        return stdout


class FilesystemPersister:
    """Persister writing UTF-8 text files. Missing directories are not created."""

    async def write(self, path: Path, text: str) -> None:
        try:
            await asyncio.to_thread(path.write_text, text, encoding="utf-8")
        except OSError as exc:
            raise PersistError(path, exc) from exc
