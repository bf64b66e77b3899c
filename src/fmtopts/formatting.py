# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : formatting.py
#   file_relpath : src/fmtopts/formatting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Formatting driver: files, stdin, ``--list-different`` and ``--write``.

Each file is handled independently: its options are resolved, it is read,
formatted and written back or printed. Per-file problems (unreadable file,
parse error, unstable output) are logged with the file name and recorded in
the `RunStatus`; the remaining files are still processed.

Configuration and validation errors are not per-file problems: a malformed
config would fail for every other file too, so they propagate to the caller
and stop the run.
"""

from __future__ import annotations

import difflib
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, Mapping

import click

from fmtopts.cli.exit_codes import ExitCode
from fmtopts.config.loader import resolve_config_file
from fmtopts.config.logging import get_logger
from fmtopts.engine import FormatResult
from fmtopts.errors import (
    ConfigurationError,
    DebugCheckError,
    FmtoptsError,
    ParseError,
    ValidationError,
)
from fmtopts.file_resolver import create_ignorer, expand_patterns
from fmtopts.resolver import get_options_for_file

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.context import Context
    from fmtopts.file_resolver import Ignorer

logger: FmtoptsLogger = get_logger(__name__)

STDIN_NAME: Final[str] = "(stdin)"

# Appended to the patterns unless `--with-node-modules` is given
NODE_MODULES_PATTERNS: Final[tuple[str, ...]] = ("!**/node_modules/**", "!./node_modules/**")


class RunStatus:
    """The most severe outcome recorded during a run."""

    def __init__(self) -> None:
        self.exit_code: ExitCode = ExitCode.SUCCESS

    def record(self, exit_code: ExitCode) -> None:
        """Record ``exit_code``; the most severe outcome wins."""
        if exit_code > self.exit_code:
            self.exit_code = exit_code

    def __repr__(self) -> str:
        return f"RunStatus(exit_code={self.exit_code.name})"


def diff(a: str, b: str) -> str:
    """Return a unified diff of ``a`` and ``b`` with two lines of context."""
    return "".join(
        difflib.unified_diff(a.splitlines(keepends=True), b.splitlines(keepends=True), n=2)
    )


def handle_error(context: Context, filename: str, error: Exception, status: RunStatus) -> None:
    """Report a per-file ``error`` and mark the run as failed.

    Raises:
        ConfigurationError: Re-raised, it would fail for every file.
        ValidationError: Re-raised, it would fail for every file.
    """
    if isinstance(error, (ConfigurationError, ValidationError)):
        raise error
    if isinstance(error, (ParseError, DebugCheckError, FmtoptsError)):
        logger.error("%s: %s", filename, error)
    else:
        logger.error("%s: %s", filename, error, exc_info=error)
    status.record(ExitCode.ERROR)


def _engine_options(context: Context, options: Mapping[str, Any]) -> dict[str, Any]:
    """Make the plugins loaded from the command line available to the engine."""
    plugins: tuple[Any, ...] = (*context.schema.plugins, *options.get("plugins", ()))
    return {**options, "plugins": plugins}


def format(context: Context, text: str, options: Mapping[str, Any]) -> FormatResult:
    """Format ``text`` with the resolved ``options``.

    With ``--debug-check`` the output is formatted a second time and compared
    to the first pass; on success the result holds the file name instead of
    the formatted text.

    Raises:
        DebugCheckError: If the second pass differs from the first one.
        ParseError: If the engine cannot parse ``text``.
    """
    engine_options: dict[str, Any] = _engine_options(context, options)
    if context.argv.get("debug-check"):
        first: str = context.engine.format_with_cursor(text, engine_options).formatted
        second: str = context.engine.format_with_cursor(first, engine_options).formatted
        if first != second:
            raise DebugCheckError(
                "fmtopts(input) !== fmtopts(fmtopts(input))\n" + diff(first, second)
            )
        return FormatResult(options.get("filepath") or f"{STDIN_NAME}\n")
    return context.engine.format_with_cursor(text, engine_options)


def write_output(context: Context, result: FormatResult, options: Mapping[str, Any]) -> None:
    """Write the formatted text to stdout, and the cursor offset to stderr if requested."""
    context.console.write(result.formatted)
    cursor_offset: Any = options.get("cursor_offset", -1)
    if isinstance(cursor_offset, int) and cursor_offset >= 0:
        click.echo(str(result.cursor_offset), err=True)


def list_different(
    context: Context,
    text: str,
    options: Mapping[str, Any],
    filename: str,
    status: RunStatus,
) -> bool:
    """Print ``filename`` if ``text`` is not formatted (``--list-different`` only).

    Returns:
        bool: True if ``--list-different`` is active.
    """
    if not context.argv.get("list-different"):
        return False

    check_options: dict[str, Any] = _engine_options(context, {**options, "filepath": filename})
    if not context.engine.check(text, check_options):
        if not context.argv.get("write"):
            context.console.print(filename)
        status.record(ExitCode.FAILURE)
    return True


def log_resolved_config_path(context: Context, file_path: str | Path) -> ExitCode:
    """Print the config file that applies to ``file_path``, relative to the cwd.

    Returns:
        ExitCode: SUCCESS if a config file was found, FAILURE otherwise.
    """
    config_file: Path | None = resolve_config_file(file_path)
    if config_file is None:
        logger.debug("No config file found for %s", file_path)
        return ExitCode.FAILURE
    context.console.print(os.path.relpath(config_file, Path.cwd()))
    return ExitCode.SUCCESS


def _read_stdin() -> str:
    return click.get_text_stream("stdin").read()


def format_stdin(context: Context, text: str | None = None) -> ExitCode:
    """Format the text read from stdin (or ``text``) and write it to stdout.

    ``--stdin-filepath`` names the input for config lookup, parser inference
    and ignore matching; an ignored input is echoed unchanged.
    """
    status = RunStatus()
    stdin_filepath: str | None = context.argv.get("stdin-filepath")
    filepath: Path | None = (Path.cwd() / stdin_filepath).resolve() if stdin_filepath else None
    ignorer: Ignorer = create_ignorer(context.argv.get("ignore-path"))

    if text is None:
        text = _read_stdin()

    if filepath is not None and ignorer.ignores(filepath):
        context.console.write(text)
        return status.exit_code

    options: dict[str, Any] = get_options_for_file(context, filepath)

    try:
        if list_different(context, text, options, STDIN_NAME, status):
            return status.exit_code
        write_output(context, format(context, text, options), options)
    except Exception as exc:  # noqa: BLE001 - reported per input, run continues
        handle_error(context, "stdin", exc, status)
    return status.exit_code


def _format_file(
    context: Context,
    filename: str,
    options: dict[str, Any],
    ignored: bool,
    status: RunStatus,
) -> None:
    argv: dict[str, Any] = context.argv
    try:
        text: str = Path(filename).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Unable to read file: %s\n%s", filename, exc)
        status.record(ExitCode.ERROR)
        return

    if ignored:
        write_output(context, FormatResult(text), options)
        return

    start: float = time.perf_counter()
    try:
        list_different(context, text, options, filename, status)
        result: FormatResult = format(context, text, {**options, "filepath": filename})
    except Exception as exc:  # noqa: BLE001 - reported per file, run continues
        handle_error(context, filename, exc, status)
        return
    elapsed_ms: int = round((time.perf_counter() - start) * 1000)

    if argv.get("write"):
        # Unchanged files are not rewritten, so mtime-based caches stay valid
        if result.formatted == text:
            if not argv.get("list-different"):
                context.console.print(
                    context.console.styled(f"{filename} {elapsed_ms}ms", fg="bright_black")
                )
            return
        if argv.get("list-different"):
            context.console.print(filename)
        else:
            context.console.print(f"{filename} {elapsed_ms}ms")
        try:
            Path(filename).write_text(result.formatted, encoding="utf-8")
        except OSError as exc:
            logger.error("Unable to write file: %s\n%s", filename, exc)
            status.record(ExitCode.ERROR)
    elif argv.get("debug-check"):
        if result.formatted:
            context.console.print(result.formatted)
        else:
            status.record(ExitCode.ERROR)
    elif not argv.get("list-different"):
        write_output(context, result, options)


def format_files(context: Context) -> ExitCode:
    """Format every file selected by the positional patterns.

    Raises:
        ConfigurationError: If a config file is malformed (the run stops).
        ValidationError: If a config value is invalid (the run stops).
    """
    status = RunStatus()
    argv: dict[str, Any] = context.argv
    ignorer: Ignorer = create_ignorer(argv.get("ignore-path"))

    with_node_modules: bool = bool(argv.get("with-node-modules"))
    patterns: list[str] = list(context.file_patterns)
    if not with_node_modules:
        patterns.extend(NODE_MODULES_PATTERNS)

    try:
        filenames: list[str] = expand_patterns(
            context.file_patterns, with_node_modules=with_node_modules
        )
    except (OSError, ValueError) as exc:
        logger.error("Unable to expand glob patterns: %s\n%s", " ".join(patterns), exc)
        status.record(ExitCode.ERROR)
        return status.exit_code

    if not filenames:
        logger.error("No matching files. Patterns tried: %s", " ".join(patterns))
        status.record(ExitCode.ERROR)
        return status.exit_code

    checking: bool = bool(
        argv.get("debug-check") or argv.get("write") or argv.get("list-different")
    )
    for filename in filenames:
        options: dict[str, Any] = get_options_for_file(context, filename)
        ignored: bool = ignorer.ignores(filename)
        if ignored and checking:
            logger.debug("Skipping ignored file %s", filename)
            continue
        _format_file(context, filename, options, ignored, status)

    return status.exit_code

