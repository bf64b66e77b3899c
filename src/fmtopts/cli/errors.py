# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : errors.py
#   file_relpath : src/fmtopts/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Exceptions for the FmtOpts CLI.

Usage:
    Raise these exceptions in the CLI layer to stop the run with a
    standardized message and exit code. Engine exceptions
    ([`fmtopts.errors`][fmtopts.errors]) are translated into them by
    ``fmtopts.cli.main``.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from fmtopts.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from fmtopts.console_api import ConsoleLike


class FmtoptsCliError(click.ClickException):
    """Base class for all FmtOpts CLI errors."""

    exit_code = ExitCode.FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        # Click pops the context before showing the error, so the console is captured here
        ctx: click.Context | None = click.get_current_context(silent=True)
        self.console: ConsoleLike | None = None
        if ctx is not None and isinstance(ctx.obj, dict):
            self.console = ctx.obj.get("console")

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        if self.console is not None:
            self.console.error(
                self.console.styled(f"[error] {self.format_message()}", fg="bright_red")
            )
            return
        super().show(file)


class FmtoptsUsageError(FmtoptsCliError):
    """Invalid combination of flags or invalid option values."""

    exit_code = ExitCode.FAILURE


class FmtoptsConfigError(FmtoptsCliError):
    """A config file or plugin could not be loaded."""

    exit_code = ExitCode.ERROR
