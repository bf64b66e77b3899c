# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : console.py
#   file_relpath : src/fmtopts/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Console abstraction for user-facing program output.

This module provides a `ClickConsole` class that separates CLI output from
internal logging. Informational messages honor the ``--loglevel`` option;
formatted source text written with `ClickConsole.write` is never muted.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO, TypedDict

import click

from fmtopts.config.logging import should_log
from fmtopts.console_api import ConsoleLike


# This TypedDict is for documentation and type-checking on the *caller* side.
class StyleKwargs(TypedDict, total=False):
    """Keyword arguments accepted by click.style()."""

    fg: str
    bg: str
    bold: bool
    dim: bool
    underline: bool


class ClickConsole(ConsoleLike):
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes in the output.
        loglevel (str): The ``--loglevel`` choice; messages on quieter channels are muted.
        out (TextIO | None): The text stream to use for standard output.
            Defaults to `sys.stdout`.
        err (TextIO | None): The text stream to use for error output.
            Defaults to `sys.stderr`.
    """

    enable_color: bool
    loglevel: str
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        loglevel: str = "log",
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.loglevel = loglevel
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write an informational message to stdout.

        Args:
            text (str): Message text.
            nl (bool): If True, append a newline.
        """
        if should_log(self.loglevel, "log"):
            click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def write(self, text: str, *, nl: bool = False) -> None:
        """Write program output to stdout, whatever the loglevel.

        Args:
            text (str): Output text, written as is.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr.

        Args:
            text (str): Warning text.
            nl (bool): If True, append a newline.
        """
        if should_log(self.loglevel, "warn"):
            click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr.

        Args:
            text (str): Error text.
            nl (bool): If True, append a newline.
        """
        if should_log(self.loglevel, "error"):
            click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return a styled string using click.style.

        Args:
            text (str): Text to style.
            **style_kwargs (Any): Subset of keyword arguments supported by click.style.
                Expected keys are defined in the StyleKwargs TypedDict.

        Returns:
            str: The styled text (or plain text if color is disabled).
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
