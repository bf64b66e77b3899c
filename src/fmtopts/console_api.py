# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : console_api.py
#   file_relpath : src/fmtopts/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Framework-agnostic console interface for program output.

This protocol is the small surface the resolution and formatting code uses
to emit user-facing output, separate from internal logging. Formatted source
text goes through `write`; everything else goes through `print`.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """Minimal interface for a console used by FmtOpts."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write an informational message to stdout (muted below loglevel ``log``)."""
        ...

    def write(self, text: str, *, nl: bool = False) -> None:
        """Write program output (formatted source) to stdout, regardless of loglevel."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return a styled string (no-op if styling is disabled)."""
        ...
