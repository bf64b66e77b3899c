# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : errors.py
#   file_relpath : src/fmtopts/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Exceptions raised by the FmtOpts resolution engine.

The engine never terminates the process: it raises one of the exceptions
below and leaves the decision to halt or continue to the caller (see
``fmtopts.cli.main``).

Taxonomy:
    - `ConfigurationError`: malformed or unreadable config file, or a plugin
      that cannot be loaded. Fatal for the whole run.
    - `ValidationError`: an option value violates the schema. Fatal for the
      whole run.
    - `ParseError`: the formatting engine rejected the input. Recoverable;
      reported per file.
    - `DebugCheckError`: ``--debug-check`` detected unstable output.
      Recoverable; reported per file.
"""

from __future__ import annotations


class FmtoptsError(Exception):
    """Base class for all FmtOpts errors."""


class ConfigurationError(FmtoptsError):
    """A config file is malformed or unreadable."""


class PluginLoadError(ConfigurationError):
    """A plugin named on the command line or in a config file cannot be loaded."""


class ValidationError(FmtoptsError):
    """An option value does not satisfy its schema entry."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Validation Error: {message}")
        self.detail = message


class ParseError(FmtoptsError):
    """The formatting engine could not parse the input.

    Attributes:
        loc: ``(line, column)`` of the offending input, 1-based, if known.
    """

    def __init__(self, message: str, loc: tuple[int, int] | None = None) -> None:
        super().__init__(message)
        self.loc = loc

    def __str__(self) -> str:
        message: str = super().__str__()
        if self.loc is None:
            return message
        line, column = self.loc
        return f"{message} ({line}:{column})"


class UndefinedParserError(FmtoptsError):
    """No formatter is registered for the requested parser."""


class DebugCheckError(FmtoptsError):
    """Formatting the output a second time produced a different result."""
