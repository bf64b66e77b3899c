# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : engine.py
#   file_relpath : src/fmtopts/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Formatting engine interface and the default engine.

The resolution core only needs ``format(text, options)``: the
[`FormatEngine`][fmtopts.engine.FormatEngine] protocol. The default engine
dispatches to the formatter of a plugin:

1. the explicit ``parser`` option wins;
2. otherwise the parser is inferred from ``filepath`` using the plugin
   languages (exact file names first, then extensions);
3. otherwise the built-in ``text`` formatter is used.

The ``text`` formatter normalizes whitespace only: it strips trailing
whitespace, re-indents leading whitespace per ``use_tabs``/``tab_width``,
collapses trailing blank lines into a single final newline and applies
``end_of_line``. ``range_start``/``range_end`` restrict the work to the lines
they touch, and ``require_pragma``/``insert_pragma`` are honored.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Final, Mapping, Protocol

from fmtopts.config.logging import get_logger
from fmtopts.errors import UndefinedParserError
from fmtopts.options.support import BUILTIN_PARSER, get_default_options
from fmtopts.plugins import load_plugins

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.plugins import Formatter, Plugin

logger: FmtoptsLogger = get_logger(__name__)

PRAGMAS: Final[tuple[str, ...]] = ("@format", "@fmtopts")

_NEWLINE_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")

_END_OF_LINE: Final[dict[str, str]] = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass(frozen=True)
class FormatResult:
    """Formatted text and the cursor position mapped into it (None when not requested)."""

    formatted: str
    cursor_offset: int | None = None


class FormatEngine(Protocol):
    """The formatting service consumed by the resolution core."""

    def format_with_cursor(self, text: str, options: Mapping[str, Any]) -> FormatResult:
        """Format ``text`` with the resolved ``options``.

        Raises:
            ParseError: If the input cannot be parsed.
            UndefinedParserError: If no formatter handles the requested parser.
        """
        ...

    def check(self, text: str, options: Mapping[str, Any]) -> bool:
        """Return True if ``text`` is already formatted."""
        ...


def guess_end_of_line(text: str) -> str:
    """Return the first newline sequence found in ``text`` (default ``\\n``)."""
    match: re.Match[str] | None = _NEWLINE_RE.search(text)
    return match.group(0) if match else "\n"


def has_pragma(text: str) -> bool:
    """Return True if the first non-blank line carries a format pragma."""
    for line in text.splitlines():
        if line.strip():
            return any(pragma in line for pragma in PRAGMAS)
    return False


def _reindent(line: str, use_tabs: bool, tab_width: int) -> str:
    body: str = line.lstrip(" \t")
    leading: str = line[: len(line) - len(body)]
    if not leading:
        return line
    width: int = 0
    for char in leading:
        width = (width // tab_width + 1) * tab_width if char == "\t" else width + 1
    if use_tabs:
        tabs, spaces = divmod(width, tab_width)
        return "\t" * tabs + " " * spaces + body
    return " " * width + body


def format_text(text: str, options: Mapping[str, Any]) -> str:
    """Whitespace-only formatter used when no plugin handles the input."""
    use_tabs: bool = bool(options.get("use_tabs", False))
    tab_width: int = max(int(options.get("tab_width", 2)), 1)
    end_of_line: str = options.get("end_of_line", "auto")
    eol: str = _END_OF_LINE.get(end_of_line) or guess_end_of_line(text)

    range_start: float = options.get("range_start", 0)
    range_end: float = options.get("range_end", math.inf)

    lines: list[str] = _NEWLINE_RE.split(text)
    separators: list[str] = _NEWLINE_RE.findall(text)
    formatted: list[str] = []
    offset: int = 0
    for index, line in enumerate(lines):
        line_end: int = offset + len(line)
        if line_end >= range_start and offset <= range_end:
            line = _reindent(line.rstrip(" \t"), use_tabs, tab_width)
        formatted.append(line)
        offset = line_end + (len(separators[index]) if index < len(separators) else 0)

    while formatted and not formatted[-1].strip():
        formatted.pop()
    if not formatted:
        return ""
    return eol.join(formatted) + eol


def _map_cursor(original: str, formatted: str, cursor_offset: int) -> int:
    """Keep the cursor on the same line, clamping its column to the new line length."""
    cursor_offset = min(max(cursor_offset, 0), len(original))
    before: str = original[:cursor_offset]
    line_index: int = len(_NEWLINE_RE.findall(before))
    column: int = len(_NEWLINE_RE.split(before)[-1])

    new_lines: list[str] = _NEWLINE_RE.split(formatted)
    eol_len: int = len(guess_end_of_line(formatted))
    if line_index >= len(new_lines):
        return len(formatted)
    start: int = sum(len(line) + eol_len for line in new_lines[:line_index])
    return start + min(column, len(new_lines[line_index]))


class DefaultEngine:
    """Plugin-dispatching engine with a built-in ``text`` formatter."""

    def resolve_formatter(
        self, options: Mapping[str, Any]
    ) -> tuple[str, Formatter, Plugin | None]:
        """Return ``(parser_name, formatter, plugin)`` for the resolved ``options``.

        ``plugin`` is None for the built-in ``text`` formatter.

        Raises:
            UndefinedParserError: If the requested parser has no formatter.
        """
        plugins: tuple[Plugin, ...] = load_plugins(options.get("plugins", ()))
        parser: str | None = options.get("parser") or infer_parser(
            options.get("filepath"), plugins
        )
        if parser is None or parser == BUILTIN_PARSER:
            return BUILTIN_PARSER, format_text, None

        for plugin in plugins:
            formatter: Formatter | None = plugin.formatters.get(parser)
            if formatter is not None:
                return parser, formatter, plugin
        raise UndefinedParserError(f'Couldn\'t resolve parser "{parser}".')

    def format_with_cursor(self, text: str, options: Mapping[str, Any]) -> FormatResult:
        """Format ``text``; see `FormatEngine.format_with_cursor`."""
        if options.get("require_pragma") and not has_pragma(text):
            logger.debug("Skipping %s: no pragma found", options.get("filepath"))
            return FormatResult(text, _cursor(options))

        parser, formatter, plugin = self.resolve_formatter(options)
        logger.trace("Formatting %s with parser '%s'", options.get("filepath"), parser)
        effective: dict[str, Any] = get_default_options(
            load_plugins(options.get("plugins", ())), plugin.name if plugin else None
        )
        effective.update(options)
        effective["parser"] = parser
        formatted: str = formatter(text, effective)

        if options.get("insert_pragma") and not has_pragma(formatted):
            eol: str = guess_end_of_line(formatted)
            formatted = f"{PRAGMAS[0]}{eol}{eol}{formatted}"

        cursor_offset: int | None = _cursor(options)
        if cursor_offset is not None:
            cursor_offset = _map_cursor(text, formatted, cursor_offset)
        return FormatResult(formatted, cursor_offset)

    def check(self, text: str, options: Mapping[str, Any]) -> bool:
        """Return True if ``text`` is already formatted."""
        return self.format_with_cursor(text, options).formatted == text


def _cursor(options: Mapping[str, Any]) -> int | None:
    cursor_offset: Any = options.get("cursor_offset", -1)
    if not isinstance(cursor_offset, int) or cursor_offset < 0:
        return None
    return cursor_offset


def infer_parser(filepath: str | None, plugins: tuple[Plugin, ...]) -> str | None:
    """Infer the parser for ``filepath`` from the plugin languages, else None."""
    if not filepath:
        return None
    path = PurePath(filepath)
    for plugin in plugins:
        for language in plugin.languages:
            if path.name in language.filenames and language.parsers:
                return language.parsers[0]
    for plugin in plugins:
        for language in plugin.languages:
            if path.suffix and path.suffix in language.extensions and language.parsers:
                return language.parsers[0]
    return None
