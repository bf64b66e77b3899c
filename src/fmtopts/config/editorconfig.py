# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : editorconfig.py
#   file_relpath : src/fmtopts/config/editorconfig.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Read ``.editorconfig`` properties relevant to formatting.

Only a handful of EditorConfig properties map onto formatting options:

| EditorConfig          | Option        |
|-----------------------|---------------|
| ``indent_style``      | ``use_tabs``  |
| ``indent_size``       | ``tab_width`` |
| ``tab_width``         | ``tab_width`` |
| ``max_line_length``   | ``print_width`` |
| ``end_of_line``       | ``end_of_line`` |

Files are collected from the target directory upwards until one declares
``root = true``; nearer files override farther ones, and later sections
override earlier ones within a file. Section globs are matched with
`pathspec` (gitwildmatch), after expanding ``{a,b}`` alternatives.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from fmtopts.config.logging import get_logger
from fmtopts.constants import EDITORCONFIG_FILE_NAME

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger

logger: FmtoptsLogger = get_logger(__name__)

_SECTION_RE: Final[re.Pattern[str]] = re.compile(r"^\s*\[(?P<glob>.+)\]\s*$")
_PROPERTY_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<key>[^=:]+?)\s*[=:]\s*(?P<value>.*?)\s*$"
)
_BRACES_RE: Final[re.Pattern[str]] = re.compile(r"\{([^{}]*,[^{}]*)\}")
_RANGE_RE: Final[re.Pattern[str]] = re.compile(r"\{(-?\d+)\.\.(-?\d+)\}")

_END_OF_LINE_VALUES: Final[frozenset[str]] = frozenset({"lf", "crlf", "cr"})


def expand_braces(glob: str) -> list[str]:
    """Expand ``{a,b}`` alternatives and ``{n..m}`` integer ranges.

    ``*.{js,py}`` becomes ``*.js`` and ``*.py``; ``file{1..3}.txt`` becomes
    ``file1.txt``, ``file2.txt`` and ``file3.txt``.
    """
    numeric: re.Match[str] | None = _RANGE_RE.search(glob)
    if numeric is not None:
        low, high = sorted((int(numeric.group(1)), int(numeric.group(2))))
        head, tail = glob[: numeric.start()], glob[numeric.end() :]
        return [item for n in range(low, high + 1) for item in expand_braces(f"{head}{n}{tail}")]
    match: re.Match[str] | None = _BRACES_RE.search(glob)
    if match is None:
        return [glob]
    expanded: list[str] = []
    for alternative in match.group(1).split(","):
        expanded.extend(expand_braces(glob[: match.start()] + alternative + glob[match.end() :]))
    return expanded


def parse_editorconfig(text: str) -> tuple[bool, list[tuple[str, dict[str, str]]]]:
    """Parse an ``.editorconfig`` document.

    Returns:
        tuple[bool, list[tuple[str, dict[str, str]]]]: ``(is_root, sections)`` where
        each section is ``(glob, properties)`` in file order. Keys and values are
        lowercased.
    """
    is_root: bool = False
    sections: list[tuple[str, dict[str, str]]] = []
    current: dict[str, str] | None = None

    for line in text.splitlines():
        stripped: str = line.strip()
        if not stripped or stripped[0] in "#;":
            continue
        section: re.Match[str] | None = _SECTION_RE.match(stripped)
        if section is not None:
            current = {}
            sections.append((section.group("glob"), current))
            continue
        prop: re.Match[str] | None = _PROPERTY_RE.match(stripped)
        if prop is None:
            continue
        key: str = prop.group("key").lower()
        value: str = prop.group("value").lower()
        if current is None:
            if key == "root":
                is_root = value == "true"
        else:
            current[key] = value

    return is_root, sections


def _section_matches(glob: str, relpath: str) -> bool:
    patterns: list[str] = expand_braces(glob)
    spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, patterns)
    return spec.match_file(relpath)


def _to_int(value: str | None) -> int | None:
    if value is None or not value.isdigit():
        return None
    return int(value)


def editorconfig_to_options(properties: dict[str, str]) -> dict[str, Any]:
    """Map EditorConfig properties onto option values keyed by API name."""
    options: dict[str, Any] = {}

    indent_style: str | None = properties.get("indent_style")
    if indent_style in ("tab", "space"):
        options["use_tabs"] = indent_style == "tab"

    indent_size: str | None = properties.get("indent_size")
    tab_width: int | None = _to_int(properties.get("tab_width"))
    if indent_size == "tab":
        if tab_width is not None:
            options["tab_width"] = tab_width
    else:
        size: int | None = _to_int(indent_size)
        if size is not None:
            options["tab_width"] = size
        elif tab_width is not None:
            options["tab_width"] = tab_width

    max_line_length: int | None = _to_int(properties.get("max_line_length"))
    if max_line_length is not None:
        options["print_width"] = max_line_length

    end_of_line: str | None = properties.get("end_of_line")
    if end_of_line in _END_OF_LINE_VALUES:
        options["end_of_line"] = end_of_line

    return options


def editorconfig_files(file_path: Path) -> list[Path]:
    """Return the ``.editorconfig`` files that apply to ``file_path``, farthest first."""
    found: list[Path] = []
    current: Path = file_path.resolve().parent
    while True:
        candidate: Path = current / EDITORCONFIG_FILE_NAME
        if candidate.is_file():
            found.append(candidate)
            try:
                is_root, _ = parse_editorconfig(candidate.read_text(encoding="utf-8"))
            except OSError as exc:
                logger.debug("Ignoring unreadable %s: %s", candidate, exc)
                is_root = False
            if is_root:
                break
        if current.parent == current:
            break
        current = current.parent
    found.reverse()
    return found


def load_editorconfig(file_path: Path) -> dict[str, Any] | None:
    """Return the formatting options ``.editorconfig`` files define for ``file_path``.

    Returns:
        dict[str, Any] | None: Options keyed by API name, or None when no
        ``.editorconfig`` property applies.
    """
    files: list[Path] = editorconfig_files(file_path)
    if not files:
        return None

    target: Path = file_path.resolve()
    properties: dict[str, str] = {}
    for path in files:
        try:
            _, sections = parse_editorconfig(path.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.debug("Ignoring unreadable %s: %s", path, exc)
            continue
        try:
            relpath: str = target.relative_to(path.parent).as_posix()
        except ValueError:
            continue
        for glob, props in sections:
            if _section_matches(glob, relpath):
                properties.update(props)

    options: dict[str, Any] = editorconfig_to_options(properties)
    logger.debug("EditorConfig options for %s: %s", file_path, options)
    return options or None
