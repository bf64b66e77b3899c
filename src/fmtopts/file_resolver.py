# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : file_resolver.py
#   file_relpath : src/fmtopts/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Expand file patterns and filter ignored files.

Positional arguments are expanded relative to the current working
directory:

- a glob (``*``, ``?``, ``[``) expands to the matching files, dot files
  included;
- a directory expands recursively to the files it contains;
- a literal path to a file is kept as is;
- a pattern starting with ``!`` removes the matching files (gitwildmatch
  semantics, via `pathspec`).

Files inside ``node_modules`` are skipped unless requested. The result keeps
first-seen order and holds no duplicates.

The ignore file (``.fmtoptsignore`` by default) uses ``.gitignore`` syntax;
its patterns are evaluated against paths relative to the working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final, Iterable

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from fmtopts.config.logging import get_logger
from fmtopts.errors import ConfigurationError

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger

logger: FmtoptsLogger = get_logger(__name__)

NODE_MODULES: Final[str] = "node_modules"

_GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")


def is_glob(pattern: str) -> bool:
    """Return True if ``pattern`` contains glob metacharacters."""
    return any(char in _GLOB_CHARS for char in pattern)


def load_patterns_from_file(path: Path) -> list[str]:
    """Load non-empty, non-comment patterns from a ``.gitignore``-style file.

    Args:
        path (Path): Pattern file.

    Returns:
        list[str]: Patterns, or an empty list when the file does not exist.

    Raises:
        ConfigurationError: If the file exists but cannot be read.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No ignore file at %s", path)
        return []
    except OSError as exc:
        raise ConfigurationError(f"Unable to read {path}: {exc}") from exc
    patterns: list[str] = []
    for line in text.splitlines():
        s: str = line.strip()
        if not s or s.startswith("#"):
            continue
        patterns.append(s)
    logger.debug("Loaded %d pattern(s) from %s", len(patterns), path)
    return patterns


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


class Ignorer:
    """Answer whether a path is excluded by an ignore file."""

    def __init__(self, patterns: Iterable[str], base: Path | None = None) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self.base: Path = base or Path.cwd()
        self._spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, self.patterns)

    def ignores(self, file_path: str | Path) -> bool:
        """Return True if ``file_path`` matches the ignore patterns."""
        if not self.patterns:
            return False
        return self._spec.match_file(_rel_for_match(Path(file_path), self.base))


def create_ignorer(ignore_path: str | Path | None) -> Ignorer:
    """Build an `Ignorer` from ``ignore_path`` (no file: nothing is ignored)."""
    if not ignore_path:
        return Ignorer(())
    return Ignorer(load_patterns_from_file(Path(ignore_path)))


def _glob(pattern: str, cwd: Path) -> list[Path]:
    path = Path(pattern)
    if path.is_absolute():
        anchor = Path(path.anchor)
        return sorted(anchor.glob(str(path.relative_to(anchor))))
    return sorted(cwd.glob(pattern))


def expand_path(pattern: str, cwd: Path) -> list[Path]:
    """Expand one positive pattern into files (globs, directories recursively, files)."""
    if is_glob(pattern):
        matches: list[Path] = []
        for match in _glob(pattern, cwd):
            if match.is_dir():
                matches.extend(sorted(p for p in match.rglob("*") if p.is_file()))
            elif match.is_file():
                matches.append(match)
        return matches
    path: Path = Path(pattern) if Path(pattern).is_absolute() else cwd / pattern
    if path.is_dir():
        return sorted(p for p in path.rglob("*") if p.is_file())
    if path.is_file():
        return [path]
    return []


def _in_node_modules(relpath: str) -> bool:
    return NODE_MODULES in Path(relpath).parts


def expand_patterns(
    patterns: Iterable[str],
    *,
    with_node_modules: bool = False,
    cwd: Path | None = None,
) -> list[str]:
    """Return the files selected by ``patterns``, relative to ``cwd`` when possible.

    Args:
        patterns (Iterable[str]): Positive patterns, and negated ``!`` patterns.
        with_node_modules (bool): Whether files inside ``node_modules`` are kept.
        cwd (Path | None): Base directory, default the current working directory.

    Returns:
        list[str]: POSIX-style paths, in first-seen order, without duplicates.
    """
    base: Path = cwd or Path.cwd()
    positive: list[str] = []
    negative: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            negative.append(pattern[1:])
        else:
            positive.append(pattern)

    exclude: PathSpec | None = (
        PathSpec.from_lines(GitWildMatchPattern, negative) if negative else None
    )

    selected: dict[str, None] = {}
    for pattern in positive:
        expanded: list[Path] = expand_path(pattern, base)
        if not expanded:
            logger.debug("No matches for pattern: %s", pattern)
        for path in expanded:
            relpath: str = _rel_for_match(path, base)
            if not with_node_modules and _in_node_modules(relpath):
                continue
            if exclude is not None and exclude.match_file(relpath):
                continue
            selected.setdefault(relpath, None)

    logger.trace("Files to process: %d -- %s", len(selected), list(selected))
    return list(selected)
