# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : loader.py
#   file_relpath : src/fmtopts/config/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Discover and load FmtOpts configuration files.

Config files are TOML documents holding option values keyed by API name::

    print_width = 100
    semi = false
    plugins = ["fmtopts_ini"]

    [[overrides]]
    files = ["*.md"]
    exclude_files = ["CHANGELOG.md"]
    options = { prose_wrap = "always" }

Discovery walks upward from the directory of the file being formatted and
stops at the first directory holding a config: ``.fmtoptsrc.toml``,
``fmtopts.toml``, or a ``pyproject.toml`` with a ``[tool.fmtopts]`` table
(checked in this order). The nearest config wins; configs of parent
directories are never merged in.

``overrides`` entries apply in order when the file path, relative to the
config directory, matches ``files`` but not ``exclude_files`` (gitwildmatch
patterns, evaluated with `pathspec`).

Read and parse failures raise
[`ConfigurationError`][fmtopts.errors.ConfigurationError].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern
from tomlkit.exceptions import ParseError as TomlkitParseError

from fmtopts.config.editorconfig import load_editorconfig
from fmtopts.config.logging import get_logger
from fmtopts.constants import CONFIG_FILE_NAMES, PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from fmtopts.errors import ConfigurationError

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger

logger: FmtoptsLogger = get_logger(__name__)

TomlTable = dict[str, Any]

OVERRIDES_KEY = "overrides"


@dataclass(frozen=True)
class Override:
    """Options applied to the files matching ``files`` and not ``exclude_files``."""

    files: tuple[str, ...]
    exclude_files: tuple[str, ...] = ()
    options: TomlTable = field(default_factory=dict)

    def matches(self, relpath: str) -> bool:
        """Return True if the POSIX path ``relpath`` is selected by this override."""
        included: PathSpec = PathSpec.from_lines(GitWildMatchPattern, self.files)
        if not included.match_file(relpath):
            return False
        if not self.exclude_files:
            return True
        excluded: PathSpec = PathSpec.from_lines(GitWildMatchPattern, self.exclude_files)
        return not excluded.match_file(relpath)


@dataclass(frozen=True)
class ConfigFile:
    """A loaded config file."""

    path: Path
    options: TomlTable = field(default_factory=dict)
    overrides: tuple[Override, ...] = ()

    def options_for(self, file_path: Path | None) -> TomlTable:
        """Return the top-level options with the matching overrides applied."""
        merged: TomlTable = dict(self.options)
        if file_path is None or not self.overrides:
            return merged

        try:
            relpath: str = file_path.resolve().relative_to(self.path.parent.resolve()).as_posix()
        except ValueError:
            relpath = file_path.name
        for override in self.overrides:
            if override.matches(relpath):
                logger.trace("Override %s applies to %s", override.files, relpath)
                merged.update(override.options)
        return merged


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file into plain Python values.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    try:
        return tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigurationError(f"Invalid configuration file {path}: {exc}") from exc


def _pyproject_table(path: Path) -> TomlTable | None:
    """Return the ``[tool.fmtopts]`` table of a ``pyproject.toml``, or None if absent."""
    data: TomlTable = load_toml_dict(path)
    tool: Any = data.get("tool", {})
    table: Any = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ConfigurationError(f"[tool.{PYPROJECT_TOOL_TABLE}] in {path} must be a table")
    return table


def _parse_overrides(path: Path, raw: Any) -> tuple[Override, ...]:
    if not isinstance(raw, list):
        raise ConfigurationError(f"'{OVERRIDES_KEY}' in {path} must be an array of tables")

    overrides: list[Override] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"'{OVERRIDES_KEY}[{index}]' in {path} must be a table")
        files: Any = entry.get("files", [])
        exclude_files: Any = entry.get("exclude_files", [])
        options: Any = entry.get("options", {})
        if isinstance(files, str):
            files = [files]
        if isinstance(exclude_files, str):
            exclude_files = [exclude_files]
        if not isinstance(files, list) or not files:
            raise ConfigurationError(
                f"'{OVERRIDES_KEY}[{index}].files' in {path} must list at least one pattern"
            )
        if not isinstance(exclude_files, list):
            raise ConfigurationError(
                f"'{OVERRIDES_KEY}[{index}].exclude_files' in {path} must be an array"
            )
        if not isinstance(options, dict):
            raise ConfigurationError(
                f"'{OVERRIDES_KEY}[{index}].options' in {path} must be a table"
            )
        overrides.append(
            Override(
                files=tuple(str(pattern) for pattern in files),
                exclude_files=tuple(str(pattern) for pattern in exclude_files),
                options=options,
            )
        )
    return tuple(overrides)


def load_config_file(path: Path) -> ConfigFile:
    """Load the config file at ``path``.

    A ``pyproject.toml`` contributes its ``[tool.fmtopts]`` table (empty when absent).

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    logger.debug("Loading config file: %s", path)
    if path.name == PYPROJECT_FILE_NAME:
        data: TomlTable = _pyproject_table(path) or {}
    else:
        data = load_toml_dict(path)

    options: TomlTable = dict(data)
    overrides: tuple[Override, ...] = ()
    if OVERRIDES_KEY in options:
        overrides = _parse_overrides(path, options.pop(OVERRIDES_KEY))
    return ConfigFile(path=path, options=options, overrides=overrides)


def find_config_file(start: Path) -> Path | None:
    """Return the nearest config file in ``start`` or one of its parents, else None."""
    current: Path = start.resolve()
    while True:
        for name in CONFIG_FILE_NAMES:
            candidate: Path = current / name
            if candidate.is_file():
                logger.debug("Discovered config file: %s", candidate)
                return candidate

        pyproject: Path = current / PYPROJECT_FILE_NAME
        if pyproject.is_file() and _pyproject_table(pyproject) is not None:
            logger.debug("Discovered config file: %s", pyproject)
            return pyproject

        if current.parent == current:
            return None
        current = current.parent


def _search_start(file_path: Path | None) -> Path:
    if file_path is None:
        return Path.cwd()
    return file_path.parent


def resolve_config_file(file_path: Path | str | None) -> Path | None:
    """Return the config file that applies to ``file_path`` (or the cwd when None)."""
    path: Path | None = Path(file_path) if file_path is not None else None
    return find_config_file(_search_start(path))


def resolve_config(
    file_path: Path | str | None,
    *,
    editorconfig: bool = False,
    config: Path | str | None = None,
) -> TomlTable | None:
    """Return the config options that apply to ``file_path``, keyed by API name.

    Args:
        file_path (Path | str | None): The file being formatted; None searches from the cwd.
        editorconfig (bool): Whether ``.editorconfig`` files contribute the lowest layer.
        config (Path | str | None): Explicit config file, skipping discovery.

    Returns:
        TomlTable | None: The merged options, or None if neither a config file nor
        ``.editorconfig`` data was found. A config file without options yields ``{}``.

    Raises:
        ConfigurationError: If the config file cannot be read or is malformed.
    """
    path: Path | None = Path(file_path) if file_path is not None else None

    config_path: Path | None
    if config is not None:
        config_path = Path(config)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file(_search_start(path))

    editorconfig_options: TomlTable | None = None
    if editorconfig:
        editorconfig_options = load_editorconfig(path if path is not None else Path.cwd() / "-")

    if config_path is None and editorconfig_options is None:
        logger.debug("No configuration found for %s", file_path)
        return None

    merged: TomlTable = dict(editorconfig_options or {})
    if config_path is not None:
        merged.update(load_config_file(config_path).options_for(path))
    logger.debug("Resolved configuration for %s: %s", file_path, merged)
    return merged
