# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : constants.py
#   file_relpath : src/fmtopts/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""FmtOpts Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

FMTOPTS_VERSION: str = get_version("fmtopts")

# Config files searched in each directory, nearest directory wins.
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (".fmtoptsrc.toml", "fmtopts.toml")
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[str] = "fmtopts"
EDITORCONFIG_FILE_NAME: Final[str] = ".editorconfig"

DEFAULT_IGNORE_FILE: Final[str] = ".fmtoptsignore"

PLUGIN_ENTRYPOINT_GROUP: Final[str] = "fmtopts.plugins"

ENV_LOG_LEVEL: Final[str] = "FMTOPTS_LOG_LEVEL"

# Usage categories (rendered as "<category> options:")
CATEGORY_CONFIG: Final[str] = "Config"
CATEGORY_EDITOR: Final[str] = "Editor"
CATEGORY_FORMAT: Final[str] = "Format"
CATEGORY_OTHER: Final[str] = "Other"
CATEGORY_OUTPUT: Final[str] = "Output"

# All but the last entry are rendered first, the last entry always closes the usage.
CATEGORY_ORDER: Final[tuple[str, ...]] = (
    CATEGORY_OUTPUT,
    CATEGORY_FORMAT,
    CATEGORY_CONFIG,
    CATEGORY_EDITOR,
    CATEGORY_OTHER,
)

USAGE_SUMMARY: Final[str] = """
Usage: fmtopts [options] [file/glob ...]

By default, output is written to stdout.
Stdin is read if it is piped to fmtopts and no files are given.
""".strip()
