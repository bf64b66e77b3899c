# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : __init__.py
#   file_relpath : src/fmtopts/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""FmtOpts CLI package.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        fmtopts = "fmtopts.cli.main:cli"
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main at module import time
