# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : __init__.py
#   file_relpath : src/fmtopts/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Configuration discovery and logging setup for FmtOpts.

Submodules:
    - ``loader``: TOML config files (``.fmtoptsrc.toml``, ``fmtopts.toml``,
      ``pyproject.toml``) and their ``overrides``.
    - ``editorconfig``: the subset of ``.editorconfig`` mapped onto options.
    - ``logging``: the TRACE-aware logger and ``--loglevel`` mapping.
"""

from __future__ import annotations
