# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : __init__.py
#   file_relpath : src/fmtopts/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""FmtOpts package.

FmtOpts resolves the options of a source formatter from the command line,
configuration files and plugins, then drives formatting of files and stdin.
The option schema is data-driven: plugins contribute options, defaults and
parsers at runtime.
"""

from __future__ import annotations
