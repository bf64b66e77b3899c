# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : __main__.py
#   file_relpath : src/fmtopts/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Module entry point for running FmtOpts via ``python -m fmtopts``.

It delegates directly to `fmtopts.cli.main.cli`, the same entry point as the
``fmtopts`` console script.

Examples:
    Format a file to stdout::

        python -m fmtopts --print-width 100 notes.txt
"""

from __future__ import annotations

from fmtopts.cli.main import cli

if __name__ == "__main__":
    cli()
