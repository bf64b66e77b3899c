# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : __init__.py
#   file_relpath : src/fmtopts/options/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Option schema, argument parsing and normalization.

Option values flow through these modules in order: `parser` tokenizes the
command line against a `schema.Schema`, `normalizer` validates and coerces
the values, and `suggest` proposes the closest name for unknown options.
"""

from __future__ import annotations
