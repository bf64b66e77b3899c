# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : exit_codes.py
#   file_relpath : src/fmtopts/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Defines standardized exit codes used by the FmtOpts CLI application."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the FmtOpts CLI.

    Attributes:
        SUCCESS (int): Every file was processed without problems.
        FAILURE (int): Invalid invocation or options, or ``--list-different``
            found files that are not formatted.
        ERROR (int): A config file could not be loaded, or at least one file
            or pattern failed during a batch run.

    Usage:
        When several outcomes are recorded during a run, the most severe one
        (the highest value) becomes the process exit code:

        ```python
        import subprocess
        from fmtopts.cli.exit_codes import ExitCode

        result = subprocess.run(["fmtopts", "--list-different", "src/*.ini"])
        if result.returncode == ExitCode.FAILURE:
            print("Some files need formatting.")
        ```
    """

    SUCCESS = 0
    FAILURE = 1
    ERROR = 2
