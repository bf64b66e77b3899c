# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : logging.py
#   file_relpath : src/fmtopts/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Custom FmtOpts logging with TRACE logging.

This module extends the standard logging module with FmtOpts-specific features,
including a custom TRACE level, a specialized logger class, colored output
formatting, and the mapping from the ``--loglevel`` CLI choice to logging levels.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, TextIO, cast

from yachalk import chalk

from fmtopts.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5

# Above CRITICAL: nothing gets through
SILENT_LEVEL: Final[int] = logging.CRITICAL + 10


class FmtoptsLogger(logging.Logger):
    """Custom logger class for FmtOpts with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    # Expose TRACE_LEVEL as logging.TRACE
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(FmtoptsLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

# `--loglevel` choices, from quietest to noisiest
LOGLEVEL_CHOICES: Final[tuple[str, ...]] = ("silent", "error", "warn", "log", "debug")

_LOGLEVEL_TO_LEVEL: Final[dict[str, int]] = {
    "silent": SILENT_LEVEL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "log": logging.INFO,
    "debug": logging.DEBUG,
}

# Short lowercase labels, e.g. "[warn] Unknown option name ..."
_LEVEL_LABELS: Final[dict[int, str]] = {
    logging.CRITICAL: "error",
    logging.ERROR: "error",
    logging.WARNING: "warn",
    logging.INFO: "info",
    logging.DEBUG: "debug",
    TRACE_LEVEL: "trace",
}


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level.

    Every line of a multi-line message carries the level prefix.
    """

    def __init__(self, fmt: str | None = None, *, enable_color: bool = True) -> None:
        super().__init__(fmt)
        self.enable_color = enable_color

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        label: str = _LEVEL_LABELS.get(level, record.levelname.lower())
        lines: list[str] = record.getMessage().splitlines() or [""]

        rendered: list[str] = []
        for line in lines:
            line_record = logging.makeLogRecord(record.__dict__)
            line_record.levelname = label
            line_record.msg = line
            line_record.args = None
            line_record.exc_info = None
            line_record.exc_text = None
            rendered.append(super().format(line_record))
        message = "\n".join(rendered)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if not self.enable_color:
            return message

        result: str = ""

        # Apply color styles to the message depending on the log severity
        if level >= logging.CRITICAL:
            result = chalk.red_bright(message)
        elif level >= logging.ERROR:
            result = chalk.red(message)
        elif level >= logging.WARNING:
            result = chalk.yellow(message)
        elif level >= logging.INFO:
            result = chalk.green(message)
        elif level >= logging.DEBUG:
            result = chalk.blue(message)
        elif level >= TRACE_LEVEL:
            result = chalk.gray(message)
        else:
            result = chalk.dim.red(message)

        return result


def resolve_env_log_level() -> int | None:
    """Return a logging level from environment or None if unset.

    Honors FMTOPTS_LOG_LEVEL (e.g., "TRACE", "DEBUG", "INFO", numeric "10").
    """
    val = os.environ.get(ENV_LOG_LEVEL)
    if val:
        v = val.strip().upper()
        if v.isdigit():
            return int(v)
        name_to_level = {
            "TRACE": TRACE_LEVEL,
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "WARN": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
            "FATAL": logging.CRITICAL,
            "NOTSET": logging.NOTSET,
        }
        return name_to_level.get(v)
    return None


def level_from_loglevel(loglevel: str | None) -> int:
    """Map a ``--loglevel`` choice to a logging level (default: ``log`` → INFO)."""
    return _LOGLEVEL_TO_LEVEL.get(loglevel or "log", logging.INFO)


def should_log(loglevel: str | None, channel: str) -> bool:
    """Return True if ``channel`` (one of the loglevel choices) is enabled at ``loglevel``.

    ``debug`` enables everything, ``silent`` disables everything.
    """
    current: str = loglevel or "log"
    if current == "silent" or channel not in LOGLEVEL_CHOICES:
        return False
    return LOGLEVEL_CHOICES.index(channel) <= LOGLEVEL_CHOICES.index(current)


class StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler that always writes to the current ``sys.stderr``.

    Test runners and Click's ``CliRunner`` swap ``sys.stderr``; binding at emit
    time keeps records out of closed streams.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property  # type: ignore[override]
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


# The handler installed by `setup_logging`; replaced (never duplicated) on reconfiguration
_handler: logging.Handler | None = None


def setup_logging(level: int | None = None, *, enable_color: bool = True) -> None:
    """Configure the root logger with a specified log level and colored output.

    If ``level`` is None, environment variables are consulted via
    [`resolve_env_log_level`][fmtopts.config.logging.resolve_env_log_level].
    Default is WARNING when unspecified. Records are written to stderr so that
    formatted output on stdout stays clean.
    """
    global _handler

    env_level: int | None = resolve_env_log_level()
    if env_level is not None:
        level = env_level
    if level is None:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Only our own handler is replaced; handlers installed by others (e.g. pytest) stay
    if _handler is not None:
        root_logger.removeHandler(_handler)

    handler = StderrHandler()
    # Use detailed logging format below DEBUG, simpler otherwise
    formatter = ChalkFormatter(
        LOG_FORMAT if level >= logging.DEBUG else DEBUG_LOG_FORMAT,
        enable_color=enable_color,
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    _handler = handler


def get_logger(name: str) -> FmtoptsLogger:
    """Retrieve a FmtoptsLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        FmtoptsLogger: A FmtoptsLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("FmtoptsLogger", logger)
