# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for the logging helpers (`fmtopts.config.logging`)."""

from __future__ import annotations

import logging as std_logging

import pytest

from fmtopts.config.logging import (
    SILENT_LEVEL,
    TRACE_LEVEL,
    ChalkFormatter,
    get_logger,
    level_from_loglevel,
    resolve_env_log_level,
    should_log,
)


@pytest.mark.parametrize(
    "loglevel, expected",
    [
        ("silent", SILENT_LEVEL),
        ("error", std_logging.ERROR),
        ("warn", std_logging.WARNING),
        ("log", std_logging.INFO),
        ("debug", std_logging.DEBUG),
        (None, std_logging.INFO),
    ],
)
def test_level_from_loglevel(loglevel: str | None, expected: int) -> None:
    assert level_from_loglevel(loglevel) == expected


def test_should_log() -> None:
    assert should_log("log", "warn")
    assert should_log("log", "log")
    assert not should_log("warn", "log")
    assert not should_log("silent", "error")
    assert should_log("debug", "debug")
    assert not should_log("debug", "bogus")


def test_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_env_log_level() is None

    monkeypatch.setenv("FMTOPTS_LOG_LEVEL", "trace")
    assert resolve_env_log_level() == TRACE_LEVEL

    monkeypatch.setenv("FMTOPTS_LOG_LEVEL", "15")
    assert resolve_env_log_level() == 15


def test_formatter_prefixes_every_line() -> None:
    formatter = ChalkFormatter("[%(levelname)s] %(message)s", enable_color=False)
    record = std_logging.LogRecord("x", std_logging.WARNING, __file__, 1, "a\n%s", ("b",), None)

    assert formatter.format(record) == "[warn] a\n[warn] b"


def test_trace(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("fmtopts.test")

    with caplog.at_level(TRACE_LEVEL):
        logger.trace("tracing %s", "on")

    assert caplog.records[-1].levelno == TRACE_LEVEL
    assert caplog.records[-1].getMessage() == "tracing on"
