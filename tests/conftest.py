# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Pytest configuration for the FmtOpts test suite.

This file sets up global fixtures and customizes the logging configuration
for test runs, ensuring consistent and verbose logging output during testing.

Notes:
    Tests that resolve options or discover config files must run inside the
    `isolation` fixture: config discovery walks up from the working directory
    and would otherwise pick up the repository's own ``pyproject.toml``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest
from hypothesis import settings

from fmtopts.config import logging

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

settings.register_profile("thorough", max_examples=1000)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return cast("Callable[[F], F]", pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_fmtopts_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("FMTOPTS_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with an isolated temporary directory as the working directory.

    A ``.editorconfig`` marked ``root = true`` keeps discovery from reaching
    files outside the temporary directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory.
        monkeypatch (pytest.MonkeyPatch): Used to change the working directory.

    Returns:
        Path: The temporary working directory.
    """
    (tmp_path / ".editorconfig").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
