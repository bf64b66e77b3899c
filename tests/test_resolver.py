# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_resolver.py
#   file_relpath : tests/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for per-file option resolution (`fmtopts.resolver`)."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fmtopts.context import Context, create_context, init_context
from fmtopts.errors import ConfigurationError, ValidationError
from fmtopts.options.schema import build_schema
from fmtopts.resolver import (
    ConfigPrecedence,
    apply_config_precedence,
    cliify_options,
    get_options,
    get_options_for_file,
)
from tests.cli.conftest import SAMPLE_PLUGIN


def make_context(*args: str) -> Context:
    return init_context(create_context(args))


def write_config(directory: Path, text: str) -> None:
    (directory / ".fmtoptsrc.toml").write_text(text, encoding="utf-8")


def test_get_options_keeps_forwarded_values() -> None:
    schema = build_schema()
    argv = {"print-width": 100, "write": True, "stdin-filepath": "x.txt", "semi": None}

    assert get_options(argv, schema) == {"print_width": 100, "filepath": "x.txt"}


def test_cliify_options() -> None:
    schema = build_schema()

    assert cliify_options({"print_width": 1, "filepath": "a", "made_up": 2}, schema) == {
        "print-width": 1,
        "stdin-filepath": "a",
        "made-up": 2,
    }


def test_filepath_is_always_present(isolation: Path) -> None:
    assert get_options_for_file(make_context(), None)["filepath"] is None
    assert get_options_for_file(make_context(), "a.txt")["filepath"] == "a.txt"


def test_cli_values_without_config(isolation: Path) -> None:
    resolved = get_options_for_file(make_context("--print-width", "100", "a.txt"), "a.txt")

    assert resolved["print_width"] == 100
    assert "semi" not in resolved
    assert "write" not in resolved


@pytest.mark.parametrize(
    "precedence, args, expected",
    [
        ("cli-override", [], 120),
        ("cli-override", ["--print-width", "100"], 100),
        ("file-override", ["--print-width", "100"], 120),
        ("file-override", [], 120),
        ("prefer-file", ["--print-width", "100"], 120),
    ],
)
def test_config_precedence(
    isolation: Path, precedence: str, args: list[str], expected: int
) -> None:
    write_config(isolation, "print_width = 120\n")
    context = make_context("--config-precedence", precedence, *args, "a.txt")

    assert get_options_for_file(context, "a.txt")["print_width"] == expected


def test_cli_override_keeps_other_cli_values(isolation: Path) -> None:
    write_config(isolation, "print_width = 120\n")
    context = make_context("--no-semi", "a.txt")

    resolved = get_options_for_file(context, "a.txt")

    assert resolved["print_width"] == 120
    assert resolved["semi"] is False


def test_file_override_merges_cli_values(isolation: Path) -> None:
    write_config(isolation, "print_width = 120\n")
    context = make_context("--config-precedence", "file-override", "--use-tabs", "a.txt")

    resolved = get_options_for_file(context, "a.txt")

    assert resolved["print_width"] == 120
    assert resolved["use_tabs"] is True


def test_prefer_file_ignores_cli_when_config_exists(isolation: Path) -> None:
    write_config(isolation, "")
    context = make_context("--config-precedence", "prefer-file", "--print-width", "100", "a.txt")

    assert get_options_for_file(context, "a.txt") == {"filepath": "a.txt"}


def test_prefer_file_without_config_uses_cli(isolation: Path) -> None:
    context = make_context("--config-precedence", "prefer-file", "--print-width", "100", "a.txt")

    assert get_options_for_file(context, "a.txt")["print_width"] == 100


def test_apply_config_precedence_without_config() -> None:
    context = make_context("--print-width", "90")

    for precedence in ConfigPrecedence:
        context.argv["config-precedence"] = precedence.value
        assert apply_config_precedence(context, None)["print_width"] == 90


def test_no_config_skips_discovery(isolation: Path, caplog: pytest.LogCaptureFixture) -> None:
    write_config(isolation, "print_width = 120\n")
    context = make_context("--no-config", "a.txt")

    with caplog.at_level(logging.DEBUG):
        resolved = get_options_for_file(context, "a.txt")

    assert "print_width" not in resolved
    assert "'--no-config' option found, skip loading config file." in caplog.text


def test_explicit_config_path(isolation: Path) -> None:
    write_config(isolation, "print_width = 120\n")
    (isolation / "other.toml").write_text("print_width = 42\n", encoding="utf-8")
    context = make_context("--config", "other.toml", "a.txt")

    assert get_options_for_file(context, "a.txt")["print_width"] == 42


def test_editorconfig_is_the_lowest_layer(isolation: Path) -> None:
    (isolation / ".editorconfig").write_text(
        "root = true\n[*]\nindent_style = tab\nmax_line_length = 90\n", encoding="utf-8"
    )
    write_config(isolation, "print_width = 120\n")

    resolved = get_options_for_file(make_context("a.txt"), "a.txt")
    without = get_options_for_file(make_context("--no-editorconfig", "a.txt"), "a.txt")

    assert resolved["use_tabs"] is True
    assert resolved["print_width"] == 120
    assert "use_tabs" not in without


def test_infinity_in_config(isolation: Path) -> None:
    write_config(isolation, "range_end = 'Infinity'\n")

    assert get_options_for_file(make_context("a.txt"), "a.txt")["range_end"] == math.inf


def test_invalid_config_value_raises(isolation: Path) -> None:
    write_config(isolation, "print_width = 'wide'\n")

    with pytest.raises(ValidationError, match="Invalid print_width value"):
        get_options_for_file(make_context("a.txt"), "a.txt")


def test_malformed_config_raises(isolation: Path) -> None:
    write_config(isolation, "print_width = \n")

    with pytest.raises(ConfigurationError):
        get_options_for_file(make_context("a.txt"), "a.txt")


def test_config_plugins_are_scoped(isolation: Path) -> None:
    write_config(isolation, f"plugins = ['{SAMPLE_PLUGIN}']\nquote_style = 'single'\n")
    context = make_context("x.ini")
    saved = context.schema

    resolved = get_options_for_file(context, "x.ini")

    assert resolved["quote_style"] == "single"
    assert resolved["plugins"] == (SAMPLE_PLUGIN,)
    assert context.schema is saved
    assert context.scope_depth == 0


def test_resolution_is_idempotent(isolation: Path) -> None:
    write_config(isolation, "print_width = 120\nsemi = false\n")
    context = make_context("--use-tabs", "a.txt")

    assert get_options_for_file(context, "a.txt") == get_options_for_file(context, "a.txt")


@given(
    print_width=st.integers(min_value=0, max_value=500),
    use_tabs=st.booleans(),
    trailing_comma=st.sampled_from(["none", "es5", "all"]),
)
def test_resolution_is_idempotent_for_any_cli_values(
    print_width: int, use_tabs: bool, trailing_comma: str
) -> None:
    args = [
        "--no-config",
        "--print-width",
        str(print_width),
        "--use-tabs" if use_tabs else "--no-use-tabs",
        "--trailing-comma",
        trailing_comma,
        "a.txt",
    ]
    context = make_context(*args)

    first = get_options_for_file(context, "a.txt")

    assert first == get_options_for_file(context, "a.txt")
    assert first["print_width"] == print_width
    assert first["trailing_comma"] == trailing_comma
    assert first["filepath"] == "a.txt"


def test_config_plugin_option_given_on_the_cli(isolation: Path) -> None:
    write_config(isolation, f"plugins = ['{SAMPLE_PLUGIN}']\n")
    context = make_context("--quote-style", "single", "x.ini")

    assert context.file_patterns == ("x.ini",)
    assert get_options_for_file(context, "x.ini")["quote_style"] == "single"


def test_deprecated_cli_option_is_not_resolved(isolation: Path) -> None:
    context = make_context("--jsx-bracket-same-line", "a.txt")

    resolved = get_options_for_file(context, "a.txt")

    assert "jsx_bracket_same_line" not in resolved
    assert resolved["filepath"] == "a.txt"


@pytest.mark.parametrize("precedence", [p.value for p in ConfigPrecedence])
def test_deprecated_config_option_is_not_resolved(isolation: Path, precedence: str) -> None:
    write_config(isolation, "jsx_bracket_same_line = true\nprint_width = 120\n")
    context = make_context("--config-precedence", precedence, "a.txt")

    resolved = get_options_for_file(context, "a.txt")

    assert "jsx_bracket_same_line" not in resolved
    assert resolved["print_width"] == 120
    assert resolved["filepath"] == "a.txt"
