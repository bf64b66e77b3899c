# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_parser.py
#   file_relpath : tests/options/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for the schema-driven argument parser (`fmtopts.options.parser`)."""

from __future__ import annotations

import pytest

from fmtopts.errors import ValidationError
from fmtopts.options.parser import ArgumentParser, parse_arguments
from fmtopts.options.schema import build_schema

SCHEMA = build_schema()


def test_values_stay_raw() -> None:
    parsed = parse_arguments(SCHEMA, ["--print-width", "100", "a.txt"])

    assert parsed.options["print-width"] == "100"
    assert parsed.patterns == ("a.txt",)


def test_equals_form() -> None:
    parsed = parse_arguments(SCHEMA, ["--print-width=100"])

    assert parsed.options["print-width"] == "100"


def test_forwarded_options_are_absent_unless_given() -> None:
    parsed = parse_arguments(SCHEMA, [])

    assert "print-width" not in parsed.options
    assert "semi" not in parsed.options
    assert "write" not in parsed.options


def test_cli_defaults_are_reported() -> None:
    options = parse_arguments(SCHEMA, []).options

    assert options["config-precedence"] == "cli-override"
    assert options["editorconfig"] is True
    assert options["color"] is True
    assert options["loglevel"] == "log"
    assert options["ignore-path"] == ".fmtoptsignore"
    assert options["plugin"] == ()


def test_boolean_pairs() -> None:
    assert parse_arguments(SCHEMA, ["--no-semi"]).options["semi"] is False
    assert parse_arguments(SCHEMA, ["--semi"]).options["semi"] is True
    assert parse_arguments(SCHEMA, ["--no-color"]).options["color"] is False


def test_negation_of_non_boolean() -> None:
    options = parse_arguments(SCHEMA, ["--no-config"]).options

    assert options["no-config"] is True
    assert "config" not in options


def test_aliases() -> None:
    options = parse_arguments(SCHEMA, ["-l", "a.txt"]).options

    assert options["list-different"] is True


@pytest.mark.parametrize(
    "args, expected",
    [(["--help"], ""), (["--help", "write"], "write"), (["-h"], "")],
)
def test_help_takes_an_optional_value(args: list[str], expected: str) -> None:
    assert parse_arguments(SCHEMA, args).options["help"] == expected


def test_repeated_array_option() -> None:
    options = parse_arguments(SCHEMA, ["--plugin", "a", "--plugin", "b"]).options

    assert options["plugin"] == ("a", "b")


def test_unknown_tokens_are_kept() -> None:
    parsed = parse_arguments(SCHEMA, ["--foo=bar", "--no-baz", "--qux", "--write", "a.txt"])

    assert parsed.options["foo"] == "bar"
    assert parsed.options["baz"] is False
    assert parsed.options["qux"] is True
    assert parsed.options["write"] is True
    assert parsed.patterns == ("a.txt",)


def test_unknown_option_takes_the_next_token() -> None:
    parsed = parse_arguments(SCHEMA, ["--tab-widht", "4", "a.txt"])

    assert parsed.options["tab-widht"] == "4"
    assert parsed.patterns == ("a.txt",)


@pytest.mark.parametrize(
    "args, expected",
    [
        (["--qux", "-"], True),
        (["--qux", "--write"], True),
        (["--qux"], True),
        (["--no-qux", "a.txt"], False),
    ],
)
def test_unknown_option_without_a_value(args: list[str], expected: bool) -> None:
    assert parse_arguments(SCHEMA, args).options["qux"] is expected


def test_double_dash_ends_options() -> None:
    parsed = parse_arguments(SCHEMA, ["--write", "--", "--weird-name"])

    assert parsed.options["write"] is True
    assert parsed.patterns == ("--weird-name",)


def test_default_layer() -> None:
    parser = ArgumentParser(SCHEMA)

    layered = parser.parse(["a.txt"], defaults={"print-width": 120, "semi": False})
    explicit = parser.parse(["--print-width", "90", "--semi"], defaults={"print-width": 120})

    assert layered.options["print-width"] == 120
    assert layered.options["semi"] is False
    assert explicit.options["print-width"] == "90"
    assert explicit.options["semi"] is True


def test_default_layer_ignores_unknown_names() -> None:
    options = parse_arguments(SCHEMA, [], defaults={"nope": 1, "no-config": True}).options

    assert "nope" not in options
    assert "no-config" not in options


def test_missing_value_is_a_validation_error() -> None:
    with pytest.raises(ValidationError, match="requires an argument"):
        parse_arguments(SCHEMA, ["--print-width"])
