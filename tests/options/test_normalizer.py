# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_normalizer.py
#   file_relpath : tests/options/test_normalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for option validation and coercion (`fmtopts.options.normalizer`)."""

from __future__ import annotations

import logging
import math

import pytest

from fmtopts.errors import ValidationError
from fmtopts.options.normalizer import coerce_value, normalize_api_options, normalize_cli_options
from fmtopts.options.schema import build_schema

SCHEMA = build_schema()


@pytest.mark.parametrize(
    "raw, expected",
    [("100", 100), (100, 100), (100.0, 100), (" 7 ", 7), ("Infinity", math.inf)],
)
def test_number_coercion(raw: object, expected: object) -> None:
    assert normalize_cli_options({"print-width": raw}, SCHEMA) == {"print-width": expected}


def test_invalid_number_message() -> None:
    with pytest.raises(ValidationError) as exc_info:
        normalize_cli_options({"print-width": "abc"}, SCHEMA)

    assert str(exc_info.value) == (
        'Validation Error: Invalid `--print-width` value. Expected an integer, but received "abc".'
    )
    assert exc_info.value.detail.startswith("Invalid `--print-width` value.")


@pytest.mark.parametrize("raw", [True, 1.5, "1.5", None])
def test_number_rejects(raw: object) -> None:
    with pytest.raises(ValidationError):
        normalize_cli_options({"tab-width": raw}, SCHEMA)


def test_boolean_coercion() -> None:
    normalized = normalize_cli_options({"semi": "false", "write": True}, SCHEMA)

    assert normalized == {"semi": False, "write": True}


def test_boolean_rejects_other_words() -> None:
    with pytest.raises(ValidationError, match="Expected true or false"):
        normalize_cli_options({"semi": "yes"}, SCHEMA)


def test_choice_lists_active_choices() -> None:
    with pytest.raises(ValidationError) as exc_info:
        normalize_cli_options({"trailing-comma": "bogus"}, SCHEMA)

    assert 'Expected "none", "es5" or "all", but received "bogus".' in str(exc_info.value)


def test_negation_folds_into_option() -> None:
    assert normalize_cli_options({"no-config": True}, SCHEMA) == {"config": False}
    assert normalize_cli_options({"no-config": False}, SCHEMA) == {}


def test_unknown_names_are_dropped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        normalized = normalize_cli_options({"prnt-width": "100", "write": True}, SCHEMA)

    assert normalized == {"write": True}
    assert 'did you mean "print-width"?' in caplog.text


def test_deprecated_cli_option_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        normalized = normalize_cli_options({"jsx-bracket-same-line": True}, SCHEMA)

    assert normalized == {"jsx-bracket-same-line": True}
    assert "--jsx-bracket-same-line is deprecated." in caplog.text


def test_keys_restrict_normalization() -> None:
    argv = {"loglevel": "debug", "print-width": "abc"}

    assert normalize_cli_options(argv, SCHEMA, keys=("loglevel",)) == {"loglevel": "debug"}


def test_alias_resolves_to_primary_name() -> None:
    assert normalize_cli_options({"l": True}, SCHEMA) == {"list-different": True}


def test_api_options() -> None:
    normalized = normalize_api_options({"print_width": 100, "semi": False}, SCHEMA)

    assert normalized == {"print_width": 100, "semi": False}


def test_api_options_use_api_name_in_messages() -> None:
    with pytest.raises(ValidationError, match="Invalid print_width value"):
        normalize_api_options({"print_width": "wide"}, SCHEMA)


def test_api_unknown_and_deprecated(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        normalized = normalize_api_options(
            {"print_widht": 100, "jsx_bracket_same_line": True, "tab_width": 4}, SCHEMA
        )

    assert normalized == {"tab_width": 4}
    assert 'Unknown option name "print_widht", did you mean "print_width"?' in caplog.text
    assert "jsx_bracket_same_line is deprecated." in caplog.text


def test_array_values_become_tuples() -> None:
    spec = SCHEMA.detailed_option_map["plugin"]

    assert coerce_value(spec, "a") == ("a",)
    assert coerce_value(spec, ["a", "b"]) == ("a", "b")
    assert normalize_api_options({"plugins": ["a"]}, SCHEMA) == {"plugins": ("a",)}
