# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_schema.py
#   file_relpath : tests/options/test_schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for the option schema registry (`fmtopts.options.schema`)."""

from __future__ import annotations

import pytest

from fmtopts.options.schema import build_schema, dashify, documented_options, lookup
from fmtopts.options.spec import Choice, OptionSpec, OptionType
from fmtopts.plugins import load_plugin
from tests.cli.conftest import SAMPLE_PLUGIN


def test_dashify() -> None:
    assert dashify("print_width") == "print-width"
    assert dashify("semi") == "semi"


def test_forwarding_table_is_bidirectional() -> None:
    schema = build_schema()

    assert schema.cli_to_api["print-width"] == "print_width"
    assert schema.cli_to_api["stdin-filepath"] == "filepath"
    assert schema.cli_to_api["plugin"] == "plugins"
    for cli_name, api_name in schema.cli_to_api.items():
        assert schema.api_to_cli[api_name] == cli_name


def test_cli_only_options_are_not_forwarded() -> None:
    schema = build_schema()

    for name in ("write", "list-different", "config", "loglevel", "help"):
        assert schema.detailed_option_map[name].forwards_to is None
        assert name not in schema.cli_to_api


def test_negations_follow_their_option() -> None:
    schema = build_schema()
    names: list[str] = [option.name for option in schema.detailed_options]

    for name in ("semi", "color", "config", "editorconfig", "bracket-spacing"):
        index: int = names.index(name)
        negation = schema.detailed_options[index + 1]
        assert negation.name == f"no-{name}"
        assert negation.negates == name
        assert negation.type is OptionType.BOOLEAN

    assert "no-print-width" not in schema.detailed_option_map


def test_entries_are_sorted_apart_from_negations() -> None:
    schema = build_schema()
    primary: list[str] = [o.name for o in schema.detailed_options if o.negates is None]

    assert primary == sorted(primary)


def test_deprecated_option_is_known_but_not_forwarded() -> None:
    schema = build_schema()
    option = schema.detailed_option_map["jsx-bracket-same-line"]

    assert option.deprecated
    assert option.forwards_to is None
    assert option.description is None
    assert "jsx_bracket_same_line" not in schema.api_default_options


def test_builtin_wins_on_collision_and_keeps_forwarding() -> None:
    builtin = OptionSpec(
        name="print-width",
        type=OptionType.NUMBER,
        category="Other",
        description="Overridden help.",
    )
    schema = build_schema(builtins=(builtin,))
    option = schema.detailed_option_map["print-width"]

    assert option.description == "Overridden help."
    assert option.category == "Other"
    assert option.forwards_to == "print_width"
    assert schema.api_to_cli["print_width"] == "print-width"


def test_api_defaults() -> None:
    schema = build_schema()

    assert schema.api_default_options["print_width"] == 80
    assert schema.api_default_options["semi"] is True
    assert "parser" not in schema.api_default_options


def test_plugin_extends_schema() -> None:
    plugin = load_plugin(SAMPLE_PLUGIN)
    schema = build_schema(plugins=[plugin])

    assert schema.plugin_names == ("sample",)
    assert schema.detailed_option_map["quote-style"].forwards_to == "quote_style"
    parser_choices = [c.value for c in schema.detailed_option_map["parser"].choices]
    assert parser_choices == ["text", "ini"]
    assert dict(schema.detailed_option_map["tab-width"].plugin_defaults) == {"sample": 4}
    # Plugin defaults never replace the default itself
    assert schema.api_default_options["tab_width"] == 2


def test_lookup_by_alias() -> None:
    schema = build_schema()

    assert lookup(schema, "l") is schema.detailed_option_map["list-different"]
    assert schema.lookup("version") is schema.detailed_option_map["version"]
    assert schema.lookup("nope") is None


def test_documented_options_skip_undocumented_entries() -> None:
    names = {option.name for option in documented_options(build_schema())}

    assert "debug-check" not in names
    assert "jsx-bracket-same-line" not in names
    assert {"semi", "no-semi", "print-width"} <= names


def test_choice_option_requires_choices() -> None:
    with pytest.raises(ValueError, match="at least one choice"):
        OptionSpec(name="x", type=OptionType.CHOICE, category="Other")

    option = OptionSpec(
        name="x",
        type=OptionType.CHOICE,
        category="Other",
        choices=(Choice("a"), Choice("b", deprecated=True)),
    )
    assert [c.value for c in option.active_choices] == ["a"]
