# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : support.py
#   file_relpath : src/fmtopts/options/support.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Built-in API-level support options and plugin-aware support information.

`get_support_options()` returns the options the formatting engine
understands for a given set of plugins: the built-in table below, extended by
each plugin's options, with the ``parser`` choices extended by every
plugin-provided parser and each plugin's ``default_options`` recorded in the
matching option's ``plugin_defaults``.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Final

from fmtopts.config.logging import get_logger
from fmtopts.constants import CATEGORY_CONFIG, CATEGORY_EDITOR, CATEGORY_OTHER
from fmtopts.options.spec import Choice, OptionType, SupportOption

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.plugins import Plugin

logger: FmtoptsLogger = get_logger(__name__)

CATEGORY_GLOBAL: Final[str] = "Global"
CATEGORY_SPECIAL: Final[str] = "Special"
CATEGORY_COMMON: Final[str] = "Common"

BUILTIN_PARSER: Final[str] = "text"

BUILTIN_SUPPORT_OPTIONS: Final[tuple[SupportOption, ...]] = (
    SupportOption(
        name="bracket_spacing",
        type=OptionType.BOOLEAN,
        category=CATEGORY_COMMON,
        default=True,
        description="Print spaces between brackets.",
        opposite_description="Do not print spaces between brackets.",
    ),
    SupportOption(
        name="cursor_offset",
        type=OptionType.NUMBER,
        category=CATEGORY_SPECIAL,
        default=-1,
        description=(
            "Print (to stderr) where a cursor at the given position would move to after "
            "formatting.\nThis option cannot be used with --range-start and --range-end."
        ),
        cli_category=CATEGORY_EDITOR,
    ),
    SupportOption(
        name="end_of_line",
        type=OptionType.CHOICE,
        category=CATEGORY_GLOBAL,
        default="auto",
        description="Which end of line characters to apply.",
        choices=(
            Choice("auto", "Maintain existing line endings (detected from the first line)"),
            Choice("lf", "Line Feed only (\\n), common on Linux and macOS"),
            Choice("crlf", "Carriage Return + Line Feed characters (\\r\\n), common on Windows"),
            Choice("cr", "Carriage Return character only (\\r), used very rarely"),
        ),
    ),
    SupportOption(
        name="filepath",
        type=OptionType.PATH,
        category=CATEGORY_SPECIAL,
        description="Specify the input filepath. This will be used to do parser inference.",
        cli_name="stdin-filepath",
        cli_category=CATEGORY_OTHER,
        cli_description="Path to the file to pretend that stdin comes from.",
    ),
    SupportOption(
        name="insert_pragma",
        type=OptionType.BOOLEAN,
        category=CATEGORY_SPECIAL,
        default=False,
        description="Insert @format pragma into file's first docblock comment.",
        cli_category=CATEGORY_OTHER,
    ),
    SupportOption(
        name="jsx_bracket_same_line",
        type=OptionType.BOOLEAN,
        category=CATEGORY_COMMON,
        default=False,
        description="Put > on the last line instead of at a new line.",
        deprecated=True,
    ),
    SupportOption(
        name="parser",
        type=OptionType.CHOICE,
        category=CATEGORY_GLOBAL,
        description="Which parser to use.",
        choices=(Choice(BUILTIN_PARSER, "Plain text"),),
    ),
    SupportOption(
        name="plugins",
        type=OptionType.PATH,
        category=CATEGORY_GLOBAL,
        default=(),
        array=True,
        description="Add a plugin. Multiple plugins can be passed as separate `--plugin`s.",
        cli_name="plugin",
        cli_category=CATEGORY_CONFIG,
    ),
    SupportOption(
        name="print_width",
        type=OptionType.NUMBER,
        category=CATEGORY_GLOBAL,
        default=80,
        description="The line length where fmtopts will try wrap.",
    ),
    SupportOption(
        name="prose_wrap",
        type=OptionType.CHOICE,
        category=CATEGORY_COMMON,
        default="preserve",
        description="How to wrap prose.",
        choices=(
            Choice("always", "Wrap prose if it exceeds the print width."),
            Choice("never", "Do not wrap prose."),
            Choice("preserve", "Wrap prose as-is."),
        ),
    ),
    SupportOption(
        name="range_end",
        type=OptionType.NUMBER,
        category=CATEGORY_SPECIAL,
        default=math.inf,
        description=(
            "Format code ending at a given character offset (exclusive).\n"
            "The range will extend forwards to the end of the selected statement.\n"
            "This option cannot be used with --cursor-offset."
        ),
        cli_category=CATEGORY_EDITOR,
    ),
    SupportOption(
        name="range_start",
        type=OptionType.NUMBER,
        category=CATEGORY_SPECIAL,
        default=0,
        description=(
            "Format code starting at a given character offset.\n"
            "The range will extend backwards to the start of the first line containing the "
            "selected statement.\nThis option cannot be used with --cursor-offset."
        ),
        cli_category=CATEGORY_EDITOR,
    ),
    SupportOption(
        name="require_pragma",
        type=OptionType.BOOLEAN,
        category=CATEGORY_SPECIAL,
        default=False,
        description=(
            "Require either '@fmtopts' or '@format' to be present in the file's first docblock "
            "comment\nin order for it to be formatted."
        ),
        cli_category=CATEGORY_OTHER,
    ),
    SupportOption(
        name="semi",
        type=OptionType.BOOLEAN,
        category=CATEGORY_COMMON,
        default=True,
        description="Print semicolons.",
        opposite_description="Do not print semicolons, even if they are required.",
    ),
    SupportOption(
        name="single_quote",
        type=OptionType.BOOLEAN,
        category=CATEGORY_COMMON,
        default=False,
        description="Use single quotes instead of double quotes.",
    ),
    SupportOption(
        name="tab_width",
        type=OptionType.NUMBER,
        category=CATEGORY_GLOBAL,
        default=2,
        description="Number of spaces per indentation level.",
    ),
    SupportOption(
        name="trailing_comma",
        type=OptionType.CHOICE,
        category=CATEGORY_COMMON,
        default="none",
        description="Print trailing commas wherever possible when multi-line.",
        choices=(
            Choice("none", "No trailing commas."),
            Choice("es5", "Trailing commas where valid in ES5 (objects, arrays, etc.)"),
            Choice("all", "Trailing commas wherever possible (including function arguments)."),
        ),
    ),
    SupportOption(
        name="use_tabs",
        type=OptionType.BOOLEAN,
        category=CATEGORY_GLOBAL,
        default=False,
        description="Indent with tabs instead of spaces.",
    ),
)


def get_support_options(plugins: Iterable[Plugin] = ()) -> tuple[SupportOption, ...]:
    """Return the support options available with ``plugins`` loaded.

    Built-in options come first; a plugin option whose name is already known is
    ignored (first definition wins). Plugin ``default_options`` never replace a
    default, they are recorded in ``plugin_defaults`` instead.

    Args:
        plugins (Iterable[Plugin]): Loaded plugins, in activation order.

    Returns:
        tuple[SupportOption, ...]: Options sorted by API name.
    """
    plugins = tuple(plugins)
    by_name: dict[str, SupportOption] = {option.name: option for option in BUILTIN_SUPPORT_OPTIONS}

    for plugin in plugins:
        for option in plugin.options:
            if option.name in by_name:
                logger.debug(
                    "Plugin '%s' redefines option '%s' (keeping first)", plugin.name, option.name
                )
                continue
            by_name[option.name] = option

    # Extend the parser choices with every plugin-provided parser
    parser_option: SupportOption = by_name["parser"]
    known: list[str] = [choice.value for choice in parser_option.choices]
    extra: list[Choice] = []
    for plugin in plugins:
        for parser_name in plugin.parsers:
            if parser_name not in known:
                known.append(parser_name)
                extra.append(Choice(parser_name, f"Provided by plugin '{plugin.name}'"))
    if extra:
        by_name["parser"] = replace(parser_option, choices=parser_option.choices + tuple(extra))

    for plugin in plugins:
        for api_name, value in plugin.default_options.items():
            if api_name not in by_name:
                logger.debug(
                    "Plugin '%s' sets default for unknown option '%s'", plugin.name, api_name
                )
                continue
            by_name[api_name] = by_name[api_name].with_plugin_default(plugin.name, value)

    return tuple(by_name[name] for name in sorted(by_name))


def get_default_options(
    plugins: Iterable[Plugin] = (), plugin_name: str | None = None
) -> dict[str, Any]:
    """Return the API defaults, with the overrides of ``plugin_name`` applied.

    Deprecated options and options without a default are left out.
    """
    defaults: dict[str, Any] = {}
    for option in get_support_options(plugins):
        if option.deprecated:
            continue
        value: Any = option.default
        if plugin_name is not None and plugin_name in option.plugin_defaults:
            value = option.plugin_defaults[plugin_name]
        if value is not None:
            defaults[option.name] = value
    return defaults
