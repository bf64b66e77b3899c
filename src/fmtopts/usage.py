# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : usage.py
#   file_relpath : src/fmtopts/usage.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Render CLI usage text from the live schema.

Rendering is pure: the same schema always yields the same text.

Layout of one option row::

    --print-width <int>      The line length where fmtopts will try wrap.
                             Defaults to 80.

Headers shorter than `OPTION_USAGE_THRESHOLD` are padded up to the
threshold; longer headers push the description onto the next line, indented
to the threshold. Descriptions are never re-wrapped: their own line breaks
are kept and indented to the description column.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Final, Iterable, TypeVar

from fmtopts.constants import CATEGORY_ORDER, USAGE_SUMMARY
from fmtopts.options.schema import documented_options
from fmtopts.options.spec import OptionType
from fmtopts.options.suggest import get_option_with_suggestion

if TYPE_CHECKING:
    from fmtopts.options.schema import SchemaState
    from fmtopts.options.spec import Choice, OptionSpec

T = TypeVar("T")

OPTION_USAGE_THRESHOLD: Final[int] = 25
CHOICE_USAGE_MARGIN: Final[int] = 3
CHOICE_USAGE_INDENTATION: Final[int] = 2

_TYPE_DISPLAY: Final[dict[OptionType, str]] = {
    OptionType.NUMBER: "<int>",
    OptionType.STRING: "<string>",
    OptionType.PATH: "<path>",
    OptionType.FLAG: "[flag]",
}


def indent(text: str, spaces: int) -> str:
    """Prefix every line of ``text``, empty ones included, with ``spaces`` spaces."""
    prefix: str = " " * spaces
    return "\n".join(prefix + line for line in text.split("\n"))


def group_by(items: Iterable[T], get_key: Callable[[T], str]) -> dict[str, list[T]]:
    """Group ``items`` by key, keeping first-seen key order and item order."""
    grouped: dict[str, list[T]] = {}
    for item in items:
        grouped.setdefault(get_key(item), []).append(item)
    return grouped


def create_default_value_display(value: Any) -> str:
    """Render a default value: ``true``/``false``, ``Infinity``, ``[a, b]``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (list, tuple)):
        return f"[{', '.join(create_default_value_display(item) for item in value)}]"
    return str(value)


def get_option_default_value(schema: SchemaState, option_name: str) -> Any:
    """Return the default shown for ``option_name``, or None when it has none.

    The entry's own default wins; otherwise the API default of the option it
    forwards to is used. Synthetic ``no-<name>`` entries have no default.
    """
    option: OptionSpec | None = schema.detailed_option_map.get(option_name)
    if option is None or option.negates is not None:
        return None
    if option.default is not None:
        return option.default
    if option.forwards_to is not None:
        return schema.api_default_options.get(option.forwards_to)
    return None


def create_option_usage_type(option: OptionSpec) -> str | None:
    """Return ``<a|b>`` for choices, ``<type>`` for values, None for booleans."""
    if option.type is OptionType.BOOLEAN:
        return None
    if option.type is OptionType.CHOICE:
        return f"<{'|'.join(choice.value for choice in option.active_choices)}>"
    return _TYPE_DISPLAY[option.type]


def create_option_usage_header(option: OptionSpec) -> str:
    """Return e.g. ``-l, --list-different`` or ``--print-width <int>``."""
    parts: list[str] = []
    if option.alias:
        parts.append(f"-{option.alias},")
    parts.append(option.flag)
    usage_type: str | None = create_option_usage_type(option)
    if usage_type:
        parts.append(usage_type)
    return " ".join(parts)


def create_option_usage_row(header: str, content: str, threshold: int) -> str:
    """Align ``content`` at column ``threshold`` after ``header``."""
    if len(header) >= threshold:
        separator: str = "\n" + " " * threshold
    else:
        separator = " " * (threshold - len(header))
    description: str = content.replace("\n", "\n" + " " * threshold)
    return f"{header}{separator}{description}"


def create_option_usage(
    schema: SchemaState, option: OptionSpec, threshold: int = OPTION_USAGE_THRESHOLD
) -> str:
    """Render the usage row of ``option``, with its default value when it has one."""
    default: Any = get_option_default_value(schema, option.name)
    content: str = option.description or ""
    if default is not None:
        content += f"\nDefaults to {create_default_value_display(default)}."
    return create_option_usage_row(create_option_usage_header(option), content, threshold)


def create_choice_usages(
    choices: Iterable[Choice],
    margin: int = CHOICE_USAGE_MARGIN,
    indentation: int = CHOICE_USAGE_INDENTATION,
) -> list[str]:
    """Render one row per non-deprecated choice, aligned past the longest value."""
    active: list[Choice] = [choice for choice in choices if not choice.deprecated]
    threshold: int = max((len(choice.value) for choice in active), default=0) + margin
    return [
        indent(create_option_usage_row(choice.value, choice.description, threshold), indentation)
        for choice in active
    ]


def _usage_categories(grouped: dict[str, list[OptionSpec]]) -> list[str]:
    first: tuple[str, ...] = CATEGORY_ORDER[:-1]
    last: tuple[str, ...] = CATEGORY_ORDER[-1:]
    rest: list[str] = [category for category in grouped if category not in first + last]
    return [category for category in (*first, *rest, *last) if category in grouped]


def create_usage(schema: SchemaState) -> str:
    """Render the full usage text.

    Options are grouped by category: the fixed leading categories first, then
    the remaining ones in first-seen order, and the closing category last.
    A negatable boolean is listed through its ``--no-<name>`` twin only.
    """
    options: list[OptionSpec] = [
        option
        for option in documented_options(schema)
        if not (
            option.type is OptionType.BOOLEAN
            and option.opposite_description
            and option.negates is None
        )
    ]
    grouped: dict[str, list[OptionSpec]] = group_by(options, lambda option: option.category)

    sections: list[str] = []
    for category in _usage_categories(grouped):
        rows: str = "\n".join(create_option_usage(schema, option) for option in grouped[category])
        sections.append(f"{category} options:\n\n{indent(rows, 2)}")

    return "\n\n".join([USAGE_SUMMARY, *sections, ""])


def create_detailed_usage(schema: SchemaState, option_name: str) -> str:
    """Render the detailed help of one option (``--help <flag>``).

    Unknown names resolve to the closest option (with a warning), else to ``help``.
    """
    option: OptionSpec = get_option_with_suggestion(documented_options(schema), option_name)

    text: str = create_option_usage_header(option)
    text += f"\n\n{indent(option.description or '', 2)}"

    if option.type is OptionType.CHOICE:
        text += "\n\nValid options:\n\n" + "\n".join(create_choice_usages(option.choices))

    default: Any = get_option_default_value(schema, option.name)
    if default is not None:
        text += f"\n\nDefault: {create_default_value_display(default)}"

    if option.plugin_defaults:
        text += "\nPlugin defaults:" + "".join(
            f"\n* {plugin}: {create_default_value_display(value)}"
            for plugin, value in option.plugin_defaults.items()
        )
    return text
