# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : spec.py
#   file_relpath : src/fmtopts/options/spec.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Option descriptions: API-level support options and CLI-level option specs.

Two layers describe every recognized option:

- `SupportOption`: the API-level description, keyed by a snake_case API name
  (``print_width``). Built-in support options live in
  [`fmtopts.options.support`][fmtopts.options.support]; plugins contribute more.
- `OptionSpec`: the CLI-level entry of the live schema, keyed by a kebab-case
  CLI name (``print-width``). It forwards to its API name through
  ``forwards_to`` when the value must reach the formatting engine.

`OptionType` is a closed set of variants; each variant has exactly one
coercion function in [`fmtopts.options.normalizer`][fmtopts.options.normalizer].
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class OptionType(str, Enum):
    """Closed set of option value types."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    CHOICE = "choice"
    # A string holding a filesystem path, rendered as ``<path>``
    PATH = "path"
    # A string option whose value may be omitted (``--help`` / ``--help write``)
    FLAG = "flag"


@dataclass(frozen=True)
class Choice:
    """One allowed value of a ``choice`` option."""

    value: str
    description: str = ""
    deprecated: bool = False


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class SupportOption:
    """API-level description of an option understood by the formatting engine.

    Attributes:
        name: snake_case API name.
        type: Value type.
        category: API category (informational).
        default: Default value, ``None`` when unset.
        description: Help text.
        choices: Allowed values for ``choice`` options.
        array: Whether the option accepts several values.
        deprecated: Deprecated options are still recognized but never forwarded.
        opposite_description: Help text of the ``no-<name>`` negation.
        cli_name: CLI name, when it differs from the kebab-case API name.
        cli_category: Usage category, default "Format".
        cli_description: CLI-specific help text.
        since: Version that introduced the option.
        plugin_defaults: Plugin name → default override contributed by that plugin.
    """

    name: str
    type: OptionType
    category: str = "Global"
    default: Any = None
    description: str | None = None
    choices: tuple[Choice, ...] = ()
    array: bool = False
    deprecated: bool = False
    opposite_description: str | None = None
    cli_name: str | None = None
    cli_category: str | None = None
    cli_description: str | None = None
    since: str | None = None
    plugin_defaults: Mapping[str, Any] = field(default_factory=_empty_mapping)

    def with_plugin_default(self, plugin_name: str, value: Any) -> SupportOption:
        """Return a copy recording ``value`` as the default contributed by ``plugin_name``."""
        merged: dict[str, Any] = dict(self.plugin_defaults)
        merged[plugin_name] = value
        return replace(self, plugin_defaults=MappingProxyType(merged))


@dataclass(frozen=True)
class OptionSpec:
    """CLI-level schema entry for one recognized option.

    Attributes:
        name: Unique kebab-case CLI name.
        type: Value type.
        category: Usage category.
        alias: Single-letter short flag, if any.
        default: Default value, ``None`` when unset.
        description: Help text; ``None`` for deprecated options.
        opposite_description: Help text of the ``no-<name>`` negation.
        choices: Allowed values for ``choice`` options.
        array: Whether the option may be repeated.
        forwards_to: API name the value is forwarded to, ``None`` for CLI-only options.
        deprecated: Deprecated options are accepted with a warning and never forwarded.
        plugin_defaults: Plugin name → default override.
        negates: For synthetic ``no-<name>`` entries, the name of the negated option.
    """

    name: str
    type: OptionType
    category: str
    alias: str | None = None
    default: Any = None
    description: str | None = None
    opposite_description: str | None = None
    choices: tuple[Choice, ...] = ()
    array: bool = False
    forwards_to: str | None = None
    deprecated: bool = False
    plugin_defaults: Mapping[str, Any] = field(default_factory=_empty_mapping)
    negates: str | None = None

    def __post_init__(self) -> None:
        if self.type is OptionType.CHOICE and not self.choices:
            raise ValueError(f"Choice option '{self.name}' must declare at least one choice")

    @property
    def active_choices(self) -> tuple[Choice, ...]:
        """Choices that are not deprecated."""
        return tuple(choice for choice in self.choices if not choice.deprecated)

    @property
    def flag(self) -> str:
        """The long flag, e.g. ``--print-width``."""
        return f"--{self.name}"

    def opposite(self) -> OptionSpec:
        """Return the synthetic boolean ``no-<name>`` entry for this option."""
        return OptionSpec(
            name=f"no-{self.name}",
            type=OptionType.BOOLEAN,
            category=self.category,
            description=self.opposite_description,
            negates=self.name,
        )
