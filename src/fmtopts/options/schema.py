# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : schema.py
#   file_relpath : src/fmtopts/options/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Option schema registry.

A `Schema` is an immutable snapshot of every option recognized for a given
set of plugins. It is built from two sources:

- the CLI-only options in [`fmtopts.options.builtins`][fmtopts.options.builtins];
- the API-level support options for the active plugins
  ([`get_support_options`][fmtopts.options.support.get_support_options]).

On a name collision the CLI-only entry wins, but it inherits the forwarding
target and the plugin default bookkeeping of the support-derived entry.

Every option with an ``opposite_description`` is followed by a synthetic
boolean ``no-<name>`` entry, so negatable flags need no special casing
elsewhere. The schema also carries the bidirectional CLI name ↔ API name
table, built once.

Schemas are never mutated. The [`Context`][fmtopts.context.Context] swaps
whole snapshots when a plugin scope starts or ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from fmtopts.config.logging import get_logger
from fmtopts.constants import CATEGORY_FORMAT
from fmtopts.options.builtins import CLI_OPTIONS
from fmtopts.options.spec import OptionSpec
from fmtopts.options.support import get_support_options

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.options.spec import SupportOption
    from fmtopts.plugins import Plugin

logger: FmtoptsLogger = get_logger(__name__)


def dashify(name: str) -> str:
    """Return the kebab-case CLI spelling of a snake_case API name."""
    return name.replace("_", "-")


@dataclass(frozen=True)
class Schema:
    """Immutable snapshot of the recognized options.

    Attributes:
        plugins: Plugins whose options are part of this schema.
        support_options: API-level options for those plugins.
        detailed_options: CLI-level entries sorted by name; synthetic ``no-<name>``
            entries directly follow the option they negate.
        detailed_option_map: Name → entry, synthetic entries included.
        api_default_options: API name → default for non-deprecated support options.
        cli_to_api: CLI name → API name for every forwarding entry.
        api_to_cli: API name → CLI name for every forwarding entry.
    """

    plugins: tuple[Plugin, ...]
    support_options: tuple[SupportOption, ...]
    detailed_options: tuple[OptionSpec, ...]
    detailed_option_map: Mapping[str, OptionSpec] = field(repr=False)
    api_default_options: Mapping[str, Any] = field(repr=False)
    cli_to_api: Mapping[str, str] = field(repr=False)
    api_to_cli: Mapping[str, str] = field(repr=False)

    def lookup(self, name: str) -> OptionSpec | None:
        """Return the entry named ``name`` (or aliased ``name``), else None."""
        return lookup(self, name)

    def api_option(self, api_name: str) -> OptionSpec | None:
        """Return the entry forwarding to ``api_name``, else None."""
        cli_name: str | None = self.api_to_cli.get(api_name)
        return self.detailed_option_map.get(cli_name) if cli_name is not None else None

    def support_option(self, api_name: str) -> SupportOption | None:
        """Return the support option named ``api_name``, else None."""
        for option in self.support_options:
            if option.name == api_name:
                return option
        return None

    @property
    def plugin_names(self) -> tuple[str, ...]:
        """Names of the plugins active in this schema."""
        return tuple(plugin.name for plugin in self.plugins)


#: The live schema snapshot owned by a run context and swapped by plugin scopes.
SchemaState = Schema


def create_detailed_option_map(
    support_options: Iterable[SupportOption],
) -> dict[str, OptionSpec]:
    """Convert API-level support options into CLI-level entries keyed by CLI name.

    Deprecated support options keep their name (so they are still recognized)
    but lose their forwarding target and help texts.
    """
    detailed: dict[str, OptionSpec] = {}
    for option in support_options:
        spec = OptionSpec(
            name=option.cli_name or dashify(option.name),
            type=option.type,
            category=option.cli_category or CATEGORY_FORMAT,
            default=option.default,
            description=option.cli_description or option.description,
            opposite_description=option.opposite_description,
            choices=option.choices,
            array=option.array,
            forwards_to=option.name,
            plugin_defaults=option.plugin_defaults,
        )
        if option.deprecated:
            spec = replace(
                spec,
                forwards_to=None,
                description=None,
                opposite_description=None,
                deprecated=True,
            )
        detailed[spec.name] = spec
    return detailed


def _merge_collision(builtin: OptionSpec, derived: OptionSpec) -> OptionSpec:
    """Let the CLI-only entry win while keeping the derived entry's bookkeeping."""
    plugin_defaults: dict[str, Any] = dict(derived.plugin_defaults)
    plugin_defaults.update(builtin.plugin_defaults)
    return replace(
        builtin,
        forwards_to=builtin.forwards_to or derived.forwards_to,
        plugin_defaults=MappingProxyType(plugin_defaults),
    )


def normalize_detailed_option_map(
    detailed_option_map: Mapping[str, OptionSpec],
) -> dict[str, OptionSpec]:
    """Return the entries sorted by name, each followed by its ``no-<name>`` negation."""
    normalized: dict[str, OptionSpec] = {}
    for name in sorted(detailed_option_map):
        spec: OptionSpec = detailed_option_map[name]
        normalized[name] = spec
        if spec.opposite_description:
            opposite: OptionSpec = spec.opposite()
            normalized[opposite.name] = opposite
    return normalized


def build_schema(
    builtins: Iterable[OptionSpec] = CLI_OPTIONS,
    support_options: Iterable[SupportOption] | None = None,
    *,
    plugins: Iterable[Plugin] = (),
) -> Schema:
    """Merge CLI-only entries and support options into a `Schema`.

    Args:
        builtins (Iterable[OptionSpec]): CLI-only entries; they win on name collisions.
        support_options (Iterable[SupportOption] | None): API-level options. When None,
            they are computed for ``plugins``.
        plugins (Iterable[Plugin]): Plugins active in the resulting schema.

    Returns:
        Schema: The new schema snapshot.
    """
    plugins = tuple(plugins)
    supported: tuple[SupportOption, ...] = (
        tuple(support_options) if support_options is not None else get_support_options(plugins)
    )

    merged: dict[str, OptionSpec] = create_detailed_option_map(supported)
    for builtin in builtins:
        derived: OptionSpec | None = merged.get(builtin.name)
        merged[builtin.name] = builtin if derived is None else _merge_collision(builtin, derived)

    option_map: dict[str, OptionSpec] = normalize_detailed_option_map(merged)

    cli_to_api: dict[str, str] = {}
    api_to_cli: dict[str, str] = {}
    for spec in option_map.values():
        if spec.forwards_to:
            cli_to_api[spec.name] = spec.forwards_to
            api_to_cli[spec.forwards_to] = spec.name

    api_defaults: dict[str, Any] = {
        option.name: option.default
        for option in supported
        if not option.deprecated and option.default is not None
    }

    schema = Schema(
        plugins=plugins,
        support_options=supported,
        detailed_options=tuple(option_map.values()),
        detailed_option_map=MappingProxyType(option_map),
        api_default_options=MappingProxyType(api_defaults),
        cli_to_api=MappingProxyType(cli_to_api),
        api_to_cli=MappingProxyType(api_to_cli),
    )
    logger.trace(
        "Built schema with %d option(s) for plugins %s",
        len(schema.detailed_options),
        schema.plugin_names,
    )
    return schema


def lookup(schema: Schema, name: str) -> OptionSpec | None:
    """Return the entry whose name or alias equals ``name``, else None."""
    spec: OptionSpec | None = schema.detailed_option_map.get(name)
    if spec is not None:
        return spec
    for candidate in schema.detailed_options:
        if candidate.alias is not None and candidate.alias == name:
            return candidate
    return None


def documented_options(schema: Schema) -> list[OptionSpec]:
    """Return the schema entries that carry a description, in schema order.

    Deprecated and internal entries have none and are omitted. The ``no-<name>``
    entries added by `build_schema` stay right after their option.
    """
    return [spec for spec in schema.detailed_options if spec.description]
