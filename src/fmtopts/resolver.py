# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : resolver.py
#   file_relpath : src/fmtopts/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Per-file option resolution.

`get_options_for_file` combines the normalized command-line arguments with
the config that applies to one file and returns the resolved options, keyed
by API name. The combination follows ``--config-precedence``:

- ``cli-override``: the arguments are re-parsed with the config values as
  the default layer, so an explicit flag still wins.
- ``file-override``: the arguments are parsed without config defaults and
  the config is laid on top.
- ``prefer-file``: a config that was found is used as is, even when empty;
  the arguments are parsed only when no config exists.

Config ``plugins`` extend the schema for the duration of the resolution
only (see [`plugin_scope`][fmtopts.context.plugin_scope]).

Failures are raised, never turned into an exit: the caller decides whether
the run stops.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from fmtopts.config.loader import resolve_config
from fmtopts.config.logging import get_logger
from fmtopts.context import plugin_scope
from fmtopts.options.normalizer import coerce_value, normalize_api_options, normalize_cli_options
from fmtopts.options.parser import parse_arguments
from fmtopts.options.schema import dashify

if TYPE_CHECKING:
    from pathlib import Path

    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.context import Context
    from fmtopts.options.parser import ParsedArguments
    from fmtopts.options.schema import SchemaState
    from fmtopts.options.spec import OptionSpec

logger: FmtoptsLogger = get_logger(__name__)

ResolvedOptions = dict[str, Any]


class ConfigPrecedence(str, Enum):
    """Strategies for combining CLI arguments and config files."""

    CLI_OVERRIDE = "cli-override"
    FILE_OVERRIDE = "file-override"
    PREFER_FILE = "prefer-file"


def _dump(options: Mapping[str, Any] | None) -> str:
    return json.dumps(options, default=str, sort_keys=True)


def get_options_or_raise(
    context: Context, file_path: str | Path | None
) -> dict[str, Any] | None:
    """Load the config that applies to ``file_path`` as raw values keyed by API name.

    Returns:
        dict[str, Any] | None: The raw config, or None when ``--no-config`` is given
        or nothing was found.

    Raises:
        ConfigurationError: If the config file is malformed or unreadable.
    """
    if context.argv.get("config") is False:
        logger.debug("'--no-config' option found, skip loading config file.")
        return None

    config_path: str | None = context.argv.get("config")
    logger.debug(
        "%s config for %s",
        f"load config file from '{config_path}'" if config_path else "resolve",
        file_path or "stdin",
    )
    options: dict[str, Any] | None = resolve_config(
        file_path,
        editorconfig=context.argv.get("editorconfig", True),
        config=config_path,
    )
    logger.debug("loaded options `%s`", _dump(options))
    return options


def get_options(argv: Mapping[str, Any], schema: SchemaState) -> ResolvedOptions:
    """Keep the forwarding entries of ``argv``, renamed to their API names."""
    options: ResolvedOptions = {}
    for cli_name, value in argv.items():
        api_name: str | None = schema.cli_to_api.get(cli_name)
        if api_name is not None and value is not None:
            options[api_name] = value
    return options


def cliify_options(options: Mapping[str, Any], schema: SchemaState) -> dict[str, Any]:
    """Rename API-keyed ``options`` to CLI names; unknown keys are dashified."""
    return {schema.api_to_cli.get(key, dashify(key)): value for key, value in options.items()}


def parse_args_to_options(
    context: Context, overrides_defaults: Mapping[str, Any] | None = None
) -> ResolvedOptions:
    """Re-parse the raw arguments, with ``overrides_defaults`` (API names) as defaults.

    Warnings were already reported by `init_context` and are not repeated.
    """
    defaults: dict[str, Any] | None = None
    if overrides_defaults:
        defaults = cliify_options(overrides_defaults, context.schema)
    parsed: ParsedArguments = parse_arguments(context.schema, context.args, defaults=defaults)
    argv: dict[str, Any] = normalize_cli_options(parsed.options, context.schema, warn=False)
    return get_options(argv, context.schema)


def apply_config_precedence(
    context: Context, options: Mapping[str, Any] | None
) -> ResolvedOptions:
    """Combine the arguments with the normalized config ``options`` (None: no config)."""
    precedence = ConfigPrecedence(context.argv.get("config-precedence", "cli-override"))
    if precedence is ConfigPrecedence.CLI_OVERRIDE:
        return parse_args_to_options(context, options)
    if precedence is ConfigPrecedence.FILE_OVERRIDE:
        return {**parse_args_to_options(context), **(options or {})}
    # prefer-file
    if options is not None:
        return dict(options)
    return parse_args_to_options(context)


def _config_plugins(context: Context, raw: Mapping[str, Any]) -> tuple[str, ...]:
    spec: OptionSpec | None = context.schema.api_option("plugins")
    value: Any = raw.get("plugins")
    if spec is None or value is None:
        return ()
    return coerce_value(spec, value, label="plugins", warn=False)


def get_options_for_file(context: Context, file_path: str | Path | None) -> ResolvedOptions:
    """Return the resolved options for ``file_path`` (None for anonymous stdin).

    The result always holds a ``filepath`` key.

    Raises:
        ConfigurationError: If the config file is malformed or a config plugin
            cannot be loaded.
        ValidationError: If a config or argument value does not fit its option.
    """
    raw: dict[str, Any] | None = get_options_or_raise(context, file_path)
    plugins: tuple[str, ...] = _config_plugins(context, raw) if raw else ()

    def _resolve() -> ResolvedOptions:
        normalized: dict[str, Any] | None = None
        if raw is not None:
            normalized = normalize_api_options(raw, context.schema)
        filepath: str | None = str(file_path) if file_path is not None else None
        return {"filepath": filepath, **apply_config_precedence(context, normalized)}

    if plugins:
        with plugin_scope(context, plugins):
            resolved: ResolvedOptions = _resolve()
    else:
        resolved = _resolve()

    logger.debug(
        "applied config-precedence (%s): %s",
        context.argv.get("config-precedence"),
        _dump(resolved),
    )
    return resolved
