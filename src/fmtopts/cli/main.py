# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : main.py
#   file_relpath : src/fmtopts/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""FmtOpts command-line entry point.

The Click command accepts every argument unprocessed: options are
recognized against the live schema, which depends on the plugins named on
the command line, so they cannot be declared statically. See
[`fmtopts.options.parser`][fmtopts.options.parser] for the generated parser.

Flow:
    1. create the context (logging, ``--plugin``) and normalize every argument;
    2. reject conflicting flags;
    3. ``--version``, ``--help [flag]``, ``--support-info``;
    4. ``--find-config-path``, stdin, or file patterns;
    5. otherwise print the usage and fail.
"""

from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING, Any, Final, Iterable

import click

from fmtopts.cli.errors import FmtoptsConfigError, FmtoptsUsageError
from fmtopts.cli.exit_codes import ExitCode
from fmtopts.config.logging import get_logger
from fmtopts.constants import FMTOPTS_VERSION
from fmtopts.context import create_context, init_context
from fmtopts.errors import ConfigurationError, ValidationError
from fmtopts.formatting import format_files, format_stdin, log_resolved_config_path
from fmtopts.usage import create_detailed_usage, create_usage

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.console_api import ConsoleLike
    from fmtopts.context import Context
    from fmtopts.engine import FormatEngine
    from fmtopts.options.spec import SupportOption

logger: FmtoptsLogger = get_logger(__name__)

CONTEXT_SETTINGS: Final[dict[str, Any]] = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}


def _stdin_is_tty() -> bool:
    return click.get_text_stream("stdin").isatty()


def _json_default(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return str(value)


def _support_option_info(option: SupportOption) -> dict[str, Any]:
    info: dict[str, Any] = {
        "name": option.name,
        "type": option.type.value,
        "category": option.category,
        "description": option.description,
        "array": option.array,
        "deprecated": option.deprecated,
    }
    default: Any = option.default
    if isinstance(default, float) and math.isinf(default):
        default = "Infinity"
    info["default"] = list(default) if isinstance(default, tuple) else default
    if option.choices:
        info["choices"] = [
            {"value": choice.value, "description": choice.description}
            for choice in option.choices
            if not choice.deprecated
        ]
    if option.plugin_defaults:
        info["plugin_defaults"] = dict(option.plugin_defaults)
    return info


def create_support_info(context: Context) -> str:
    """Return the options and languages supported with the active plugins, as JSON."""
    languages: list[dict[str, Any]] = [
        {
            "name": language.name,
            "parsers": list(language.parsers),
            "extensions": list(language.extensions),
            "filenames": list(language.filenames),
        }
        for plugin in context.schema.plugins
        for language in plugin.languages
    ]
    info: dict[str, Any] = {
        "version": FMTOPTS_VERSION,
        "languages": languages,
        "options": [_support_option_info(option) for option in context.support_options],
    }
    return json.dumps(info, indent=2, default=_json_default)


def _check_conflicts(context: Context) -> None:
    if context.argv.get("write") and context.argv.get("debug-check"):
        raise FmtoptsUsageError("Cannot use --write and --debug-check together.")
    if context.argv.get("find-config-path") and context.file_patterns:
        raise FmtoptsUsageError("Cannot use --find-config-path with multiple files")


def _remember_console(console: ConsoleLike) -> None:
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is not None:
        ctx.obj = ctx.obj or {}
        ctx.obj["console"] = console


def run(
    args: Iterable[str],
    *,
    console: ConsoleLike | None = None,
    engine: FormatEngine | None = None,
) -> ExitCode:
    """Run the command for ``args`` and return the exit code.

    Raises:
        FmtoptsUsageError: Invalid options or conflicting flags (exit code 1).
        FmtoptsConfigError: A config file or plugin could not be loaded (exit code 2).
    """
    try:
        context: Context = create_context(args, console=console, engine=engine)
    except ConfigurationError as exc:
        raise FmtoptsConfigError(str(exc)) from exc
    except ValidationError as exc:
        raise FmtoptsUsageError(str(exc)) from exc
    _remember_console(context.console)

    try:
        init_context(context)
    except ValidationError as exc:
        raise FmtoptsUsageError(str(exc)) from exc
    logger.debug("normalized argv: %s", json.dumps(context.argv, default=_json_default))

    _check_conflicts(context)

    if context.argv.get("version"):
        context.console.print(FMTOPTS_VERSION)
        return ExitCode.SUCCESS

    help_flag: str | None = context.argv.get("help")
    if help_flag is not None:
        usage: str = (
            create_detailed_usage(context.schema, help_flag)
            if help_flag
            else create_usage(context.schema)
        )
        context.console.print(usage)
        return ExitCode.SUCCESS

    if context.argv.get("support-info"):
        context.console.print(create_support_info(context))
        return ExitCode.SUCCESS

    has_file_patterns: bool = bool(context.file_patterns)
    use_stdin: bool = bool(context.argv.get("stdin")) or (
        not has_file_patterns and not _stdin_is_tty()
    )

    try:
        if context.argv.get("find-config-path"):
            return log_resolved_config_path(context, context.argv["find-config-path"])
        if use_stdin:
            return format_stdin(context)
        if has_file_patterns:
            return format_files(context)
    except (ConfigurationError, ValidationError) as exc:
        raise FmtoptsConfigError(str(exc)) from exc

    context.console.print(create_usage(context.schema))
    return ExitCode.FAILURE


@click.command(
    name="fmtopts",
    context_settings=CONTEXT_SETTINGS,
    add_help_option=False,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Format files, resolving options from the command line and config files."""
    ctx.obj = ctx.obj or {}
    exit_code: ExitCode = run([*args, *ctx.args])
    ctx.exit(int(exit_code))


if __name__ == "__main__":
    cli()
