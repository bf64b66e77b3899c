# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : parser.py
#   file_relpath : src/fmtopts/options/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tokenize command-line arguments against the live schema with Click.

The parser is a throwaway `click.Command` generated from a
[`Schema`][fmtopts.options.schema.Schema]. It only tokenizes: every value is
handed back raw (strings, flags, tuples) and validated afterwards by
[`fmtopts.options.normalizer`][fmtopts.options.normalizer].

Config values can be injected as a *default layer* through Click's
``default_map``: an explicitly given flag still wins over them. Click's
[`ParameterSource`][click.core.ParameterSource] tells which values were
given explicitly.

Unknown ``--name[=value]`` tokens are kept (``value`` or ``True``), so that the
normalizer can warn about them; ``--no-name`` for an unknown name yields
``False``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final, Mapping, Sequence

import click
from click.core import ParameterSource

from fmtopts.config.logging import get_logger
from fmtopts.errors import ValidationError
from fmtopts.options.spec import OptionType

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.options.schema import Schema
    from fmtopts.options.spec import OptionSpec

logger: FmtoptsLogger = get_logger(__name__)

#: Click context settings: unknown options are collected instead of rejected.
PARSER_CONTEXT_SETTINGS: Final[dict[str, Any]] = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "allow_interspersed_args": True,
}

_PATTERNS_PARAM: Final[str] = "patterns"

# Values from these sources were requested by the user (CLI flag or config default layer)
_EXPLICIT_SOURCES: Final[frozenset[ParameterSource]] = frozenset(
    {ParameterSource.COMMANDLINE, ParameterSource.DEFAULT_MAP}
)


@dataclass(frozen=True)
class ParsedArguments:
    """Raw option values keyed by CLI name plus the positional file patterns."""

    options: dict[str, Any] = field(default_factory=dict)
    patterns: tuple[str, ...] = ()


def _dest(name: str) -> str:
    return name.replace("-", "_")


def _uses_cli_default(spec: OptionSpec) -> bool:
    """Whether the schema default is reported even when the flag is absent.

    Forwarded options fall back to the engine defaults instead, except
    ``plugin`` whose default (no plugins) steers schema building.
    """
    if spec.deprecated or spec.default is None:
        return False
    return spec.forwards_to is None or spec.name == "plugin"


class ArgumentParser:
    """Click-backed tokenizer generated once per schema."""

    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        # Click parameter name -> schema entry
        self._by_dest: dict[str, OptionSpec] = {}
        params: list[click.Parameter] = []

        for spec in schema.detailed_options:
            if spec.negates is not None:
                negated: OptionSpec = schema.detailed_option_map[spec.negates]
                if negated.type is OptionType.BOOLEAN:
                    # Covered by the `--name/--no-name` pair of the negated option
                    continue
            params.append(self._make_option(spec))

        params.append(click.Argument([_PATTERNS_PARAM], nargs=-1, type=click.UNPROCESSED))
        self.command = click.Command(
            "fmtopts",
            params=params,
            context_settings=PARSER_CONTEXT_SETTINGS,
            add_help_option=False,
        )

    def _make_option(self, spec: OptionSpec) -> click.Option:
        dest: str = _dest(spec.name)
        self._by_dest[dest] = spec
        decls: list[str] = [spec.flag]
        if spec.alias:
            decls.append(f"-{spec.alias}")

        if spec.type is OptionType.BOOLEAN and spec.negates is None:
            decls[0] = f"{spec.flag}/--no-{spec.name}"
            default: Any = bool(spec.default)
            return click.Option([*decls, dest], is_flag=True, default=default)

        if spec.negates is not None:
            # `--no-config` for a non-boolean option
            return click.Option([*decls, dest], is_flag=True, default=False)

        if spec.type is OptionType.FLAG:
            return click.Option([*decls, dest], type=str, is_flag=False, flag_value="")

        return click.Option(
            [*decls, dest],
            type=click.UNPROCESSED,
            multiple=spec.array,
            default=spec.default if spec.default is not None and not spec.array else None,
        )

    def knows(self, name: str) -> bool:
        """Whether ``name`` (without dashes) is a long flag of this schema."""
        if name in self.schema.detailed_option_map:
            return True
        return name.startswith("no-") and name[3:] in self.schema.detailed_option_map

    def _attach_unknown_values(self, args: list[str]) -> list[str]:
        """Join an unknown ``--name`` with the value that follows it.

        The value of an option the schema does not know (yet) is never a file
        pattern. ``--no-name`` and ``--name=value`` tokens are left alone.
        """
        joined: list[str] = []
        index: int = 0
        while index < len(args):
            token: str = args[index]
            name: str = token[2:]
            if (
                token.startswith("--")
                and name
                and "=" not in name
                and not name.startswith("no-")
                and not self.knows(name)
                and index + 1 < len(args)
                and not args[index + 1].startswith("-")
            ):
                joined.append(f"{token}={args[index + 1]}")
                index += 2
                continue
            joined.append(token)
            index += 1
        return joined

    def parse(
        self, args: Sequence[str], *, defaults: Mapping[str, Any] | None = None
    ) -> ParsedArguments:
        """Tokenize ``args``.

        Args:
            args (Sequence[str]): Raw command-line arguments.
            defaults (Mapping[str, Any] | None): Default layer keyed by CLI name.

        Returns:
            ParsedArguments: Raw values keyed by CLI name, and the positional patterns.

        Raises:
            ValidationError: If Click rejects the arguments (e.g. a missing value).
        """
        args = list(args)
        trailing: list[str] = []
        if "--" in args:
            split_at: int = args.index("--")
            args, trailing = args[:split_at], args[split_at + 1 :]
        args = self._attach_unknown_values(args)

        default_map: dict[str, Any] = {}
        for name, value in (defaults or {}).items():
            spec: OptionSpec | None = self.schema.detailed_option_map.get(name)
            if spec is not None and spec.negates is None:
                default_map[_dest(spec.name)] = value

        try:
            ctx: click.Context = self.command.make_context(
                "fmtopts", args, default_map=default_map or None
            )
        except click.ClickException as exc:
            raise ValidationError(exc.format_message()) from exc

        options: dict[str, Any] = {}
        for dest, spec in self._by_dest.items():
            source: ParameterSource | None = ctx.get_parameter_source(dest)
            value: Any = ctx.params.get(dest)
            if source in _EXPLICIT_SOURCES:
                if spec.array and not value and source is not ParameterSource.COMMANDLINE:
                    continue
                options[spec.name] = value
            elif _uses_cli_default(spec):
                options[spec.name] = spec.default if spec.array else value

        patterns: list[str] = []
        for token in ctx.params.get(_PATTERNS_PARAM, ()):
            if token.startswith("-") and len(token) > 1:
                key, value = _split_unknown(token)
                options[key] = value
            else:
                patterns.append(token)
        patterns.extend(trailing)

        logger.trace("Parsed arguments: %s, patterns: %s", options, patterns)
        return ParsedArguments(options=options, patterns=tuple(patterns))


def _split_unknown(token: str) -> tuple[str, Any]:
    """Turn an unknown ``--name[=value]`` / ``-n`` token into a ``(name, value)`` pair."""
    body: str = token.lstrip("-")
    if "=" in body:
        name, _, raw = body.partition("=")
        return name, raw
    if body.startswith("no-"):
        return body[3:], False
    return body, True


def parse_arguments(
    schema: Schema, args: Sequence[str], *, defaults: Mapping[str, Any] | None = None
) -> ParsedArguments:
    """Tokenize ``args`` against ``schema`` (see `ArgumentParser.parse`)."""
    return ArgumentParser(schema).parse(args, defaults=defaults)
