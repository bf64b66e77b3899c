# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : normalizer.py
#   file_relpath : src/fmtopts/options/normalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Validate and coerce raw option values against the live schema.

Two entry points share the same per-type coercion functions:

- `normalize_cli_options`: raw values keyed by CLI name, as produced by the
  argument parser. Returns values keyed by CLI name.
- `normalize_api_options`: raw values keyed by API name, as loaded from a
  config file. Returns values keyed by API name.

Unknown names and deprecated options produce warnings, never exceptions;
unknown names are dropped after a did-you-mean suggestion. Values that do not
fit their option type raise [`ValidationError`][fmtopts.errors.ValidationError].
"""

from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING, Any, Callable, Final, Iterable, Mapping

from fmtopts.config.logging import get_logger
from fmtopts.errors import ValidationError
from fmtopts.options.spec import OptionType
from fmtopts.options.suggest import find_option, suggest

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.options.schema import Schema
    from fmtopts.options.spec import OptionSpec

logger: FmtoptsLogger = get_logger(__name__)

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"true"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"false"})
_INFINITY_WORDS: Final[frozenset[str]] = frozenset({"infinity", "inf"})


def _received(value: Any) -> str:
    return json.dumps(value, default=str)


def _invalid(label: str, expected: str, value: Any) -> ValidationError:
    return ValidationError(
        f"Invalid {label} value. Expected {expected}, but received {_received(value)}."
    )


def _quoted_list(values: Iterable[str]) -> str:
    quoted: list[str] = [f'"{value}"' for value in values]
    if len(quoted) <= 1:
        return "".join(quoted)
    return f"{', '.join(quoted[:-1])} or {quoted[-1]}"


def coerce_boolean(spec: OptionSpec, value: Any, label: str) -> bool:
    """Accept a bool or the words ``true``/``false``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word: str = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise _invalid(label, "true or false", value)


def coerce_number(spec: OptionSpec, value: Any, label: str) -> int | float:
    """Accept an integer (or integral float), an integer string, or infinity."""
    if isinstance(value, bool):
        raise _invalid(label, "an integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isinf(value) and value > 0:
            return value
        if value.is_integer():
            return int(value)
        raise _invalid(label, "an integer", value)
    if isinstance(value, str):
        text: str = value.strip()
        if text.lower() in _INFINITY_WORDS:
            return math.inf
        try:
            return int(text)
        except ValueError:
            pass
    raise _invalid(label, "an integer", value)


def coerce_string(spec: OptionSpec, value: Any, label: str) -> str:
    """Accept a string; numbers are converted to their decimal text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise _invalid(label, "a string", value)


def coerce_choice(spec: OptionSpec, value: Any, label: str) -> str:
    """Accept one of the declared choice values (case-sensitive)."""
    for choice in spec.choices:
        if value == choice.value:
            return choice.value
    expected: str = _quoted_list(choice.value for choice in spec.active_choices)
    raise _invalid(label, expected, value)


_COERCERS: Final[dict[OptionType, Callable[[OptionSpec, Any, str], Any]]] = {
    OptionType.BOOLEAN: coerce_boolean,
    OptionType.NUMBER: coerce_number,
    OptionType.STRING: coerce_string,
    OptionType.PATH: coerce_string,
    OptionType.FLAG: coerce_string,
    OptionType.CHOICE: coerce_choice,
}


def coerce_value(
    spec: OptionSpec, value: Any, *, label: str | None = None, warn: bool = True
) -> Any:
    """Coerce ``value`` for ``spec``; array options always yield a tuple.

    Raises:
        ValidationError: If the value does not fit the option type.
    """
    coercer: Callable[[OptionSpec, Any, str], Any] = _COERCERS[spec.type]
    label = label or f"`{spec.flag}`"
    if spec.array:
        items: Iterable[Any] = value if isinstance(value, (list, tuple)) else (value,)
        result: Any = tuple(coercer(spec, item, label) for item in items)
    else:
        result = coercer(spec, value, label)

    if warn and spec.type is OptionType.CHOICE:
        deprecated: set[str] = {choice.value for choice in spec.choices if choice.deprecated}
        for item in result if spec.array else (result,):
            if item in deprecated:
                logger.warning('%s "%s" is deprecated.', label, item)
    return result


def normalize_cli_options(
    argv: Mapping[str, Any],
    schema: Schema,
    *,
    keys: Iterable[str] | None = None,
    warn: bool = True,
) -> dict[str, Any]:
    """Validate parsed CLI values keyed by CLI name.

    ``no-<name>`` values are folded into ``name = False``.

    Args:
        argv (Mapping[str, Any]): Raw values keyed by CLI name (unknown names allowed).
        schema (Schema): The live schema.
        keys (Iterable[str] | None): Restrict normalization to these names.
        warn (bool): Whether to log unknown-name and deprecation warnings.

    Returns:
        dict[str, Any]: Coerced values keyed by CLI name.

    Raises:
        ValidationError: If a value does not fit its option type.
    """
    selected: set[str] | None = set(keys) if keys is not None else None
    normalized: dict[str, Any] = {}

    for key, value in argv.items():
        if selected is not None and key not in selected:
            continue

        spec: OptionSpec | None = schema.lookup(key)
        if spec is None:
            find_option(schema.detailed_options, key, warn=warn)
            continue

        if spec.negates is not None:
            if value:
                normalized[spec.negates] = False
            continue

        if spec.deprecated and warn:
            logger.warning("%s is deprecated.", spec.flag)

        normalized[spec.name] = coerce_value(spec, value, warn=warn)

    return normalized


def normalize_api_options(
    options: Mapping[str, Any],
    schema: Schema,
    *,
    warn: bool = True,
) -> dict[str, Any]:
    """Validate config values keyed by API name.

    Deprecated options are dropped with a warning: they are never forwarded.

    Args:
        options (Mapping[str, Any]): Raw values keyed by API name.
        schema (Schema): The live schema.
        warn (bool): Whether to log unknown-name and deprecation warnings.

    Returns:
        dict[str, Any]: Coerced values keyed by API name.

    Raises:
        ValidationError: If a value does not fit its option type.
    """
    normalized: dict[str, Any] = {}

    for key, value in options.items():
        spec: OptionSpec | None = schema.api_option(key)
        if spec is None:
            support = schema.support_option(key)
            if support is not None and support.deprecated:
                if warn:
                    logger.warning("%s is deprecated.", key)
                continue
            if warn:
                suggested: str | None = suggest(key, schema.api_to_cli)
                if suggested is not None:
                    logger.warning('Unknown option name "%s", did you mean "%s"?', key, suggested)
                else:
                    logger.warning('Unknown option name "%s"', key)
            continue

        normalized[key] = coerce_value(spec, value, label=key, warn=warn)

    return normalized
