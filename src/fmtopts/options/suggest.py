# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : suggest.py
#   file_relpath : src/fmtopts/options/suggest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Did-you-mean suggestions for unknown option names."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Iterable, Sequence

from fmtopts.config.logging import get_logger

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.options.spec import OptionSpec

logger: FmtoptsLogger = get_logger(__name__)

#: A candidate is suggested when its edit distance is strictly below this threshold.
SUGGESTION_THRESHOLD: Final[int] = 3

FALLBACK_OPTION: Final[str] = "help"


def leven(a: str, b: str) -> int:
    """Return the Levenshtein (edit) distance between ``a`` and ``b``."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    row: list[int] = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        prev = row[0]
        row[0] = i
        for j, cb in enumerate(b, 1):
            insert = row[j] + 1
            delete = row[j - 1] + 1
            substitute = prev + (0 if ca == cb else 1)
            prev, row[j] = row[j], min(insert, delete, substitute)
    return row[-1]


def suggest(name: str, candidates: Iterable[str]) -> str | None:
    """Return the first candidate within the suggestion threshold of ``name``, else None."""
    for candidate in candidates:
        if leven(candidate, name) < SUGGESTION_THRESHOLD:
            return candidate
    return None


def _names(options: Sequence[OptionSpec]) -> list[tuple[str, int]]:
    """Primary names and aliases, each paired with the index of its option."""
    names: list[tuple[str, int]] = []
    for index, option in enumerate(options):
        names.append((option.name, index))
        if option.alias:
            names.append((option.alias, index))
    return names


def find_option(
    options: Sequence[OptionSpec], option_name: str, *, warn: bool = True
) -> tuple[OptionSpec | None, str | None]:
    """Resolve ``option_name`` against ``options``.

    Returns:
        tuple[OptionSpec | None, str | None]: ``(option, suggested_name)``. An exact
        name or alias match returns ``(option, None)``; a close match returns the
        suggested option and the matched name; otherwise ``(None, None)``.
    """
    names: list[tuple[str, int]] = _names(options)
    for value, index in names:
        if value == option_name:
            return options[index], None

    for value, index in names:
        if leven(value, option_name) < SUGGESTION_THRESHOLD:
            if warn:
                logger.warning('Unknown option name "%s", did you mean "%s"?', option_name, value)
            return options[index], value

    if warn:
        logger.warning('Unknown option name "%s"', option_name)
    return None, None


def get_option_with_suggestion(
    options: Sequence[OptionSpec], option_name: str, *, warn: bool = True
) -> OptionSpec:
    """Return the option named ``option_name``, its closest match, or the ``help`` option.

    Ties between close matches go to the first one in ``options`` order.

    Raises:
        LookupError: If nothing matches and ``options`` has no ``help`` entry.
    """
    option, _ = find_option(options, option_name, warn=warn)
    if option is not None:
        return option
    for candidate in options:
        if candidate.name == FALLBACK_OPTION:
            return candidate
    raise LookupError(f"No option matches '{option_name}' and no '{FALLBACK_OPTION}' fallback")
