# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : builtins.py
#   file_relpath : src/fmtopts/options/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""CLI-only options of the fmtopts command.

These options steer the command itself (output mode, config discovery,
logging) and are never forwarded to the formatting engine. Forwarded options
come from [`fmtopts.options.support`][fmtopts.options.support].

When a CLI option shares its name with an option derived from the support
table, the entry below wins (see
[`build_schema`][fmtopts.options.schema.build_schema]).
"""

from __future__ import annotations

from typing import Final

from fmtopts.config.logging import LOGLEVEL_CHOICES
from fmtopts.constants import (
    CATEGORY_CONFIG,
    CATEGORY_OTHER,
    CATEGORY_OUTPUT,
    DEFAULT_IGNORE_FILE,
)
from fmtopts.options.spec import Choice, OptionSpec, OptionType

CLI_OPTIONS: Final[tuple[OptionSpec, ...]] = (
    OptionSpec(
        name="color",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OTHER,
        default=True,
        description="Colorize error messages.",
        opposite_description="Do not colorize error messages.",
    ),
    OptionSpec(
        name="config",
        type=OptionType.PATH,
        category=CATEGORY_CONFIG,
        description=(
            "Path to a fmtopts configuration file (.fmtoptsrc.toml, fmtopts.toml, pyproject.toml)."
        ),
        opposite_description="Do not look for a configuration file.",
    ),
    OptionSpec(
        name="config-precedence",
        type=OptionType.CHOICE,
        category=CATEGORY_CONFIG,
        default="cli-override",
        description="Define in which order config files and CLI options should be evaluated.",
        choices=(
            Choice("cli-override", "CLI options take precedence over config file"),
            Choice("file-override", "Config file take precedence over CLI options"),
            Choice(
                "prefer-file",
                "If a config file is found will evaluate it and ignore other CLI options.\n"
                "If no config file is found CLI options will evaluate as normal.",
            ),
        ),
    ),
    OptionSpec(
        name="debug-check",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OTHER,
    ),
    OptionSpec(
        name="editorconfig",
        type=OptionType.BOOLEAN,
        category=CATEGORY_CONFIG,
        default=True,
        description="Take .editorconfig into account when parsing configuration.",
        opposite_description="Don't take .editorconfig into account when parsing configuration.",
    ),
    OptionSpec(
        name="find-config-path",
        type=OptionType.PATH,
        category=CATEGORY_CONFIG,
        description="Find and print the path to a configuration file for the given input file.",
    ),
    OptionSpec(
        name="help",
        type=OptionType.FLAG,
        category=CATEGORY_OTHER,
        alias="h",
        description="Show CLI usage, or details about the given flag.\nExample: --help write",
    ),
    OptionSpec(
        name="ignore-path",
        type=OptionType.PATH,
        category=CATEGORY_CONFIG,
        default=DEFAULT_IGNORE_FILE,
        description="Path to a file with patterns describing files to ignore.",
    ),
    OptionSpec(
        name="list-different",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OUTPUT,
        alias="l",
        description="Print the names of files that are different from fmtopts's formatting.",
    ),
    OptionSpec(
        name="loglevel",
        type=OptionType.CHOICE,
        category=CATEGORY_OTHER,
        default="log",
        description="What level of logs to report.",
        choices=tuple(Choice(level) for level in LOGLEVEL_CHOICES),
    ),
    OptionSpec(
        name="stdin",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OTHER,
        description="Force reading input from stdin.",
    ),
    OptionSpec(
        name="support-info",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OTHER,
        description="Print support information as JSON.",
    ),
    OptionSpec(
        name="version",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OTHER,
        alias="v",
        description="Print fmtopts version.",
    ),
    OptionSpec(
        name="with-node-modules",
        type=OptionType.BOOLEAN,
        category=CATEGORY_CONFIG,
        description="Process files inside 'node_modules' directory.",
    ),
    OptionSpec(
        name="write",
        type=OptionType.BOOLEAN,
        category=CATEGORY_OUTPUT,
        description="Edit files in-place. (Beware!)",
    ),
)
