# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : context.py
#   file_relpath : src/fmtopts/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Run context: raw arguments, normalized CLI values and the live schema.

A `Context` is created once per invocation by `create_context` and completed
by `init_context`. It exclusively owns the live
[`SchemaState`][fmtopts.options.schema.SchemaState] and the stack of saved
states used by plugin scopes.

Plugin scopes never mutate a schema: entering a scope pushes the current
snapshot and installs a new one built for the extended plugin set; leaving the
scope, even on error, reinstalls the saved snapshot by reference. Scopes must
be strictly nested.

Example:
    ```python
    context = create_context(["--print-width", "100", "src/*.ini"])
    init_context(context)
    with plugin_scope(context, ["fmtopts_toml"]):
        ...  # schema includes the plugin options here
    ```
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Final, Iterable, Iterator, Mapping, TypeVar

from fmtopts.config.logging import get_logger, level_from_loglevel, setup_logging
from fmtopts.options.normalizer import normalize_cli_options
from fmtopts.options.parser import parse_arguments
from fmtopts.options.schema import build_schema
from fmtopts.plugins import load_plugins

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.console_api import ConsoleLike
    from fmtopts.engine import FormatEngine
    from fmtopts.options.parser import ParsedArguments
    from fmtopts.options.schema import SchemaState
    from fmtopts.options.spec import OptionSpec, SupportOption
    from fmtopts.plugins import Plugin

logger: FmtoptsLogger = get_logger(__name__)

T = TypeVar("T")

# Options read before the schema is complete: they steer logging and plugin loading
BOOTSTRAP_KEYS: Final[tuple[str, ...]] = ("loglevel", "plugin", "color")


class Context:
    """State of one CLI invocation.

    Attributes:
        args: Raw command-line arguments, immutable for the run.
        argv: Normalized CLI values keyed by CLI name (set by `init_context`).
        file_patterns: Positional file patterns (set by `init_context`).
        schema: The live schema snapshot.
        console: Program-output console.
        engine: Formatting engine.
    """

    def __init__(
        self,
        args: Iterable[str],
        schema: SchemaState,
        *,
        console: ConsoleLike,
        engine: FormatEngine,
    ) -> None:
        self.args: tuple[str, ...] = tuple(args)
        self.argv: dict[str, Any] = {}
        self.file_patterns: tuple[str, ...] = ()
        self.schema: SchemaState = schema
        self.console: ConsoleLike = console
        self.engine: FormatEngine = engine
        self._schema_stack: list[SchemaState] = []

    def __repr__(self) -> str:
        return (
            f"Context(args={self.args!r}, plugins={self.schema.plugin_names!r}, "
            f"depth={len(self._schema_stack)})"
        )

    @property
    def support_options(self) -> tuple[SupportOption, ...]:
        """API-level options of the live schema."""
        return self.schema.support_options

    @property
    def detailed_options(self) -> tuple[OptionSpec, ...]:
        """CLI-level entries of the live schema."""
        return self.schema.detailed_options

    @property
    def detailed_option_map(self) -> Mapping[str, OptionSpec]:
        """Name → CLI-level entry of the live schema."""
        return self.schema.detailed_option_map

    @property
    def api_default_options(self) -> Mapping[str, Any]:
        """API name → default of the live schema."""
        return self.schema.api_default_options

    @property
    def loglevel(self) -> str:
        """The effective ``--loglevel`` choice."""
        return self.argv.get("loglevel", "log")

    @property
    def scope_depth(self) -> int:
        """Number of plugin scopes currently entered."""
        return len(self._schema_stack)

    def push_plugins(self, plugins: Iterable[str | Plugin]) -> SchemaState:
        """Save the live schema and install one extended with ``plugins``.

        The new schema holds the plugins of the live schema followed by
        ``plugins`` (duplicates dropped).

        Returns:
            SchemaState: The saved schema, to be handed back to `pop_plugins`.

        Raises:
            PluginLoadError: If a plugin cannot be loaded; the live schema is unchanged.
        """
        saved: SchemaState = self.schema
        loaded: tuple[Plugin, ...] = load_plugins([*saved.plugins, *plugins])
        self._schema_stack.append(saved)
        self.schema = build_schema(plugins=loaded)
        logger.debug(
            "Entered plugin scope %d: %s", len(self._schema_stack), self.schema.plugin_names
        )
        return saved

    def pop_plugins(self) -> SchemaState:
        """Reinstall the schema saved by the matching `push_plugins`.

        Raises:
            RuntimeError: If no plugin scope is active.
        """
        if not self._schema_stack:
            raise RuntimeError("pop_plugins() called without a matching push_plugins()")
        self.schema = self._schema_stack.pop()
        logger.debug("Left plugin scope, back to plugins %s", self.schema.plugin_names)
        return self.schema


@contextmanager
def plugin_scope(context: Context, plugins: Iterable[str | Plugin]) -> Iterator[SchemaState]:
    """Run the ``with`` block with the schema extended by ``plugins``.

    The previous schema is restored by reference when the block exits, even on error.
    """
    context.push_plugins(plugins)
    try:
        yield context.schema
    finally:
        context.pop_plugins()


def with_plugin_scope(
    context: Context, plugins: Iterable[str | Plugin], fn: Callable[[], T]
) -> T:
    """Call ``fn`` inside a `plugin_scope` and return its result."""
    with plugin_scope(context, plugins):
        return fn()


def create_context(
    args: Iterable[str],
    *,
    console: ConsoleLike | None = None,
    engine: FormatEngine | None = None,
) -> Context:
    """Create the run context for ``args``.

    Logging is configured from ``--loglevel``/``--color`` and the ``--plugin``
    values are loaded before the full schema is built.

    Raises:
        ValidationError: If a bootstrap option has an invalid value.
        PluginLoadError: If a ``--plugin`` cannot be loaded.
    """
    args = tuple(args)
    bootstrap_schema: SchemaState = build_schema()
    parsed: ParsedArguments = parse_arguments(bootstrap_schema, args)
    bootstrap: dict[str, Any] = normalize_cli_options(
        parsed.options, bootstrap_schema, keys=BOOTSTRAP_KEYS, warn=False
    )

    loglevel: str = bootstrap.get("loglevel", "log")
    enable_color: bool = bootstrap.get("color", True)
    setup_logging(level_from_loglevel(loglevel), enable_color=enable_color)

    if console is None:
        from fmtopts.cli.console import ClickConsole

        console = ClickConsole(enable_color=enable_color, loglevel=loglevel)
    if engine is None:
        from fmtopts.engine import DefaultEngine

        engine = DefaultEngine()

    plugins: tuple[Plugin, ...] = load_plugins(bootstrap.get("plugin", ()))
    context = Context(args, build_schema(plugins=plugins), console=console, engine=engine)
    context.argv = dict(bootstrap)
    logger.trace("Created %r", context)
    return context


def init_context(context: Context) -> Context:
    """Parse and normalize every argument against the full schema.

    Unknown and deprecated options are reported here, once per run.

    Raises:
        ValidationError: If an option value does not fit its type.
    """
    parsed: ParsedArguments = parse_arguments(context.schema, context.args)
    context.argv = normalize_cli_options(parsed.options, context.schema)
    context.file_patterns = parsed.patterns
    logger.debug("Normalized CLI options: %s", context.argv)
    return context
