# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : plugins.py
#   file_relpath : src/fmtopts/plugins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Plugin model and plugin loading for FmtOpts.

A plugin contributes options to the schema, default overrides for existing
options, languages (used to infer a parser from a file name) and formatters
keyed by parser name.

Plugins are referenced by name on the command line (``--plugin``) or in a
config file (``plugins = [...]``). A name resolves, in order:

1. to an entry point in the ``fmtopts.plugins`` group with that name;
2. to an importable ``module[:attribute]`` path, where the attribute
   (default ``plugin``) is a `Plugin` or a zero-argument factory returning one.

Loaded plugins are cached for the lifetime of the process, so the same name
always yields the same `Plugin` object.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fmtopts.config.logging import get_logger
from fmtopts.constants import PLUGIN_ENTRYPOINT_GROUP
from fmtopts.errors import PluginLoadError

if TYPE_CHECKING:
    from fmtopts.config.logging import FmtoptsLogger
    from fmtopts.options.spec import SupportOption

logger: FmtoptsLogger = get_logger(__name__)

#: A formatter turns source text into formatted text given the resolved options.
Formatter = Callable[[str, Mapping[str, Any]], str]


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Language:
    """A language handled by a plugin.

    Attributes:
        name: Display name.
        parsers: Parser names able to handle the language; the first one is inferred.
        extensions: File suffixes, including the dot (``".ini"``).
        filenames: Exact file names (``"Makefile"``).
    """

    name: str
    parsers: tuple[str, ...]
    extensions: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()


@dataclass(frozen=True)
class Plugin:
    """A bundle of options, defaults, languages and formatters."""

    name: str
    options: tuple[SupportOption, ...] = ()
    default_options: Mapping[str, Any] = field(default_factory=_empty_mapping)
    languages: tuple[Language, ...] = ()
    formatters: Mapping[str, Formatter] = field(default_factory=_empty_mapping)

    @property
    def parsers(self) -> tuple[str, ...]:
        """Parser names this plugin can format."""
        return tuple(self.formatters)


def _coerce_plugin(obj: Any, ref: str) -> Plugin:
    provided: Any = obj() if callable(obj) and not isinstance(obj, Plugin) else obj
    if not isinstance(provided, Plugin):
        raise PluginLoadError(f"Plugin '{ref}' did not provide a Plugin object: {provided!r}")
    return provided


def _load_from_entry_point(name: str) -> Plugin | None:
    try:
        eps = entry_points()
    except Exception:  # pragma: no cover - broken metadata
        logger.exception("Failed to read entry points")
        return None

    candidates: EntryPoints = eps.select(group=PLUGIN_ENTRYPOINT_GROUP, name=name)
    for ep in candidates:
        try:
            provider: Any = ep.load()
        except Exception as exc:
            raise PluginLoadError(f"Failed loading plugin entry point '{name}': {exc}") from exc
        logger.debug("Loaded plugin '%s' from entry point %s", name, ep.value)
        return _coerce_plugin(provider, name)
    return None


def _load_from_import_path(ref: str) -> Plugin:
    module_name, _, attr = ref.partition(":")
    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise PluginLoadError(f"Couldn't find plugin '{ref}': {exc}") from exc
    attr = attr or "plugin"
    if not hasattr(module, attr):
        raise PluginLoadError(f"Plugin module '{module_name}' has no attribute '{attr}'")
    logger.debug("Loaded plugin '%s' from module %s", ref, module_name)
    return _coerce_plugin(getattr(module, attr), ref)


@lru_cache(maxsize=None)
def load_plugin(ref: str) -> Plugin:
    """Resolve a plugin name to a `Plugin` (cached).

    Raises:
        PluginLoadError: If the name resolves to nothing or to a non-plugin object.
    """
    found: Plugin | None = _load_from_entry_point(ref)
    if found is not None:
        return found
    return _load_from_import_path(ref)


def load_plugins(refs: Iterable[str | Plugin] | None) -> tuple[Plugin, ...]:
    """Load every plugin in ``refs``, dropping duplicates while preserving order.

    `Plugin` instances pass through unchanged.
    """
    loaded: list[Plugin] = []
    for ref in refs or ():
        plugin: Plugin = ref if isinstance(ref, Plugin) else load_plugin(str(ref))
        if plugin not in loaded:
            loaded.append(plugin)
    return tuple(loaded)
