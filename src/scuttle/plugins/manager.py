"""Plugin discovery, registration, and template collection."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from scuttle.plugins.hookspecs import ScuttleHookSpec

if TYPE_CHECKING:
    from scuttle.domain.templates import BroadcastTemplate

PROJECT_NAME = "scuttle"
ENTRY_POINT_GROUP = "scuttle.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Wraps a pluggy manager bound to the scuttle hook specifications."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ScuttleHookSpec)
        self._loaded = False

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``scuttle.plugins`` entry-point group.

        Returns the names of all registered plugins.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._instantiate_class_plugins()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_templates(self) -> dict[str, BroadcastTemplate]:
        """Merge the template mappings returned by every plugin.

        Plugins that raise or return something other than a dict are skipped
        with a warning. Later registrations win on key collisions.
        """
        templates: dict[str, BroadcastTemplate] = {}
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_broadcast_templates", None)
            if hook is None:
                continue
            name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                contributed = hook()
            except Exception:
                logger.warning("Failed to collect templates from plugin %s", name, exc_info=True)
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, dict):
                logger.warning("Plugin %s returned non-dict template registrations", name)
                continue
            templates.update(contributed)
        return templates

    def _instantiate_class_plugins(self) -> None:
        """Replace plugin classes registered by entry points with instances.

        Hook dispatch against a class object leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
