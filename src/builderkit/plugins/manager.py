"""Plugin discovery, loading, and builder registration.

Discovery: entry points in the ``builderkit.plugins`` group (configurable).
Each entry point may name a module, a class, or an instance carrying
``@hookimpl``-decorated ``register_builders``.

INVARIANT: Plugin failures are warnings, never errors. A plugin that cannot
be imported, instantiated, or that raises while registering is skipped and
the rest still load.
"""

from __future__ import annotations

import inspect
import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

import pluggy

from builderkit.config.models import DEFAULT_ENTRY_POINT_GROUP
from builderkit.plugins.hookspecs import PROJECT_NAME, BuilderkitHookSpec

if TYPE_CHECKING:
    from builderkit.core.registry import BuilderRegistry

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads builderkit plugins and lets them populate a registry."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(BuilderkitHookSpec)

    def discover_and_load(
        self,
        registry: BuilderRegistry,
        *,
        group: str = DEFAULT_ENTRY_POINT_GROUP,
    ) -> list[str]:
        """Load entry-point plugins, then let every plugin register builders.

        Returns the names of all registered plugins.
        """
        self._load_entry_points(group)
        self._normalize_plugin_instances()
        self.register_builders(registry)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def register_builders(self, registry: BuilderRegistry) -> None:
        """Call each plugin's ``register_builders`` hook against *registry*.

        Plugins are called one at a time so that a failing plugin cannot
        stop the others.
        """
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_builders", None)
            if hook is None:
                continue
            try:
                hook(registry=registry)
            except Exception:
                logger.warning(
                    "Plugin %s failed to register builders",
                    plugin_name,
                    exc_info=True,
                )
                continue
            logger.debug("Plugin %s registered builders", plugin_name)

    # ------------------------------------------------------------------
    # Entry-point discovery
    # ------------------------------------------------------------------

    def _load_entry_points(self, group: str) -> None:
        for ep in entry_points(group=group):
            if self._pm.get_plugin(ep.name) is not None or self._pm.is_blocked(ep.name):
                continue
            try:
                plugin = ep.load()
            except Exception:
                logger.warning("Failed to load plugin entry point %s", ep.name, exc_info=True)
                continue
            try:
                self._pm.register(plugin, name=ep.name)
            except ValueError:
                logger.warning("Plugin %s rejected by hook validation", ep.name, exc_info=True)
                continue
            logger.debug("Loaded entry-point plugin: %s", ep.name)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Hook dispatch against a class object leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any ``@hookimpl``-decorated methods."""
        marker = f"{PROJECT_NAME}_impl"
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, marker, None):
                return True
        return False
