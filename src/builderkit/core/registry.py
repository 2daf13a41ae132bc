"""Builder registry: create builders dynamically from a type name.

A registry is an explicit object. Private instances isolate registrations
(tests, embedded use); :func:`default_registry` provides the process-wide
instance, created once on first use and populated from configuration.

INVARIANT: Registration is last-write-wins and entries are never removed
during normal operation. All access is serialized by a lock, so concurrent
``register`` and ``create`` calls are safe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from builderkit.core.errors import RegistryLookupError

if TYPE_CHECKING:
    from builderkit.config.settings import BuilderkitSettings
    from builderkit.core.builder import Builder

logger = logging.getLogger(__name__)

type BuilderFactory = Callable[[], Builder[Any]]


class BuilderRegistry:
    """Name-to-factory map for builders."""

    def __init__(self) -> None:
        self._factories: dict[str, BuilderFactory] = {}
        self._lock = threading.RLock()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories

    def __len__(self) -> int:
        with self._lock:
            return len(self._factories)

    def register(self, name: str, factory: BuilderFactory) -> None:
        """Map *name* to *factory*, replacing any previous registration."""
        with self._lock:
            replaced = name in self._factories
            self._factories[name] = factory
        if replaced:
            logger.debug("Replaced builder registration: %s", name)
        else:
            logger.debug("Registered builder: %s", name)

    def register_builder[B: type[Builder[Any]]](self, builder_cls: B, name: str | None = None) -> B:
        """Register a builder class under *name* or its ``type_name``.

        Returns the class so this can be used as a decorator::

            @registry.register_builder
            class WidgetBuilder(Builder[Widget]): ...
        """
        resolved = name or builder_cls.type_name
        if not resolved:
            msg = f"{builder_cls.__name__} has no type_name; pass a name explicitly"
            raise ValueError(msg)
        self.register(resolved, builder_cls)
        return builder_cls

    def lookup(self, name: str) -> BuilderFactory | None:
        """Return the factory registered under *name*, or None."""
        with self._lock:
            return self._factories.get(name)

    def create(self, name: str) -> Builder[Any]:
        """Return a fresh builder for *name*.

        Raises:
            RegistryLookupError: If nothing is registered under *name*.
        """
        factory = self.lookup(name)
        if factory is None:
            logger.debug("No builder registered for %s", name)
            raise RegistryLookupError(name)
        return factory()

    def names(self) -> list[str]:
        """Registered type names, sorted."""
        with self._lock:
            return sorted(self._factories)

    def snapshot(self) -> dict[str, BuilderFactory]:
        """Return a copy of the current registrations."""
        with self._lock:
            return dict(self._factories)


# ---------------------------------------------------------------------------
# Process default
# ---------------------------------------------------------------------------

_default: BuilderRegistry | None = None
_default_lock = threading.Lock()


def build_registry(settings: BuilderkitSettings | None = None) -> BuilderRegistry:
    """Create a registry populated according to *settings*.

    Built-in sample builders are included when ``registry.include_builtins``
    is set; plugin builders are loaded when ``registry.load_plugins`` is set.
    """
    from builderkit.config.settings import get_settings

    resolved = settings or get_settings()
    registry = BuilderRegistry()
    if resolved.registry.include_builtins:
        from builderkit.builders import register_builtin_builders

        register_builtin_builders(registry)
    if resolved.registry.load_plugins:
        from builderkit.plugins.manager import PluginManager

        PluginManager().discover_and_load(
            registry,
            group=resolved.registry.entry_point_group,
        )
    return registry


def default_registry() -> BuilderRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = build_registry()
    return _default


def set_default_registry(registry: BuilderRegistry | None) -> BuilderRegistry | None:
    """Install *registry* as the process default and return the previous one.

    Passing None drops the current default; the next
    :func:`default_registry` call rebuilds it from settings.
    """
    global _default
    with _default_lock:
        previous = _default
        _default = registry
    return previous


def create_builder(name: str, *, registry: BuilderRegistry | None = None) -> Builder[Any]:
    """Create a builder by type name from *registry* or the process default."""
    if registry is None:
        registry = default_registry()
    return registry.create(name)
