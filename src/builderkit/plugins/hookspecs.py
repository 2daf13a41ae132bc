"""Pluggy hook specifications for builderkit extensions.

One setup-time hook lets installed distributions contribute builders to a
registry through the ``builderkit.plugins`` entry-point group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from builderkit.core.registry import BuilderRegistry

PROJECT_NAME = "builderkit"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class BuilderkitHookSpec:
    """Hook specifications for the builderkit plugin system."""

    @hookspec
    def register_builders(self, registry: BuilderRegistry) -> None:
        """Register builder factories on *registry*.

        Implementations call ``registry.register(name, factory)`` or
        ``registry.register_builder(builder_cls)``. Registration is
        last-write-wins, so a plugin may replace a built-in builder.
        """
