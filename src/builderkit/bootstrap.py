"""Process setup: logging first, then the default registry."""

from __future__ import annotations

import logging

from builderkit.config.logging import configure_from_settings
from builderkit.config.settings import BuilderkitSettings, get_settings
from builderkit.core.registry import BuilderRegistry, build_registry, set_default_registry

logger = logging.getLogger(__name__)


def initialize(settings: BuilderkitSettings | None = None) -> BuilderRegistry:
    """Configure logging and install a freshly populated default registry.

    Safe to call more than once; each call replaces the process default.
    Returns the installed registry.
    """
    resolved = settings or get_settings()
    configure_from_settings(resolved)
    registry = build_registry(resolved)
    set_default_registry(registry)
    logger.debug("Default registry initialized with %d builders", len(registry))
    return registry
