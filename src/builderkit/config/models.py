"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, builderkit.toml only contains
overrides. An empty file (or no file) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_ENTRY_POINT_GROUP = "builderkit.plugins"


class RegistryConfig(BaseModel):
    """[registry] section: how the process default registry is populated."""

    model_config = {"frozen": True}

    include_builtins: bool = True
    load_plugins: bool = False
    entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
