"""Unified settings: init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: explicit overrides from the host application
  2. Env vars: ``BUILDERKIT_*`` prefix, ``__`` for nested sections
  3. TOML file: ``builderkit.toml`` or ``[tool.builderkit]``, walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`builderkit.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from builderkit.config.discovery import find_config, load_config_data
from builderkit.config.models import LoggingConfig, RegistryConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed the builderkit table of a discovered TOML file into the settings.

    For ``pyproject.toml`` only the ``[tool.builderkit]`` table is used.
    """

    def __init__(self, settings_cls: type[BaseSettings], config_file: Path | None) -> None:
        super().__init__(settings_cls)
        self._table: dict[str, Any] = {}
        if config_file is not None and config_file.is_file():
            self._table = load_config_data(config_file)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        if field_name not in self._table:
            return None, field_name, False
        return self._table[field_name], field_name, True

    def __call__(self) -> dict[str, Any]:
        return dict(self._table)


# The config file chosen by load(), visible to the source hook while the
# settings object is being constructed on this thread.
_loading = threading.local()


class BuilderkitSettings(BaseSettings):
    """Process-wide builderkit settings, frozen after construction.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        registry: How the default builder registry is populated.
        logging: Log verbosity and output format.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BUILDERKIT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Drop dotenv and secrets; the TOML file ranks below env vars."""
        config_file = getattr(_loading, "config_file", None)
        return init_settings, env_settings, TomlSettingsSource(settings_cls, config_file)

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> BuilderkitSettings:
        """Construct settings, discovering the TOML file unless one is given.

        Raises:
            ConfigError: If the TOML file cannot be parsed.
        """
        if config_path is None:
            config_file = find_config(start)
        else:
            explicit = Path(config_path)
            config_file = explicit if explicit.is_file() else None

        _loading.config_file = config_file
        try:
            return cls(config_path=config_file, **overrides)
        finally:
            del _loading.config_file


_settings: BuilderkitSettings | None = None
_settings_lock = threading.Lock()


def get_settings() -> BuilderkitSettings:
    """Return the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = BuilderkitSettings.load()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next :func:`get_settings` reloads them."""
    global _settings
    with _settings_lock:
        _settings = None
