"""Config file discovery and loading.

Settings live either in a dedicated ``builderkit.toml`` or in the
``[tool.builderkit]`` table of a project's ``pyproject.toml``. Discovery
walks up from the start directory and stops at the first directory that
has either; ``builderkit.toml`` wins when both are present. The
BUILDERKIT_CONFIG env var names a file explicitly and disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from builderkit.core.errors import ConfigError

CONFIG_FILENAME = "builderkit.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "builderkit")
CONFIG_ENV_VAR = "BUILDERKIT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _pyproject_table(_read_toml(pyproject)) is not None:
            return pyproject
    return None


def load_config_data(path: Path) -> dict[str, Any]:
    """Read the builderkit settings table from *path*.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return _pyproject_table(data) or {}
    return data


def _read_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def _pyproject_table(data: dict[str, Any]) -> dict[str, Any] | None:
    table: Any = data
    for key in PYPROJECT_TABLE:
        if not isinstance(table, dict) or key not in table:
            return None
        table = table[key]
    return table if isinstance(table, dict) else None
