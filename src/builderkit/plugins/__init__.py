"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``builderkit.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from builderkit.plugins.hookspecs import hookimpl
from builderkit.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
