"""Extension layer — plugin system via pluggy.

Discovery: entry points in the ``scuttle.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from scuttle.plugins.manager import PluginManager

__all__ = ["PluginManager"]
