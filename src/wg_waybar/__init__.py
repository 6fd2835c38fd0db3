"""wg-waybar — toggle a WireGuard tunnel and report its state to Waybar.

Parses ``wg-quick`` style configuration files, brings the interface up
or down, and keeps a tiny JSON status record for the bar module.
"""

from wg_waybar.version import __version__

__all__: list[str] = ["__version__"]
