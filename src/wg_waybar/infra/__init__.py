"""Infrastructure layer — external system integration.

This layer wraps all interaction with the WireGuard tools, the process
table and the filesystem.  Every raw OS exception must be caught here
and re-raised as a :class:`~wg_waybar.exceptions.WgWaybarError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from wg_waybar.infra.config_file import interface_name_for, read_config_text
from wg_waybar.infra.paths import resolve_state_home
from wg_waybar.infra.state_store import JsonStateStore
from wg_waybar.infra.waybar_notifier import WaybarNotifier
from wg_waybar.infra.wg_interface import WgInterface, open_interface

__all__: list[str] = [
    "JsonStateStore",
    "WaybarNotifier",
    "WgInterface",
    "interface_name_for",
    "open_interface",
    "read_config_text",
    "resolve_state_home",
]
