"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem, network or process I/O.
* No imports from ``cli`` or ``infra``.
"""

from wg_waybar.core.config_parser import parse_tunnel_config
from wg_waybar.core.models import (
    InterfaceConfig,
    PeerConfig,
    Status,
    StatusLine,
    ToggleAction,
    ToggleResult,
    TunnelConfig,
)
from wg_waybar.core.protocols import InterfaceManager, Notifier, StateStore
from wg_waybar.core.status_service import StatusService
from wg_waybar.core.toggle_service import ToggleService

__all__: list[str] = [
    "InterfaceConfig",
    "InterfaceManager",
    "Notifier",
    "PeerConfig",
    "StateStore",
    "Status",
    "StatusLine",
    "StatusService",
    "ToggleAction",
    "ToggleResult",
    "ToggleService",
    "TunnelConfig",
    "parse_tunnel_config",
]
