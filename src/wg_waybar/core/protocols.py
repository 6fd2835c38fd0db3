"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the toggle and status logic can be exercised with
test doubles instead of real network interfaces and processes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from wg_waybar.core.models import (
    InterfaceSettings,
    IPAddress,
    PeerSettings,
    PersistedState,
)


class InterfaceManager(Protocol):
    """Handle on one named tunnel interface.

    Every method raises
    :class:`~wg_waybar.exceptions.InterfaceManagerError` when the
    underlying capability reports a failure.
    """

    name: str

    def is_up(self) -> bool:
        """Return ``True`` when the interface exists and can be read."""
        ...  # pragma: no cover

    def create_interface(self) -> None:
        ...  # pragma: no cover

    def configure_interface(self, settings: InterfaceSettings) -> None:
        """Apply private key, listen port and addresses, then set link up."""
        ...  # pragma: no cover

    def configure_dns(self, servers: Sequence[IPAddress]) -> None:
        ...  # pragma: no cover

    def configure_peer(self, peer: PeerSettings) -> None:
        ...  # pragma: no cover

    def remove_interface(self) -> None:
        ...  # pragma: no cover


InterfaceManagerFactory = Callable[[str], InterfaceManager]
"""Opens an :class:`InterfaceManager` for an interface name.

Raises :class:`~wg_waybar.exceptions.InterfaceManagerError` when the
capability itself is unavailable (missing tools, invalid name).
"""


class Notifier(Protocol):
    """Contract for telling the status bar to refresh."""

    def find_target_process(self) -> int | None:
        """Return the pid of the status-bar process, or ``None``."""
        ...  # pragma: no cover

    def notify(self, signal_number: int) -> None:
        """Send real-time signal ``SIGRTMIN + signal_number``.

        Raises
        ------
        SignalOutOfRangeError
            Before any lookup, when *signal_number* is outside
            ``0 .. SIGRTMAX - SIGRTMIN``.
        ProcessNotFoundError
            When no status-bar process is running.
        SignalDeliveryError
            When ``kill(2)`` fails.
        """
        ...  # pragma: no cover


class StateStore(Protocol):
    """Contract for the persisted last-toggle error record."""

    def load(self) -> PersistedState:
        """Return the recorded errors.

        Raises :class:`~wg_waybar.exceptions.StateError` when the record
        cannot be read or decoded.
        """
        ...  # pragma: no cover

    def save(self, errors: PersistedState) -> None:
        """Overwrite the whole record with *errors* (``{}`` clears it)."""
        ...  # pragma: no cover
