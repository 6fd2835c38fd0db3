"""Core status service — builds the lines Waybar renders for the module.

Two independent checks run on every report: the persisted error of the
last toggle, and a live query of the interface.  Both may contribute a
line, so a failed toggle on a tunnel that is nevertheless up yields an
error line followed by a connected line.
"""

from __future__ import annotations

from wg_waybar.core.models import Status, StatusLine
from wg_waybar.core.protocols import InterfaceManagerFactory, StateStore
from wg_waybar.exceptions import InterfaceManagerError


class StatusService:
    """Stateless reporter combining recorded errors with live state.

    Parameters
    ----------
    manager_factory:
        Opens an :class:`~wg_waybar.core.protocols.InterfaceManager`.
    state_store:
        Source of the last toggle error per interface.
    """

    def __init__(
        self,
        manager_factory: InterfaceManagerFactory,
        state_store: StateStore,
    ) -> None:
        self._manager_factory = manager_factory
        self._state_store = state_store

    def report(self, interface_name: str) -> list[StatusLine]:
        """Return the status lines for *interface_name*, in emission order.

        Raises
        ------
        StateError
            When the state file cannot be read or decoded.
        """
        lines: list[StatusLine] = []

        errors = self._state_store.load()
        if interface_name in errors:
            lines.append(StatusLine.error(f"Toggle failed: {errors[interface_name]}"))

        lines.append(self._live_status(interface_name))
        return lines

    def _live_status(self, interface_name: str) -> StatusLine:
        try:
            manager = self._manager_factory(interface_name)
        except InterfaceManagerError as exc:
            return StatusLine.error(f"Failed to check VPN status: {exc}")

        status = Status.CONNECTED if manager.is_up() else Status.DISCONNECTED
        return StatusLine.for_interface(interface_name, status)
