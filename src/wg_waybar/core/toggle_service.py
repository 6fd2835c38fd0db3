"""Core toggle service — the up/down state machine.

The tunnel state is never stored: every invocation asks the interface
manager whether the interface exists and does the opposite.  The
outcome is written to the state store and the status bar is signalled,
whether the attempt succeeded or not.

Guarantees
----------
* No filesystem access of its own; the config text comes from the
  ``read_config`` callable and state goes through the injected store.
* An interface created by a failed bring-up is removed again when the
  failure came from the interface manager.
* The notifier is invoked exactly once per :meth:`ToggleService.toggle`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from wg_waybar.core.config_parser import parse_tunnel_config
from wg_waybar.core.models import (
    InterfaceSettings,
    IPAddress,
    PeerConfig,
    PeerSettings,
    ToggleAction,
    ToggleResult,
    TunnelConfig,
)
from wg_waybar.core.protocols import (
    InterfaceManager,
    InterfaceManagerFactory,
    Notifier,
    StateStore,
)
from wg_waybar.exceptions import InterfaceManagerError, WgWaybarError
from wg_waybar.utils.net import parse_ip, parse_ip_interface

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_PORT = 40077
DEFAULT_SIGNAL_NUMBER = 9


class ToggleService:
    """Brings a tunnel up when it is down and down when it is up.

    Parameters
    ----------
    manager_factory:
        Opens an :class:`InterfaceManager` for an interface name.
    state_store:
        Receives the outcome of every attempt.
    notifier:
        Signals the status bar after the outcome is recorded.
    default_port:
        Listen port used when the config has no ``ListenPort``.
    signal_number:
        Offset from ``SIGRTMIN`` passed to the notifier.
    """

    def __init__(
        self,
        manager_factory: InterfaceManagerFactory,
        state_store: StateStore,
        notifier: Notifier,
        *,
        default_port: int = DEFAULT_LISTEN_PORT,
        signal_number: int = DEFAULT_SIGNAL_NUMBER,
    ) -> None:
        self._manager_factory = manager_factory
        self._state_store = state_store
        self._notifier = notifier
        self._default_port = default_port
        self._signal_number = signal_number

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def toggle(
        self,
        interface_name: str,
        read_config: Callable[[], str],
    ) -> ToggleResult:
        """Flip the tunnel state, record the outcome and notify the bar.

        Action failures are returned in :attr:`ToggleResult.error`
        after being persisted.  Only persistence and notifier failures
        are raised.

        Raises
        ------
        StateError
            When the outcome cannot be written.
        SignalError
            When the status bar cannot be signalled.
        """
        result = self._attempt(interface_name, read_config)

        if result.error is None:
            self._state_store.save({})
        else:
            logger.info("Toggle of %s failed: %s", interface_name, result.error)
            self._state_store.save({interface_name: str(result.error)})

        self._notifier.notify(self._signal_number)
        return result

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _attempt(
        self,
        interface_name: str,
        read_config: Callable[[], str],
    ) -> ToggleResult:
        try:
            manager = self._manager_factory(interface_name)
            is_up = manager.is_up()
        except WgWaybarError as exc:
            return ToggleResult(interface_name, None, exc)

        action = ToggleAction.TEAR_DOWN if is_up else ToggleAction.BRING_UP
        logger.debug("Interface %s: %s", interface_name, action.name)
        try:
            if is_up:
                manager.remove_interface()
            else:
                self._bring_up(manager, read_config)
        except WgWaybarError as exc:
            return ToggleResult(interface_name, action, exc)
        return ToggleResult(interface_name, action)

    def _bring_up(
        self,
        manager: InterfaceManager,
        read_config: Callable[[], str],
    ) -> None:
        config = parse_tunnel_config(read_config())
        settings = self._interface_settings(manager.name, config)
        peers = [self._peer_settings(peer) for peer in config.peers]
        dns = self._dns_servers(config)

        manager.create_interface()
        try:
            manager.configure_interface(settings)
            if dns:
                manager.configure_dns(dns)
            for peer in peers:
                manager.configure_peer(peer)
        except InterfaceManagerError as exc:
            logger.debug("Removing half-configured %s: %s", manager.name, exc)
            # A failing cleanup replaces the original error.
            manager.remove_interface()
            raise

    # ------------------------------------------------------------------
    # Config → interface-manager values (pure)
    # ------------------------------------------------------------------

    def _interface_settings(
        self,
        name: str,
        config: TunnelConfig,
    ) -> InterfaceSettings:
        iface = config.interface
        port = iface.listen_port
        return InterfaceSettings(
            name=name,
            private_key=iface.private_key,
            addresses=tuple(
                parse_ip_interface(addr, field_name="Address")
                for addr in iface.addresses
            ),
            listen_port=self._default_port if port is None else port,
        )

    @staticmethod
    def _peer_settings(peer: PeerConfig) -> PeerSettings:
        return PeerSettings(
            public_key=peer.public_key,
            allowed_ips=tuple(
                parse_ip_interface(ip, field_name="AllowedIPs")
                for ip in peer.allowed_ips
            ),
            endpoint=peer.endpoint,
        )

    @staticmethod
    def _dns_servers(config: TunnelConfig) -> list[IPAddress] | None:
        if config.interface.dns is None:
            return None
        return [parse_ip(entry, field_name="DNS IP") for entry in config.interface.dns]
