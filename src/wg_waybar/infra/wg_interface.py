"""``ip``/``wg`` backed implementation of the interface-manager protocol.

This module is the **only** place in the codebase that spawns the
WireGuard userspace tools.  Non-zero exits and spawn failures are
re-raised as :class:`~wg_waybar.exceptions.InterfaceManagerError` — no
``subprocess`` exception escapes the infrastructure boundary.

Commands used
-------------
* ``wg show <if>`` — existence/readability probe.
* ``ip link add dev <if> type wireguard`` / ``ip link delete dev <if>``.
* ``wg set <if> private-key /dev/stdin listen-port <port>``.
* ``ip address add <cidr> dev <if>`` and ``ip link set up dev <if>``.
* ``wg set <if> peer <key> allowed-ips <cidrs> [endpoint <host:port>]``.
* ``resolvconf -a tun.<if> -m 0 -x`` / ``resolvconf -d tun.<if> -f``.
"""

from __future__ import annotations

import base64
import logging
import re
import shutil
import subprocess
from collections.abc import Sequence

from wg_waybar.core.models import InterfaceSettings, IPAddress, PeerSettings
from wg_waybar.exceptions import InterfaceManagerError

logger = logging.getLogger(__name__)

# IFNAMSIZ is 16 including the trailing NUL.
_IFNAME_RE = re.compile(r"^[^/\s:]{1,15}$")

_INSTALL_HINT = "Install iproute2 and wireguard-tools (e.g. sudo apt install wireguard-tools)."


class WgInterface:
    """Concrete :class:`InterfaceManager` driving ``ip(8)`` and ``wg(8)``.

    Usage::

        iface = WgInterface("wg0")
        if not iface.is_up():
            iface.create_interface()

    Construction fails with :class:`InterfaceManagerError` when the name
    is not a valid Linux interface name or the tools are not installed.
    """

    def __init__(self, name: str) -> None:
        if not _IFNAME_RE.match(name):
            raise InterfaceManagerError(f"Invalid interface name: {name!r}")
        self.name: str = name
        self._ip: str = _locate("ip")
        self._wg: str = _locate("wg")
        self._resolvconf: str | None = shutil.which("resolvconf")

    def __repr__(self) -> str:
        return f"WgInterface({self.name!r})"

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def is_up(self) -> bool:
        try:
            completed = subprocess.run(
                [self._wg, "show", self.name],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.debug("wg show %s could not run: %s", self.name, exc)
            return False
        return completed.returncode == 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_interface(self) -> None:
        self._run([self._ip, "link", "add", "dev", self.name, "type", "wireguard"])

    def configure_interface(self, settings: InterfaceSettings) -> None:
        self._run(
            [
                self._wg, "set", self.name,
                "private-key", "/dev/stdin",
                "listen-port", str(settings.listen_port),
            ],
            stdin=settings.private_key + "\n",
        )
        for address in settings.addresses:
            self._run([self._ip, "address", "add", str(address), "dev", self.name])
        self._run([self._ip, "link", "set", "up", "dev", self.name])

    def configure_dns(self, servers: Sequence[IPAddress]) -> None:
        if self._resolvconf is None:
            raise InterfaceManagerError(
                "resolvconf is not installed; cannot configure DNS",
                hint="Install openresolv or systemd-resolved's resolvconf, "
                "or remove DNS from the configuration.",
            )
        body = "".join(f"nameserver {server}\n" for server in servers)
        self._run(
            [self._resolvconf, "-a", self._resolvconf_name, "-m", "0", "-x"],
            stdin=body,
        )

    def configure_peer(self, peer: PeerSettings) -> None:
        command = [
            self._wg, "set", self.name,
            "peer", base64.b64encode(peer.public_key).decode("ascii"),
            "allowed-ips", ",".join(str(ip) for ip in peer.allowed_ips),
        ]
        if peer.endpoint is not None:
            command += ["endpoint", peer.endpoint]
        self._run(command)

    def remove_interface(self) -> None:
        if self._resolvconf is not None:
            self._run([self._resolvconf, "-d", self._resolvconf_name, "-f"])
        self._run([self._ip, "link", "delete", "dev", self.name])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _resolvconf_name(self) -> str:
        return f"tun.{self.name}"

    def _run(self, command: list[str], *, stdin: str | None = None) -> None:
        """Run *command*; map any failure to :class:`InterfaceManagerError`."""
        # argv never contains the private key; it is passed on stdin.
        display = " ".join(command)
        logger.debug("Running: %s", display)
        try:
            completed = subprocess.run(
                command,
                input=stdin,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise InterfaceManagerError(f"`{display}` could not run: {exc}") from exc
        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise InterfaceManagerError(f"`{display}` failed: {detail}")


def _locate(tool: str) -> str:
    path = shutil.which(tool)
    if path is None:
        raise InterfaceManagerError(f"{tool} not found on PATH", hint=_INSTALL_HINT)
    return path


def open_interface(name: str) -> WgInterface:
    """Default :data:`~wg_waybar.core.protocols.InterfaceManagerFactory`."""
    return WgInterface(name)
