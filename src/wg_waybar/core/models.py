"""Domain models for wg-waybar.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependency on
external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv4Interface, IPv6Address, IPv6Interface

IPAddress = IPv4Address | IPv6Address
IPInterface = IPv4Interface | IPv6Interface

PersistedState = dict[str, str]
"""Interface name → message of the last failed toggle for that interface."""


# ---------------------------------------------------------------------------
# Parsed configuration file
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InterfaceConfig:
    """The ``[Interface]`` section of a WireGuard configuration file."""

    private_key: str = field(repr=False)
    """Base64 private key, passed through verbatim.  Never logged."""

    addresses: tuple[str, ...]
    """Validated ``ip/prefix`` entries.  Never empty."""

    dns: tuple[str, ...] | None = None
    """Raw DNS entries; only checked when the tunnel is brought up."""

    listen_port: int | None = None


@dataclass(frozen=True, slots=True)
class PeerConfig:
    """One ``[Peer]`` section of a WireGuard configuration file."""

    public_key: bytes
    """Raw 32-byte Curve25519 public key."""

    allowed_ips: tuple[str, ...]
    """Validated ``ip/prefix`` entries.  Never empty."""

    endpoint: str | None = None
    """``host:port`` of the remote peer, if it has a fixed address."""


@dataclass(frozen=True, slots=True)
class TunnelConfig:
    """A fully parsed configuration: one interface plus its peers."""

    interface: InterfaceConfig
    peers: tuple[PeerConfig, ...] = ()


# ---------------------------------------------------------------------------
# Values handed to the interface manager
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InterfaceSettings:
    """Interface-level settings applied right after creation."""

    name: str
    private_key: str = field(repr=False)
    addresses: tuple[IPInterface, ...]
    listen_port: int


@dataclass(frozen=True, slots=True)
class PeerSettings:
    """Peer-level settings applied once per configured peer."""

    public_key: bytes
    allowed_ips: tuple[IPInterface, ...]
    endpoint: str | None = None


# ---------------------------------------------------------------------------
# Toggle outcome
# ---------------------------------------------------------------------------

class ToggleAction(enum.Enum):
    """What a toggle decided to do after looking at the interface."""

    BRING_UP = "up"
    TEAR_DOWN = "down"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Outcome of a single toggle attempt.

    ``action`` is ``None`` when the interface could not even be queried.
    ``error`` is ``None`` on success.
    """

    interface_name: str
    action: ToggleAction | None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Status line
# ---------------------------------------------------------------------------

class Status(enum.Enum):
    """Tunnel state as shown in the bar.

    The value is the CSS class Waybar applies to the module.
    """

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"

    @property
    def percentage(self) -> int:
        """Numeric hint used by Waybar format-icons."""
        return _PERCENTAGES[self]


_PERCENTAGES: dict[Status, int] = {
    Status.CONNECTED: 0,
    Status.DISCONNECTED: 50,
    Status.ERROR: 100,
}


@dataclass(frozen=True, slots=True)
class StatusLine:
    """One JSON object emitted for Waybar's ``return-type: json``."""

    text: str
    status: Status
    tooltip: str

    @classmethod
    def error(cls, tooltip: str) -> StatusLine:
        return cls(text="VPN: Error", status=Status.ERROR, tooltip=tooltip)

    @classmethod
    def for_interface(cls, interface_name: str, status: Status) -> StatusLine:
        return cls(
            text=f"VPN: {interface_name}",
            status=status,
            tooltip=f"VPN is {status.value}",
        )

    def to_dict(self) -> dict[str, str | int]:
        return {
            "text": self.text,
            "class": self.status.value,
            "tooltip": self.tooltip,
            "percentage": self.status.percentage,
        }
