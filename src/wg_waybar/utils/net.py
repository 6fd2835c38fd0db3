"""Address parsing helpers shared by the parser and the toggle service.

All helpers raise :class:`~wg_waybar.exceptions.InvalidFormatError` (or
a peer-scoped subclass) instead of leaking ``ValueError``.
"""

from __future__ import annotations

import re
from ipaddress import (
    IPv4Address,
    IPv4Interface,
    IPv6Address,
    IPv6Interface,
    ip_address,
    ip_interface,
)

from wg_waybar.exceptions import InvalidEndpointError, InvalidFormatError

_DIGITS_RE = re.compile(r"[0-9]+")
_HOSTNAME_RE = re.compile(
    r"^(?=.{1,253}$)[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*\.?$"
)


def is_decimal(value: str) -> bool:
    """True for a non-empty run of ASCII digits."""
    return _DIGITS_RE.fullmatch(value) is not None


def split_list(raw: str) -> list[str]:
    """Split a comma separated value, trimming and dropping empty entries."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_ip_interface(
    entry: str,
    *,
    field_name: str = "IP/CIDR",
) -> IPv4Interface | IPv6Interface:
    """Parse ``ip/prefix`` into an :mod:`ipaddress` interface object.

    Host bits are kept (``10.0.0.2/24`` stays as written), which is what
    both ``ip address add`` and ``wg set … allowed-ips`` expect.
    """
    parts = entry.split("/")
    if len(parts) != 2:
        raise InvalidFormatError(f"Invalid {field_name} format: {entry}")
    ip_part, prefix_part = parts
    try:
        ip_address(ip_part)
    except ValueError:
        raise InvalidFormatError(f"Invalid IP in {field_name}: {ip_part}") from None
    if not is_decimal(prefix_part):
        raise InvalidFormatError(f"Invalid CIDR prefix: {prefix_part}")
    try:
        return ip_interface(entry)
    except ValueError:
        raise InvalidFormatError(f"Invalid CIDR prefix: {prefix_part}") from None


def parse_ip(entry: str, *, field_name: str = "IP") -> IPv4Address | IPv6Address:
    try:
        return ip_address(entry)
    except ValueError:
        raise InvalidFormatError(f"Invalid {field_name}: {entry}") from None


def parse_endpoint(raw: str) -> str:
    """Validate a ``host:port`` endpoint and return it normalised.

    Accepted hosts are IPv4 literals, bracketed IPv6 literals and DNS
    names.  The port must be a decimal number in ``0..65535``.
    """
    value = raw.strip()
    host, sep, port = value.rpartition(":")
    if not sep or not host:
        raise InvalidEndpointError(f"invalid socket address syntax: {value}")
    if not is_decimal(port) or int(port) > 65535:
        raise InvalidEndpointError(f"invalid port in {value}")

    if host.startswith("[") and host.endswith("]"):
        try:
            ip_address(host[1:-1])
        except ValueError:
            raise InvalidEndpointError(f"invalid IPv6 address: {host}") from None
        if ":" not in host:
            raise InvalidEndpointError(f"invalid IPv6 address: {host}")
    elif ":" in host:
        # Unbracketed IPv6 is ambiguous with the port separator.
        raise InvalidEndpointError(f"invalid socket address syntax: {value}")
    elif not _HOSTNAME_RE.match(host):
        raise InvalidEndpointError(f"invalid host: {host}")

    return f"{host}:{int(port)}"
