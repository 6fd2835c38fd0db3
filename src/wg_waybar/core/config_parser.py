"""WireGuard configuration parser — raw INI text to :class:`TunnelConfig`.

The file format is the one understood by ``wg-quick(8)``: a single
``[Interface]`` section followed by any number of ``[Peer]`` sections.
Unlike plain INI, the ``[Peer]`` header is normally repeated once per
peer, so repeated headers are made unique before the text reaches
:mod:`configparser`.

Guarantees
----------
* Pure — the only input is the string given; no filesystem access.
* Only :class:`~wg_waybar.exceptions.ConfigError` subclasses escape.
* Peers are returned in the order their sections appear.
"""

from __future__ import annotations

import base64
import binascii
import configparser
from collections.abc import Mapping

from wg_waybar.core.models import InterfaceConfig, PeerConfig, TunnelConfig
from wg_waybar.exceptions import (
    ConfigSyntaxError,
    InvalidFormatError,
    InvalidPublicKeyError,
    MissingPropertyError,
    MissingSectionError,
)
from wg_waybar.utils.net import (
    is_decimal,
    parse_endpoint,
    parse_ip_interface,
    split_list,
)

INTERFACE_SECTION = "Interface"
PEER_SECTION_PREFIX = "Peer"
PUBLIC_KEY_LENGTH = 32


def parse_tunnel_config(text: str) -> TunnelConfig:
    """Parse a complete configuration file.

    Raises
    ------
    ConfigSyntaxError
        If *text* is not valid INI.
    MissingSectionError
        If there is no ``[Interface]`` section.
    MissingPropertyError
        If a mandatory key is absent or its list is empty.
    InvalidFormatError
        If an address, port or key is malformed.
    PeerConfigError
        If a peer key has the wrong length or an endpoint is malformed.
    """
    parser = _load_ini(text)

    if not parser.has_section(INTERFACE_SECTION):
        raise MissingSectionError(INTERFACE_SECTION)
    interface = parse_interface_section(parser[INTERFACE_SECTION])

    peers = tuple(
        parse_peer_section(parser[name])
        for name in parser.sections()
        if name.startswith(PEER_SECTION_PREFIX)
    )
    return TunnelConfig(interface=interface, peers=peers)


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------

def parse_interface_section(section: Mapping[str, str]) -> InterfaceConfig:
    """Validate the ``[Interface]`` keys."""
    private_key = _require(section, "PrivateKey")
    addresses = _parse_cidr_list(section, "Address")

    dns: tuple[str, ...] | None = None
    raw_dns = section.get("DNS")
    if raw_dns is not None:
        dns = tuple(split_list(raw_dns))

    listen_port: int | None = None
    raw_port = section.get("ListenPort")
    if raw_port is not None:
        raw_port = raw_port.strip()
        if not is_decimal(raw_port):
            raise InvalidFormatError(f"Invalid ListenPort: {raw_port}")
        listen_port = int(raw_port)

    return InterfaceConfig(
        private_key=private_key,
        addresses=addresses,
        dns=dns,
        listen_port=listen_port,
    )


def parse_peer_section(section: Mapping[str, str]) -> PeerConfig:
    """Validate one ``[Peer]`` section."""
    public_key = decode_public_key(_require(section, "PublicKey"))

    endpoint: str | None = None
    raw_endpoint = section.get("Endpoint")
    if raw_endpoint is not None:
        endpoint = parse_endpoint(raw_endpoint)

    allowed_ips = _parse_cidr_list(section, "AllowedIPs")

    return PeerConfig(
        public_key=public_key,
        allowed_ips=allowed_ips,
        endpoint=endpoint,
    )


def decode_public_key(value: str) -> bytes:
    """Decode a standard base64 key and check it is exactly 32 bytes."""
    try:
        raw = base64.b64decode(value.strip(), validate=True)
    except binascii.Error as exc:
        raise InvalidFormatError(f"Invalid base64 public key: {exc}") from exc
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise InvalidPublicKeyError(
            f"Public key must be {PUBLIC_KEY_LENGTH} bytes",
        )
    return raw


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(section: Mapping[str, str], key: str) -> str:
    value = section.get(key)
    if value is None:
        raise MissingPropertyError(f"{key} is missing")
    return value.strip()


def _parse_cidr_list(section: Mapping[str, str], key: str) -> tuple[str, ...]:
    entries = split_list(_require(section, key))
    for entry in entries:
        parse_ip_interface(entry, field_name=key)
    if not entries:
        raise MissingPropertyError(f"{key} cannot be empty")
    return tuple(entries)


def _load_ini(text: str) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        inline_comment_prefixes=("#", ";"),
    )
    try:
        parser.read_string(_number_duplicate_sections(text))
    except configparser.Error as exc:
        raise ConfigSyntaxError(f"INI parsing error: {exc}") from exc
    return parser


def _number_duplicate_sections(text: str) -> str:
    """Rename repeated section headers to ``[Name.2]``, ``[Name.3]``, …"""
    seen: dict[str, int] = {}
    lines: list[str] = []
    for line in text.splitlines():
        match = configparser.ConfigParser.SECTCRE.match(line.strip())
        if match is not None:
            header = match.group("header")
            seen[header] = seen.get(header, 0) + 1
            if seen[header] > 1:
                line = f"[{header}.{seen[header]}]"
        lines.append(line)
    return "\n".join(lines)
