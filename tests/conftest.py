"""Shared pytest fixtures and configuration for the wg-waybar test suite.

Guidelines
----------
* No test creates real network interfaces or signals real processes.
* ``ip``/``wg``/``resolvconf`` and psutil are mocked at the infra boundary.
* Core tests use in-memory fakes for the three ports.
* Filesystem tests stay inside ``tmp_path``.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterator, Sequence

import pytest

from wg_waybar.core.models import InterfaceSettings, IPAddress, PeerSettings, PersistedState

PEER_KEY = bytes(range(32))
PEER_KEY_B64 = base64.b64encode(PEER_KEY).decode("ascii")
PRIVATE_KEY_B64 = base64.b64encode(b"\x01" * 32).decode("ascii")


def make_config(*, peers: int = 1, dns: str | None = None, extra: str = "") -> str:
    """Build configuration text with *peers* identical peer sections."""
    lines = [
        "[Interface]",
        f"PrivateKey = {PRIVATE_KEY_B64}",
        "Address = 10.0.0.2/32",
    ]
    if dns is not None:
        lines.append(f"DNS = {dns}")
    if extra:
        lines.append(extra)
    for _ in range(peers):
        lines += [
            "",
            "[Peer]",
            f"PublicKey = {PEER_KEY_B64}",
            "AllowedIPs = 0.0.0.0/0",
            "Endpoint = vpn.example.com:51820",
        ]
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Port fakes
# ---------------------------------------------------------------------------

class FakeInterface:
    """In-memory interface manager recording every call."""

    def __init__(self, name: str, *, up: bool = False) -> None:
        self.name = name
        self.up = up
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}
        self.settings: InterfaceSettings | None = None
        self.dns: list[IPAddress] = []
        self.peers: list[PeerSettings] = []

    def _step(self, call: str) -> None:
        self.calls.append(call)
        if call in self.fail_on:
            raise self.fail_on[call]

    def is_up(self) -> bool:
        return self.up

    def create_interface(self) -> None:
        self._step("create")
        self.up = True

    def configure_interface(self, settings: InterfaceSettings) -> None:
        self._step("configure")
        self.settings = settings

    def configure_dns(self, servers: Sequence[IPAddress]) -> None:
        self._step("dns")
        self.dns = list(servers)

    def configure_peer(self, peer: PeerSettings) -> None:
        self._step("peer")
        self.peers.append(peer)

    def remove_interface(self) -> None:
        self._step("remove")
        self.up = False


class FakeStateStore:
    def __init__(self, initial: PersistedState | None = None) -> None:
        self.state: PersistedState = dict(initial or {})
        self.saves: list[PersistedState] = []

    def load(self) -> PersistedState:
        return dict(self.state)

    def save(self, errors: PersistedState) -> None:
        self.state = dict(errors)
        self.saves.append(dict(errors))


class FakeNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.signals: list[int] = []
        self.error = error

    def find_target_process(self) -> int | None:
        return 4242

    def notify(self, signal_number: int) -> None:
        self.signals.append(signal_number)
        if self.error is not None:
            raise self.error


@pytest.fixture()
def wg0() -> FakeInterface:
    return FakeInterface("wg0")


@pytest.fixture()
def store() -> FakeStateStore:
    return FakeStateStore()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so handlers never outlive a test's capture."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
