"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
secret hiding, and the JSON shape of status lines.
"""

from __future__ import annotations

from ipaddress import ip_interface

import pytest

from wg_waybar.core.models import (
    InterfaceConfig,
    InterfaceSettings,
    PeerConfig,
    Status,
    StatusLine,
    ToggleAction,
    ToggleResult,
    TunnelConfig,
)


def _make_interface(**overrides: object) -> InterfaceConfig:
    defaults: dict[str, object] = {
        "private_key": "c2VjcmV0",
        "addresses": ("10.0.0.2/32",),
    }
    defaults.update(overrides)
    return InterfaceConfig(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Configuration records
# ---------------------------------------------------------------------------

class TestInterfaceConfig:
    def test_optional_fields_default_to_none(self) -> None:
        iface = _make_interface()
        assert iface.dns is None
        assert iface.listen_port is None

    def test_private_key_not_in_repr(self) -> None:
        assert "c2VjcmV0" not in repr(_make_interface())

    def test_frozen(self) -> None:
        iface = _make_interface()
        with pytest.raises(AttributeError):
            iface.listen_port = 1  # type: ignore[misc]


class TestInterfaceSettings:
    def test_private_key_not_in_repr(self) -> None:
        settings = InterfaceSettings(
            name="wg0",
            private_key="c2VjcmV0",
            addresses=(ip_interface("10.0.0.2/32"),),
            listen_port=40077,
        )
        assert "c2VjcmV0" not in repr(settings)
        assert "wg0" in repr(settings)


class TestTunnelConfig:
    def test_peers_default_to_empty(self) -> None:
        assert TunnelConfig(interface=_make_interface()).peers == ()

    def test_equality(self) -> None:
        peer = PeerConfig(public_key=b"\x00" * 32, allowed_ips=("0.0.0.0/0",))
        a = TunnelConfig(interface=_make_interface(), peers=(peer,))
        b = TunnelConfig(interface=_make_interface(), peers=(peer,))
        assert a == b


# ---------------------------------------------------------------------------
# Toggle outcome
# ---------------------------------------------------------------------------

class TestToggleResult:
    def test_succeeded_without_error(self) -> None:
        assert ToggleResult("wg0", ToggleAction.BRING_UP).succeeded

    def test_failed_with_error(self) -> None:
        result = ToggleResult("wg0", ToggleAction.TEAR_DOWN, RuntimeError("x"))
        assert not result.succeeded


# ---------------------------------------------------------------------------
# Status lines
# ---------------------------------------------------------------------------

class TestStatus:
    @pytest.mark.parametrize(
        ("status", "percentage"),
        [(Status.CONNECTED, 0), (Status.DISCONNECTED, 50), (Status.ERROR, 100)],
    )
    def test_percentage(self, status: Status, percentage: int) -> None:
        assert status.percentage == percentage


class TestStatusLine:
    def test_connected_line(self) -> None:
        line = StatusLine.for_interface("wg0", Status.CONNECTED)
        assert line.to_dict() == {
            "text": "VPN: wg0",
            "class": "connected",
            "tooltip": "VPN is connected",
            "percentage": 0,
        }

    def test_disconnected_line(self) -> None:
        line = StatusLine.for_interface("wg0", Status.DISCONNECTED)
        assert line.tooltip == "VPN is disconnected"
        assert line.to_dict()["percentage"] == 50

    def test_error_line(self) -> None:
        line = StatusLine.error("Toggle failed: boom")
        assert line.to_dict() == {
            "text": "VPN: Error",
            "class": "error",
            "tooltip": "Toggle failed: boom",
            "percentage": 100,
        }
