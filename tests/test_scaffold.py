"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from wg_waybar import __version__
from wg_waybar.cli import exit_codes
from wg_waybar.cli.app import main
from wg_waybar.exceptions import (
    ConfigError,
    ConfigReadError,
    ConfigSyntaxError,
    HomeDirNotFoundError,
    InterfaceManagerError,
    InvalidFormatError,
    MissingPropertyError,
    MissingSectionError,
    PeerConfigError,
    SignalError,
    StateError,
    UncaughtError,
    UserResolutionError,
    WgWaybarError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigError,
            InterfaceManagerError,
            SignalError,
            StateError,
            HomeDirNotFoundError,
            UserResolutionError,
            UncaughtError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[WgWaybarError]
    ) -> None:
        assert issubclass(exc_class, WgWaybarError)

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigReadError, ConfigSyntaxError, MissingSectionError, MissingPropertyError,
         InvalidFormatError, PeerConfigError],
    )
    def test_config_errors(self, exc_class: type[WgWaybarError]) -> None:
        assert issubclass(exc_class, ConfigError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(WgWaybarError, Exception)

    def test_hint_is_stored(self) -> None:
        err = WgWaybarError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert WgWaybarError("boom").hint is None

    def test_interface_manager_error_keeps_detail(self) -> None:
        err = InterfaceManagerError("`ip link add` failed: File exists")
        assert str(err) == "WireGuard API error: `ip link add` failed: File exists"
        assert err.detail == "`ip link add` failed: File exists"

    def test_messages_carry_category(self) -> None:
        assert str(MissingPropertyError("PrivateKey is missing")) == (
            "Missing property: PrivateKey is missing"
        )
        assert str(InvalidFormatError("x")) == "Invalid format: x"
        assert str(UserResolutionError("ghost")) == "UserNotFound error: ghost"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_config_is_required(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("wg_waybar.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, mock_doc: object) -> None:
        code = main(["/etc/wireguard/wg0.conf", "doctor"])
        assert code == exit_codes.SUCCESS

    def test_no_command_routes_to_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from wg_waybar.cli import app as app_module

        seen: list[tuple[str, str]] = []
        monkeypatch.setattr(
            app_module,
            "_handle_status",
            lambda name, state_filename: seen.append((name, state_filename)) or 0,
        )
        assert main(["/etc/wireguard/wg0.conf"]) == exit_codes.SUCCESS
        assert seen == [("wg0", "status.json")]

    def test_toggle_routes_with_options(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from wg_waybar.cli import app as app_module

        seen: dict[str, object] = {}

        def _fake_toggle(name: str, config_path: object, **kwargs: object) -> int:
            seen.update(kwargs, name=name)
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_toggle", _fake_toggle)
        code = main([
            "wg1.conf", "--signal", "4", "--port", "51820",
            "--state-filename", "vpn.json", "toggle",
        ])
        assert code == exit_codes.SUCCESS
        assert seen == {
            "name": "wg1",
            "state_filename": "vpn.json",
            "signal_number": 4,
            "port": 51820,
        }
