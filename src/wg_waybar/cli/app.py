"""CLI application entry point and command routing for wg-waybar.

This module is the **sole error boundary** for the entire application.
It catches :class:`~wg_waybar.exceptions.WgWaybarError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, always leaving
one JSON status line on stdout for Waybar and a readable message on
stderr, and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* stdout carries JSON only (see :mod:`wg_waybar.cli.output`); everything
  else goes through the stderr console or logging.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from wg_waybar.cli import exit_codes
from wg_waybar.cli.console import configure_logging, console, escape_markup
from wg_waybar.cli.output import emit, emit_all
from wg_waybar.core.models import Status, StatusLine, ToggleAction
from wg_waybar.exceptions import WgWaybarError
from wg_waybar.version import __version__

if TYPE_CHECKING:
    from wg_waybar.infra.state_store import JsonStateStore


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``wg-waybar <config>``          — print status JSON for Waybar
    * ``wg-waybar <config> toggle``   — bring the tunnel up or down
    * ``wg-waybar <config> doctor``   — environment diagnostics
    * ``wg-waybar --version``
    """
    from wg_waybar.core.toggle_service import DEFAULT_LISTEN_PORT, DEFAULT_SIGNAL_NUMBER
    from wg_waybar.infra.state_store import DEFAULT_STATE_FILENAME

    parser = argparse.ArgumentParser(
        prog="wg-waybar",
        description="Toggle a WireGuard tunnel and report its status to Waybar.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "config",
        help="Path to the WireGuard configuration file (e.g. /etc/wireguard/wg0.conf).",
    )
    parser.add_argument(
        "--signal",
        type=int,
        default=DEFAULT_SIGNAL_NUMBER,
        help="Waybar module signal; SIGRTMIN+N is sent after a toggle.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug output on stderr.",
    )
    parser.add_argument(
        "--state-filename",
        default=DEFAULT_STATE_FILENAME,
        help="State file name inside the state directory.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_LISTEN_PORT,
        help="Listen port used when the config has no ListenPort.",
    )

    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.add_parser("toggle", help="Toggle the VPN (switch state).")
    commands.add_parser("doctor", help="Check tools, config and state directory.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _open_state_store(state_filename: str) -> JsonStateStore:
    """Resolve, create and return the state store for this user."""
    from wg_waybar.infra.paths import create_owned_dir, resolve_state_home
    from wg_waybar.infra.state_store import JsonStateStore

    state_home = resolve_state_home()
    if not state_home.exists():
        create_owned_dir(state_home)
    store = JsonStateStore(state_home / state_filename)
    store.ensure_exists()
    return store


def _handle_status(interface_name: str, state_filename: str) -> int:
    """Print the status lines for the interface."""
    from wg_waybar.core.status_service import StatusService
    from wg_waybar.infra.wg_interface import open_interface

    store = _open_state_store(state_filename)
    service = StatusService(open_interface, store)
    emit_all(service.report(interface_name))
    return exit_codes.SUCCESS


def _handle_toggle(
    interface_name: str,
    config_path: Path,
    *,
    state_filename: str,
    signal_number: int,
    port: int,
) -> int:
    """Flip the tunnel and print the resulting state.

    Flow:
    1. Open the state store and take its lock.
    2. Let :class:`ToggleService` query, act, record and notify.
    3. Print one status line describing the outcome.
    """
    from wg_waybar.core.toggle_service import ToggleService
    from wg_waybar.infra.config_file import read_config_text
    from wg_waybar.infra.waybar_notifier import WaybarNotifier
    from wg_waybar.infra.wg_interface import open_interface

    store = _open_state_store(state_filename)
    service = ToggleService(
        open_interface,
        store,
        WaybarNotifier(),
        default_port=port,
        signal_number=signal_number,
    )

    with store.locked():
        result = service.toggle(interface_name, lambda: read_config_text(config_path))

    if result.error is not None:
        emit(StatusLine.error(f"Toggle failed: {result.error}"))
        _print_error(result.error)
        return exit_codes.GENERAL_ERROR

    if result.action is ToggleAction.BRING_UP:
        emit(StatusLine.for_interface(interface_name, Status.CONNECTED))
    else:
        emit(StatusLine.for_interface(interface_name, Status.DISCONNECTED))
    return exit_codes.SUCCESS


def _handle_doctor(config_path: Path, state_filename: str) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from wg_waybar.cli.doctor import run_doctor

    return run_doctor(config_path, state_filename)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the wg-waybar CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from wg_waybar.infra.config_file import interface_name_for

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    config_path = Path(args.config)

    if args.command == "doctor":
        return _handle_doctor(config_path, args.state_filename)

    interface_name = interface_name_for(config_path)

    if args.command == "toggle":
        return _handle_toggle(
            interface_name,
            config_path,
            state_filename=args.state_filename,
            signal_number=args.signal,
            port=args.port,
        )

    return _handle_status(interface_name, args.state_filename)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: BaseException) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    hint = getattr(exc, "hint", None)
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage, and that Waybar
    always receives a status line.
    """
    try:
        code = main()
        sys.exit(code)
    except WgWaybarError as exc:
        emit(StatusLine.error(str(exc)))
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        emit(StatusLine.error(f"Unexpected error: {type(exc).__name__}: {exc}"))
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
