"""``wg-waybar <config> doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the host can toggle the tunnel and report its status.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import shutil
import sys
from pathlib import Path

from wg_waybar.cli import exit_codes
from wg_waybar.cli.console import console, escape_markup
from wg_waybar.core.config_parser import parse_tunnel_config
from wg_waybar.exceptions import WgWaybarError
from wg_waybar.infra.config_file import read_config_text
from wg_waybar.infra.paths import resolve_state_home
from wg_waybar.infra.waybar_notifier import WaybarNotifier
from wg_waybar.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _wg_waybar_version_check() -> tuple[str, str, str]:
    return "wg-waybar", __version__, _OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _tool_check(tool: str, *, required: bool = True) -> tuple[str, str, str]:
    """Return the row for an external command looked up on ``PATH``."""
    path = shutil.which(tool)
    if path is not None:
        return tool, path, _OK
    return tool, "not found", _FAIL if required else _WARN


def _config_check(config_path: Path) -> tuple[str, str, str]:
    """Parse the configuration exactly as ``toggle`` would."""
    try:
        tunnel = parse_tunnel_config(read_config_text(config_path))
    except WgWaybarError as exc:
        return "config", escape_markup(str(exc)), _FAIL
    peers = len(tunnel.peers)
    suffix = "peer" if peers == 1 else "peers"
    return "config", f"{escape_markup(str(config_path))} ({peers} {suffix})", _OK


def _state_dir_check(state_filename: str) -> tuple[str, str, str]:
    try:
        state_home = resolve_state_home()
    except WgWaybarError as exc:
        return "state", escape_markup(str(exc)), _FAIL
    return "state", escape_markup(str(state_home / state_filename)), _OK


def _waybar_check() -> tuple[str, str, str]:
    """Return the Waybar process row; a missing bar is only a warning."""
    pid = WaybarNotifier().find_target_process()
    if pid is None:
        return "waybar", "not running", _WARN
    return "waybar", f"pid {pid}", _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nwg-waybar doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path, state_filename: str) -> int:
    """Execute all diagnostic checks and render a summary table.

    Parameters
    ----------
    config_path:
        WireGuard configuration file to parse.
    state_filename:
        Name of the state file inside the state directory.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not
        affect the exit code.
    """
    checks = [
        _wg_waybar_version_check(),
        _python_version_check(),
        _tool_check("ip"),
        _tool_check("wg"),
        _tool_check("resolvconf", required=False),
        _config_check(config_path),
        _state_dir_check(state_filename),
        _waybar_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="wg-waybar doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
