"""Infrastructure: reading WireGuard configuration files from disk."""

from __future__ import annotations

from pathlib import Path

from wg_waybar.exceptions import ConfigReadError, InvalidFormatError


def interface_name_for(config_path: Path) -> str:
    """Derive the interface name from the file name (``wg0.conf`` → ``wg0``)."""
    name = config_path.stem
    if not name:
        raise InvalidFormatError("Invalid config file name")
    return name


def read_config_text(config_path: Path) -> str:
    try:
        return config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"I/O error: {exc}") from exc
