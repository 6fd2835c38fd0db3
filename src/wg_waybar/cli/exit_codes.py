"""Exit-code constants used by the CLI layer.

Waybar ignores the exit status of ``exec`` commands, but ``on-click``
wrappers and shell scripts do not, so every path returns one of these.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; for ``toggle`` the tunnel changed state."""

GENERAL_ERROR: int = 1
"""A known WgWaybarError was caught or the toggle attempt failed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
