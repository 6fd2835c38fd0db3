"""Allow ``python -m wg_waybar`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m wg_waybar`` behaves identically to the ``wg-waybar``
console script.
"""

from __future__ import annotations

from wg_waybar.cli.app import cli

if __name__ == "__main__":
    cli()
