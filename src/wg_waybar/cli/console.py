"""CLI console and logging helpers with optional Rich support.

Everything human-readable goes to stderr: stdout belongs to Waybar and
carries nothing but JSON status lines.  Module-level imports of Rich are
avoided so the status path keeps working when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any


def _load_rich_console_class() -> type[Any] | None:
	"""Return ``rich.console.Console`` or ``None`` when Rich is missing."""
	try:
		from rich.console import Console
	except ModuleNotFoundError:
		return None
	return Console


def get_rich_console() -> Any | None:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	if console_class is None:
		return None
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		rich_console = get_rich_console()
		if rich_console is None:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(debug: bool = False) -> None:
	"""Route library log records to stderr for this process.

	``--debug`` lowers the threshold to ``DEBUG``; otherwise only
	warnings and errors are shown.
	"""
	level = logging.DEBUG if debug else logging.WARNING
	handler: logging.Handler
	rich_console = get_rich_console()
	if rich_console is None:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
	else:
		from rich.logging import RichHandler

		handler = RichHandler(console=rich_console, show_path=debug, markup=False)
	logging.basicConfig(level=level, handlers=[handler], force=True)


def escape_markup(text: str) -> str:
	"""Escape Rich markup in *text*; identity when Rich is missing."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)
