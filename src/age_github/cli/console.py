"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so error reporting keeps working even when Rich is not
installed.  Everything is written to stderr; stdout belongs to age.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from age_github.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def escape(text: str) -> str:
	"""Escape Rich markup in *text*; identity when Rich is unavailable."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects, soft_wrap=True)


console = _ConsoleProxy()


def configure_logging(debug: bool) -> None:
	"""Route ``age_github`` debug logging to stderr when *debug* is set.

	Debug output goes through :class:`rich.logging.RichHandler`, so it
	requires Rich.  Without *debug* no handler is installed and nothing
	is emitted.
	"""
	package_logger = logging.getLogger("age_github")
	if not debug or package_logger.handlers:
		return

	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc

	handler = RichHandler(console=get_rich_console(), show_path=False)

	package_logger.addHandler(handler)
	package_logger.setLevel(logging.DEBUG)
