"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``, JSON output)
remain functional even when Rich is not installed.  Logging setup lives
here too because log records share stderr with the console.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from adr_lint.exceptions import EnvironmentError

_PACKAGE_LOGGER = "adr_lint"
_HANDLER_NAME = "adr-lint-cli"


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


def rich_available() -> bool:
	"""Return ``True`` when Rich tables can be rendered."""
	try:
		from rich.table import Table  # noqa: F401
	except ModuleNotFoundError:
		return False
	return True


def escape(text: object) -> str:
	"""Escape Rich markup in user-derived *text*.

	Without a Rich console the proxy prints plain text, so *text* is
	returned as-is.
	"""
	try:
		_load_rich_console_class()
		from rich.markup import escape as rich_escape
	except (EnvironmentError, ModuleNotFoundError):
		return str(text)
	return rich_escape(str(text))


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def _level_for(verbosity: int) -> int:
	if verbosity >= 2:
		return logging.DEBUG
	if verbosity == 1:
		return logging.INFO
	return logging.WARNING


def configure_logging(verbosity: int = 0) -> logging.Handler:
	"""Attach a single stderr handler to the ``adr_lint`` logger.

	``0`` → WARNING, ``1`` → INFO, ``2+`` → DEBUG.  Calling this again
	replaces the previously installed handler.
	"""
	package_logger = logging.getLogger(_PACKAGE_LOGGER)
	for existing in list(package_logger.handlers):
		if existing.get_name() == _HANDLER_NAME:
			package_logger.removeHandler(existing)

	handler: logging.Handler
	try:
		from rich.logging import RichHandler

		handler = RichHandler(
			console=get_rich_console(),
			show_path=False,
			show_time=False,
		)
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

	handler.set_name(_HANDLER_NAME)
	package_logger.addHandler(handler)
	package_logger.setLevel(_level_for(verbosity))
	return handler
