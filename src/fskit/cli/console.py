"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Diagnostics go to stderr through :data:`console`; operation output
(file contents, disk reports) goes to stdout through :func:`echo` as
plain text so it can be piped without markup interference.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from fskit.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?(?:bold|dim|italic|red|green|yellow|cyan)(?: [a-z]+)*\]")
_ESCAPABLE = re.compile(r"(\[[a-zA-Z/])")


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


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*(_strip_markup(obj) for obj in objects), file=sys.stderr)
			return
		rich_console.print(*objects)


def _strip_markup(obj: object) -> object:
	"""Drop Rich style tags from strings for the plain fallback."""
	if not isinstance(obj, str):
		return obj
	return _MARKUP_TAG.sub("", obj).replace("\\[", "[")


def escape(text: str) -> str:
	"""Escape user-supplied text so Rich does not read it as markup."""
	return _ESCAPABLE.sub(r"\\\1", text)


def echo(text: str = "") -> None:
	"""Write operation output to stdout verbatim."""
	sys.stdout.write(text + "\n")


console = _ConsoleProxy()
