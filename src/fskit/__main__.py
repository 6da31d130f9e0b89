"""Allow ``python -m fskit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m fskit`` behaves identically to the ``fskit`` console
script.
"""

from __future__ import annotations

from fskit.cli.app import cli

if __name__ == "__main__":
    cli()
