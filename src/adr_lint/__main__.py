"""Allow ``python -m adr_lint`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m adr_lint`` behaves identically to the ``adr-lint``
console script.
"""

from __future__ import annotations

from adr_lint.cli.app import cli

if __name__ == "__main__":
    cli()
