"""adr-lint — structural linter for Markdown architecture-decision memos.

Parses a decision memo into a typed model and checks it against a small,
strictly layered rule set.
"""

from adr_lint.version import __version__

__all__: list[str] = ["__version__"]
