"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the lint service can be driven from memory in
tests and from the filesystem in the CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class DocumentSource(Protocol):
    """Contract for decision-memo storage backends.

    Any object that implements these methods with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def read_text(self, path: Path) -> str:
        """Return the full text of the document at *path*.

        Implementations must map all backend-specific exceptions to
        :class:`~adr_lint.exceptions.AdrLintError` subclasses.

        Raises
        ------
        DocumentNotFoundError
            When *path* does not exist.
        DocumentReadError
            When *path* exists but cannot be read or decoded.
        """
        ...  # pragma: no cover

    def expand(self, paths: Sequence[Path]) -> list[Path]:
        """Resolve *paths* into the ordered list of documents to lint.

        Raises
        ------
        DocumentNotFoundError
            When a path is missing or the expansion is empty.
        """
        ...  # pragma: no cover
