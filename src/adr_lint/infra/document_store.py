"""Infrastructure: read, enumerate and write Markdown documents.

:class:`FileDocumentSource` satisfies
:class:`~adr_lint.core.protocols.DocumentSource` for the lint service
and additionally writes new memos for ``adr-lint new``.

Rules
-----
* UTF-8 only.
* Directories expand recursively to ``*.md`` files in sorted order.
* Existing files are never overwritten unless explicitly requested.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from adr_lint.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentReadError,
)

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class FileDocumentSource:
    """Filesystem-backed document source."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def read_text(self, path: Path) -> str:
        """Read *path* as text.

        Raises
        ------
        DocumentNotFoundError
            If *path* does not exist.
        DocumentReadError
            If *path* is a directory, unreadable, or not valid UTF-8.
        """
        logger.debug("Reading %s", path)
        try:
            return path.read_text(encoding=self._encoding)
        except FileNotFoundError as exc:
            raise DocumentNotFoundError(
                f"Document not found: {path}",
                hint="Check the path or run from the repository root.",
            ) from exc
        except UnicodeDecodeError as exc:
            raise DocumentReadError(
                f"{path} is not valid {self._encoding} text.",
                hint="Re-save the file as UTF-8.",
            ) from exc
        except OSError as exc:
            raise DocumentReadError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    def expand(self, paths: Sequence[Path]) -> list[Path]:
        """Expand directories to their Markdown files, keeping input order.

        Raises
        ------
        DocumentNotFoundError
            If a path does not exist or nothing is left to lint.
        """
        expanded: list[Path] = []
        for path in paths:
            if path.is_dir():
                found = sorted(
                    p for p in path.rglob(f"*{MARKDOWN_SUFFIX}") if p.is_file()
                )
                logger.debug("Expanded %s to %d file(s)", path, len(found))
                expanded.extend(found)
            elif path.exists():
                expanded.append(path)
            else:
                raise DocumentNotFoundError(f"Document not found: {path}")
        if not expanded:
            raise DocumentNotFoundError(
                "No Markdown documents to lint.",
                hint=f"Directories are searched for '*{MARKDOWN_SUFFIX}' files.",
            )
        return expanded

    def write_text(self, path: Path, text: str, *, overwrite: bool = False) -> None:
        """Write *text* to *path*, creating parent directories.

        Raises
        ------
        DocumentExistsError
            If *path* exists and *overwrite* is false.
        DocumentReadError
            If the file cannot be written.
        """
        if path.exists() and not overwrite:
            raise DocumentExistsError(
                f"{path} already exists.",
                hint="Pass --force to overwrite it.",
            )
        logger.debug("Writing %s (%d chars)", path, len(text))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding=self._encoding)
        except OSError as exc:
            raise DocumentReadError(
                f"Cannot write {path}: {exc.strerror or exc}",
            ) from exc
