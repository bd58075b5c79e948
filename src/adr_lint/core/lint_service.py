"""Core lint service — orchestrates reading, parsing and rule runs.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~adr_lint.core.protocols.DocumentSource` injected
at construction time (dependency inversion), keeping the core free of
any filesystem imports.

Guarantees
----------
* Pure orchestration — no I/O of its own, no ``print()``.
* Only :class:`~adr_lint.exceptions.AdrLintError` subclasses escape.
* Findings are sorted by line (missing lines first), then rule id.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from adr_lint.core.config import LintConfig
from adr_lint.core.models import Finding, LintReport
from adr_lint.core.parser import parse_document
from adr_lint.core.protocols import DocumentSource
from adr_lint.core.rules import run_rules
from adr_lint.exceptions import AdrLintError, DocumentReadError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _sort_key(finding: Finding) -> tuple[int, str]:
    return (finding.line if finding.line is not None else 0, finding.rule_id)


class LintService:
    """Stateless service that lints decision memos.

    Parameters
    ----------
    source:
        Any object satisfying the :class:`DocumentSource` protocol.
    config:
        Rule settings; defaults to :class:`LintConfig()`.
    """

    def __init__(
        self,
        source: DocumentSource,
        config: LintConfig | None = None,
    ) -> None:
        self._source: DocumentSource = source
        self._config: LintConfig = config or LintConfig()

    @property
    def config(self) -> LintConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def lint_text(self, text: str, source: str = "<string>") -> LintReport:
        """Parse *text* and run every enabled rule against it."""
        document = parse_document(text, source)
        findings = sorted(run_rules(document, self._config), key=_sort_key)
        logger.info("%s: %d finding(s)", source, len(findings))
        return LintReport(source=source, findings=tuple(findings))

    def lint_path(self, path: Path) -> LintReport:
        """Read the document at *path* and lint it.

        Raises
        ------
        DocumentNotFoundError
            If *path* does not exist.
        DocumentReadError
            If the document cannot be read, or the source fails
            unexpectedly.
        RuleError
            If a rule crashes on the document.
        """
        text = self._call(lambda: self._source.read_text(path), path)
        return self.lint_text(text, str(path))

    def lint_paths(self, paths: Sequence[Path]) -> list[LintReport]:
        """Expand *paths* through the source and lint each, in order."""
        expanded = self._call(lambda: self._source.expand(paths), None)
        logger.debug("Linting %d document(s)", len(expanded))
        return [self.lint_path(path) for path in expanded]

    # ------------------------------------------------------------------
    # Source delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(operation: Callable[[], _T], path: Path | None) -> _T:
        """Run a source call and ensure only our exceptions escape."""
        try:
            return operation()
        except AdrLintError:
            raise
        except Exception as exc:
            where = f" for {path}" if path is not None else ""
            raise DocumentReadError(
                f"Unexpected document source error{where}: {exc}",
            ) from exc
