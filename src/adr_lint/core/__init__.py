"""Core / service layer — pure parsing, rules and rendering.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from adr_lint.core.config import LintConfig
from adr_lint.core.lint_service import LintService
from adr_lint.core.models import DecisionDocument, Finding, LintReport, Severity
from adr_lint.core.parser import parse_document
from adr_lint.core.protocols import DocumentSource
from adr_lint.core.rules import RULES, run_rules
from adr_lint.core.scaffold import ScaffoldRequest, render_scaffold

__all__: list[str] = [
    "RULES",
    "DecisionDocument",
    "DocumentSource",
    "Finding",
    "LintConfig",
    "LintReport",
    "LintService",
    "ScaffoldRequest",
    "Severity",
    "parse_document",
    "render_scaffold",
    "run_rules",
]
