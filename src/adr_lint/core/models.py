"""Domain models for adr-lint.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and a few derived properties.  They carry
zero I/O, zero dependencies on external packages, and must remain pure
across the entire lifecycle.

Line numbers are 1-based and refer to the linted source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FrontMatter:
    """Plain-text ``Date`` / ``Status`` / ``Author`` lines above the body."""

    date: str | None = None
    status: str | None = None
    author: str | None = None
    line: int | None = None
    """Line of the first front-matter entry, or ``None`` when absent."""

    def get(self, key: str) -> str | None:
        """Return the value for a case-insensitive front-matter *key*."""
        return {
            "date": self.date,
            "status": self.status,
            "author": self.author,
        }.get(key.strip().lower())


@dataclass(frozen=True, slots=True)
class Section:
    """A level-two heading and the raw lines beneath it."""

    title: str
    """Heading text as written (decoration stripped)."""

    key: str
    """Normalised title used for comparisons."""

    line: int
    body: tuple[tuple[int, str], ...] = ()
    """``(line_number, text)`` pairs up to the next level-two heading."""


@dataclass(frozen=True, slots=True)
class EvaluatedOption:
    """One candidate approach from the *Options Evaluated* section."""

    name: str
    line: int
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MatrixRow:
    """A single criterion row in the comparison matrix."""

    criterion: str
    cells: tuple[str, ...]
    line: int


@dataclass(frozen=True, slots=True)
class ComparisonMatrix:
    """The first pipe table of the *Comparison Matrix* section."""

    line: int
    criterion_header: str
    option_columns: tuple[str, ...]
    rows: tuple[MatrixRow, ...] = ()

    @property
    def criteria(self) -> tuple[str, ...]:
        return tuple(row.criterion for row in self.rows)


@dataclass(frozen=True, slots=True)
class Phase:
    """One phase of the *Implementation Plan*."""

    name: str
    line: int
    tools: tuple[str, ...] = ()
    purposes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OpenQuestion:
    text: str
    line: int


@dataclass(frozen=True, slots=True)
class Reference:
    text: str
    line: int
    url: str | None = None


@dataclass(frozen=True, slots=True)
class DecisionDocument:
    """Typed view of a parsed decision memo.

    Every collection is empty (never ``None``) when the corresponding
    content is missing; only :attr:`matrix` and :attr:`title` are
    optional.
    """

    source: str
    title: str | None
    front_matter: FrontMatter
    sections: tuple[Section, ...] = ()
    options: tuple[EvaluatedOption, ...] = ()
    matrix: ComparisonMatrix | None = None
    phases: tuple[Phase, ...] = ()
    open_questions: tuple[OpenQuestion, ...] = ()
    references: tuple[Reference, ...] = ()

    def section(self, key: str) -> Section | None:
        """Return the first section whose normalised title equals *key*."""
        return next((s for s in self.sections if s.key == key), None)


# ---------------------------------------------------------------------------
# Lint results
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Finding severity.  Only errors fail a non-strict run."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single rule violation."""

    rule_id: str
    severity: Severity
    message: str
    line: int | None = None
    source: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "line": self.line,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class LintReport:
    """All findings for one document, sorted by line then rule id."""

    source: str
    findings: tuple[Finding, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.WARNING)

    @property
    def ok(self) -> bool:
        """``True`` when the document has no error-level findings."""
        return not self.errors
