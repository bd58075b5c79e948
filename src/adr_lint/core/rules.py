"""Structural lint rules for decision memos.

Each rule is a pure function ``(DecisionDocument, LintConfig) ->
list[Finding]`` registered in :data:`RULES` through the :func:`rule`
decorator.  Rules never raise on document content; a rule that crashes
is reported by :func:`run_rules` as a :class:`RuleError`.

Rule ids are stable and may be referenced from configuration files
(``disabled_rules``, ``severity_overrides``).
"""

from __future__ import annotations

import datetime
import logging
import re
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, replace

from adr_lint.core.config import LintConfig
from adr_lint.core.models import DecisionDocument, Finding, Severity
from adr_lint.core.parser import (
    MATRIX_SECTION,
    OPTIONS_SECTION,
    PLAN_SECTION,
)
from adr_lint.exceptions import AdrLintError, RuleError
from adr_lint.utils.text import normalize_heading, strip_decoration

logger = logging.getLogger(__name__)

RuleCheck = Callable[[DecisionDocument, LintConfig], list[Finding]]

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True, slots=True)
class Rule:
    """Registry entry describing one lint rule."""

    rule_id: str
    name: str
    severity: Severity
    description: str
    check: RuleCheck


RULES: dict[str, Rule] = {}
"""All registered rules, keyed by id, in registration order."""


def rule(
    rule_id: str,
    name: str,
    description: str,
    *,
    severity: Severity = Severity.ERROR,
) -> Callable[[RuleCheck], RuleCheck]:
    """Register the decorated function under *rule_id*."""

    def decorator(func: RuleCheck) -> RuleCheck:
        if rule_id in RULES:
            raise RuleError(f"Duplicate rule id: {rule_id}")
        RULES[rule_id] = Rule(
            rule_id=rule_id,
            name=name,
            severity=severity,
            description=description,
            check=func,
        )
        return func

    return decorator


def _finding(
    document: DecisionDocument,
    rule_id: str,
    message: str,
    line: int | None,
    severity: Severity | None = None,
) -> Finding:
    return Finding(
        rule_id=rule_id,
        severity=severity or RULES[rule_id].severity,
        message=message,
        line=line,
        source=document.source,
    )


def _section_line(document: DecisionDocument, key: str) -> int | None:
    section = document.section(key)
    return section.line if section is not None else None


# ---------------------------------------------------------------------------
# DM001 — front matter
# ---------------------------------------------------------------------------

@rule(
    "DM001",
    "front-matter",
    "Date, Status and Author lines are present; Date is YYYY-MM-DD; "
    "Status is an allowed value.",
)
def check_front_matter(document: DecisionDocument, config: LintConfig) -> list[Finding]:
    findings: list[Finding] = []
    front = document.front_matter
    line = front.line or 1

    for key in config.required_front_matter:
        if front.get(key) is None:
            findings.append(
                _finding(document, "DM001", f"Missing front-matter line '{key}:'", line)
            )

    if front.date is not None and not _is_iso_date(front.date):
        findings.append(
            _finding(
                document,
                "DM001",
                f"Date '{front.date}' is not in YYYY-MM-DD form",
                line,
            )
        )

    if front.status is not None:
        allowed = {status.lower() for status in config.allowed_statuses}
        words = front.status.split()
        first_word = words[0].strip("*_.,;()").lower() if words else ""
        if first_word not in allowed:
            findings.append(
                _finding(
                    document,
                    "DM001",
                    f"Status '{front.status}' is not one of: "
                    + ", ".join(config.allowed_statuses),
                    line,
                    severity=Severity.WARNING,
                )
            )
    return findings


def _is_iso_date(value: str) -> bool:
    if not _ISO_DATE_RE.match(value):
        return False
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# DM002 — section order
# ---------------------------------------------------------------------------

@rule(
    "DM002",
    "section-order",
    "Every required section is present exactly once and in the expected order.",
)
def check_section_order(document: DecisionDocument, config: LintConfig) -> list[Finding]:
    findings: list[Finding] = []
    required = config.section_keys
    titles = dict(zip(required, config.required_sections))
    counts = Counter(section.key for section in document.sections)

    for key in required:
        if counts[key] == 0:
            findings.append(
                _finding(
                    document, "DM002", f"Missing required section '{titles[key]}'", None,
                )
            )

    seen: set[str] = set()
    highest = -1
    highest_key: str | None = None
    for section in document.sections:
        if section.key not in titles:
            continue
        if section.key in seen:
            findings.append(
                _finding(
                    document,
                    "DM002",
                    f"Section '{titles[section.key]}' appears more than once",
                    section.line,
                )
            )
            continue
        seen.add(section.key)
        index = required.index(section.key)
        if index < highest and highest_key is not None:
            findings.append(
                _finding(
                    document,
                    "DM002",
                    f"Section '{titles[section.key]}' should come before "
                    f"'{titles[highest_key]}'",
                    section.line,
                )
            )
        else:
            highest, highest_key = index, section.key
    return findings


# ---------------------------------------------------------------------------
# DM003 — option count
# ---------------------------------------------------------------------------

@rule(
    "DM003",
    "option-count",
    "The Options Evaluated section contains the expected number of options.",
)
def check_option_count(document: DecisionDocument, config: LintConfig) -> list[Finding]:
    found = len(document.options)
    if found == config.expected_option_count:
        return []
    return [
        _finding(
            document,
            "DM003",
            f"Expected {config.expected_option_count} evaluated option(s), found {found}",
            _section_line(document, OPTIONS_SECTION),
        )
    ]


# ---------------------------------------------------------------------------
# DM004 — pros and cons
# ---------------------------------------------------------------------------

@rule(
    "DM004",
    "option-pros-cons",
    "Every evaluated option has a non-empty Pros list and a non-empty Cons list.",
)
def check_option_pros_cons(
    document: DecisionDocument, config: LintConfig,
) -> list[Finding]:
    findings: list[Finding] = []
    for option in document.options:
        if not option.pros:
            findings.append(
                _finding(
                    document, "DM004", f"Option '{option.name}' has no Pros", option.line,
                )
            )
        if not option.cons:
            findings.append(
                _finding(
                    document, "DM004", f"Option '{option.name}' has no Cons", option.line,
                )
            )
    return findings


# ---------------------------------------------------------------------------
# DM005 — comparison matrix shape
# ---------------------------------------------------------------------------

@rule(
    "DM005",
    "matrix-shape",
    "The comparison matrix has one column per option, one row per criterion "
    "and no empty cells.",
)
def check_matrix_shape(document: DecisionDocument, config: LintConfig) -> list[Finding]:
    matrix = document.matrix
    if matrix is None:
        return [
            _finding(
                document,
                "DM005",
                "No comparison matrix table found",
                _section_line(document, MATRIX_SECTION),
            )
        ]

    findings: list[Finding] = []
    columns = matrix.option_columns
    if document.options and len(columns) != len(document.options):
        findings.append(
            _finding(
                document,
                "DM005",
                f"Matrix has {len(columns)} option column(s) but "
                f"{len(document.options)} option(s) are evaluated",
                matrix.line,
            )
        )
    for name, count in Counter(normalize_heading(c) for c in columns).items():
        if count > 1:
            findings.append(
                _finding(
                    document, "DM005", f"Matrix column '{name}' is repeated", matrix.line,
                )
            )

    if not matrix.rows:
        findings.append(
            _finding(document, "DM005", "Matrix has no criterion rows", matrix.line)
        )

    seen: set[str] = set()
    for row in matrix.rows:
        criterion = strip_decoration(row.criterion)
        if not criterion:
            findings.append(
                _finding(document, "DM005", "Matrix row has no criterion", row.line)
            )
        else:
            key = normalize_heading(criterion)
            if key in seen:
                findings.append(
                    _finding(
                        document,
                        "DM005",
                        f"Criterion '{criterion}' appears in more than one row",
                        row.line,
                    )
                )
            seen.add(key)

        if len(row.cells) > len(columns):
            findings.append(
                _finding(
                    document,
                    "DM005",
                    f"Row '{criterion}' has {len(row.cells)} cell(s) for "
                    f"{len(columns)} column(s)",
                    row.line,
                )
            )
        for column, cell in zip(columns, row.cells):
            if not cell:
                findings.append(
                    _finding(
                        document,
                        "DM005",
                        f"Row '{criterion}' has an empty cell for '{column}'",
                        row.line,
                    )
                )
    return findings


# ---------------------------------------------------------------------------
# DM006 — implementation phases
# ---------------------------------------------------------------------------

@rule(
    "DM006",
    "phase-tools-purpose",
    "The implementation plan has phases, each naming a tool and a purpose.",
)
def check_phase_tools_purpose(
    document: DecisionDocument, config: LintConfig,
) -> list[Finding]:
    if not document.phases:
        return [
            _finding(
                document,
                "DM006",
                "Implementation plan lists no phases",
                _section_line(document, PLAN_SECTION),
            )
        ]
    findings: list[Finding] = []
    for phase in document.phases:
        label = phase.name or "(unnamed)"
        if not phase.tools:
            findings.append(
                _finding(document, "DM006", f"Phase '{label}' names no tools", phase.line)
            )
        if not phase.purposes:
            findings.append(
                _finding(
                    document, "DM006", f"Phase '{label}' states no purpose", phase.line,
                )
            )
    return findings


# ---------------------------------------------------------------------------
# DM007 / DM008 — questions and references
# ---------------------------------------------------------------------------

@rule(
    "DM007",
    "open-question-form",
    "Every open question is phrased as a question ending with '?'.",
)
def check_open_question_form(
    document: DecisionDocument, config: LintConfig,
) -> list[Finding]:
    return [
        _finding(
            document,
            "DM007",
            f"Open question does not end with '?': {question.text}",
            question.line,
        )
        for question in document.open_questions
        if not strip_decoration(question.text).endswith("?")
    ]


@rule(
    "DM008",
    "reference-resolves",
    "Every reference is a URL or carries an internal-repository label.",
)
def check_reference_resolves(
    document: DecisionDocument, config: LintConfig,
) -> list[Finding]:
    markers = [
        re.compile(rf"(?<!\w){re.escape(marker)}(?!\w)", re.IGNORECASE)
        for marker in config.internal_reference_markers
    ]
    return [
        _finding(
            document,
            "DM008",
            f"Reference has neither a URL nor an internal label: {reference.text}",
            reference.line,
        )
        for reference in document.references
        if reference.url is None
        and not any(marker.search(reference.text) for marker in markers)
    ]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

KNOWN_RULES: frozenset[str] = frozenset(RULES)


def run_rules(document: DecisionDocument, config: LintConfig) -> list[Finding]:
    """Run every enabled rule against *document*.

    Severity overrides from *config* replace the severity of each
    finding the overridden rule produces.

    Raises
    ------
    RuleError
        If a rule raises while checking the document.
    """
    findings: list[Finding] = []
    for rule_id, entry in RULES.items():
        if not config.is_enabled(rule_id):
            logger.debug("Skipping disabled rule %s", rule_id)
            continue
        try:
            produced = entry.check(document, config)
        except AdrLintError:
            raise
        except Exception as exc:
            raise RuleError(
                f"Rule {rule_id} ({entry.name}) failed on {document.source}: {exc}",
                hint=f"Disable it with 'disabled_rules: [{rule_id}]' and report the issue.",
            ) from exc
        override = config.severity_overrides.get(rule_id)
        if override is not None:
            produced = [replace(f, severity=override) for f in produced]
        logger.debug("Rule %s produced %d finding(s)", rule_id, len(produced))
        findings.extend(produced)
    return findings
