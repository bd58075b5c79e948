"""Tests for the lint rules (core/rules.py).

Every test starts from the clean fixture memo and breaks exactly one
structural property.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from adr_lint.core.config import LintConfig
from adr_lint.core.models import DecisionDocument, Finding, Severity
from adr_lint.core.parser import parse_document
from adr_lint.core.rules import KNOWN_RULES, RULES, run_rules
from adr_lint.exceptions import RuleError


def _lint(text: str, config: LintConfig | None = None) -> list[Finding]:
    return run_rules(parse_document(text, "memo.md"), config or LintConfig())


def _ids(findings: list[Finding]) -> list[str]:
    return [f.rule_id for f in findings]


def _only(findings: list[Finding], rule_id: str) -> list[Finding]:
    return [f for f in findings if f.rule_id == rule_id]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_rule_ids(self) -> None:
        assert list(RULES) == [f"DM00{i}" for i in range(1, 9)]
        assert KNOWN_RULES == frozenset(RULES)

    def test_every_rule_is_described(self) -> None:
        for entry in RULES.values():
            assert entry.name
            assert entry.description
            assert entry.severity is Severity.ERROR

    def test_clean_memo_has_no_findings(self, memo_text: str) -> None:
        assert _lint(memo_text) == []


# ---------------------------------------------------------------------------
# DM001 front matter
# ---------------------------------------------------------------------------

class TestFrontMatter:
    def test_missing_author(self, memo_text: str) -> None:
        findings = _lint(memo_text.replace("**Author:** Platform Team\n", ""))
        assert _ids(findings) == ["DM001"]
        assert "Author" in findings[0].message
        assert findings[0].line == 3

    def test_missing_front_matter_reports_line_one(self) -> None:
        findings = _only(_lint("# T\n"), "DM001")
        assert len(findings) == 3
        assert {f.line for f in findings} == {1}

    @pytest.mark.parametrize("date", ["15/01/2025", "2025-1-5", "2025-02-30"])
    def test_bad_date(self, memo_text: str, date: str) -> None:
        findings = _lint(memo_text.replace("2025-01-15", date))
        assert _ids(findings) == ["DM001"]
        assert "YYYY-MM-DD" in findings[0].message

    def test_unknown_status_is_a_warning(self, memo_text: str) -> None:
        findings = _lint(memo_text.replace("**Status:** Proposed", "**Status:** Maybe"))
        assert _ids(findings) == ["DM001"]
        assert findings[0].severity is Severity.WARNING

    def test_status_with_trailing_detail_is_accepted(self, memo_text: str) -> None:
        text = memo_text.replace("**Status:** Proposed", "**Status:** Accepted (2025-02-01)")
        assert _lint(text) == []

    def test_status_list_is_configurable(self, memo_text: str) -> None:
        config = LintConfig(allowed_statuses=("Approved",))
        findings = _lint(memo_text, config)
        assert _ids(findings) == ["DM001"]


# ---------------------------------------------------------------------------
# DM002 section order
# ---------------------------------------------------------------------------

class TestSectionOrder:
    def test_missing_section(self, memo_text: str) -> None:
        text = memo_text.replace("## Decision Summary\n", "")
        findings = _lint(text)
        assert _ids(findings) == ["DM002"]
        assert "Decision Summary" in findings[0].message
        assert findings[0].line is None

    def test_out_of_order(self, memo_text: str) -> None:
        text = memo_text.replace("## Requirements", "## Placeholder")
        text = text.replace("## Recommendation\n", "## Recommendation\n\n## Requirements\n")
        findings = _lint(text)
        assert _ids(findings) == ["DM002"]
        assert "'Requirements' should come before 'Recommendation'" in findings[0].message

    def test_duplicate_section(self, memo_text: str) -> None:
        text = memo_text + "\n## Overview\n\nAgain.\n"
        findings = _lint(text)
        assert _ids(findings) == ["DM002"]
        assert "more than once" in findings[0].message

    def test_extra_sections_are_allowed(self, memo_text: str) -> None:
        text = memo_text.replace("## Recommendation\n", "## Background\n\n## Recommendation\n")
        assert _lint(text) == []

    def test_numbered_headings_match(self, memo_text: str) -> None:
        text = memo_text.replace("## Overview", "## 1. Overview")
        assert _lint(text) == []


# ---------------------------------------------------------------------------
# DM003 / DM004 options
# ---------------------------------------------------------------------------

class TestOptions:
    def test_wrong_option_count(self, memo_text: str) -> None:
        findings = _lint(memo_text, LintConfig(expected_option_count=3))
        assert _ids(findings) == ["DM003"]
        assert "Expected 3" in findings[0].message
        assert "found 4" in findings[0].message

    def test_missing_cons(self, memo_text: str) -> None:
        text = memo_text.replace("**Cons:**\n- More code to own\n", "")
        findings = _lint(text)
        assert _ids(findings) == ["DM004"]
        assert findings[0].message == "Option 'Option 2: Custom Agent Loop' has no Cons"
        option_line = parse_document(text).options[1].line
        assert findings[0].line == option_line

    def test_empty_pros_label(self, memo_text: str) -> None:
        text = memo_text.replace("**Pros:** Deterministic", "**Pros:**")
        findings = _lint(text)
        assert _ids(findings) == ["DM004"]
        assert "has no Pros" in findings[0].message


# ---------------------------------------------------------------------------
# DM005 matrix
# ---------------------------------------------------------------------------

class TestMatrixShape:
    def test_missing_matrix(self, memo_text: str) -> None:
        start = memo_text.index("| Criterion")
        end = memo_text.index("## Recommendation")
        text = memo_text[:start] + "See the appendix.\n\n" + memo_text[end:]
        findings = _lint(text)
        assert _ids(findings) == ["DM005"]
        assert findings[0].line == parse_document(text).section("comparison matrix").line

    def test_matrix_without_outer_pipes(self, memo_text: str) -> None:
        text = memo_text.replace(
            "| Criterion | Codex + MCP | Custom | LangGraph | Scripted |\n"
            "|-----------|-------------|--------|-----------|----------|\n"
            "| Effort | Low | High | Medium | Low |\n"
            "| Flexibility | High | High | High | Low |\n",
            "Criterion | Codex + MCP | Custom | LangGraph | Scripted\n"
            "--- | --- | --- | --- | ---\n"
            "Effort | Low | High | Medium | Low\n"
            "Flexibility | High | High | High | Low\n",
        )
        assert "| Criterion" not in text
        assert _lint(text) == []

    def test_empty_cell(self, memo_text: str) -> None:
        text = memo_text.replace("| Effort | Low | High |", "| Effort | Low |  |")
        findings = _lint(text)
        assert _ids(findings) == ["DM005"]
        assert findings[0].message == "Row 'Effort' has an empty cell for 'Custom'"

    def test_short_row(self, memo_text: str) -> None:
        text = memo_text.replace("| Effort | Low | High | Medium | Low |", "| Effort | Low |")
        findings = _lint(text)
        assert _ids(findings) == ["DM005", "DM005", "DM005"]

    def test_duplicate_criterion(self, memo_text: str) -> None:
        text = memo_text.replace("| Flexibility |", "| Effort |")
        findings = _lint(text)
        assert _ids(findings) == ["DM005"]
        assert "more than one row" in findings[0].message

    def test_column_count_mismatch(self, memo_text: str) -> None:
        text = memo_text.replace(
            "| Criterion | Codex + MCP | Custom | LangGraph | Scripted |",
            "| Criterion | Codex + MCP | Custom | LangGraph |",
        )
        messages = [f.message for f in _only(_lint(text), "DM005")]
        assert "Matrix has 3 option column(s) but 4 option(s) are evaluated" in messages
        assert sum("cell(s) for 3 column(s)" in m for m in messages) == 2

    def test_no_rows(self, memo_text: str) -> None:
        text = memo_text.replace("| Effort | Low | High | Medium | Low |\n", "")
        text = text.replace("| Flexibility | High | High | High | Low |\n", "")
        findings = _lint(text)
        assert [f.message for f in findings] == ["Matrix has no criterion rows"]


# ---------------------------------------------------------------------------
# DM006 phases
# ---------------------------------------------------------------------------

class TestPhases:
    def test_missing_purpose(self, memo_text: str) -> None:
        text = memo_text.replace("| Database checks |", "|  |")
        findings = _lint(text)
        assert _ids(findings) == ["DM006"]
        assert findings[0].message == "Phase 'Phase 1' states no purpose"

    def test_missing_tools(self, memo_text: str) -> None:
        text = memo_text.replace("| `measure_load_time` |", "|  |")
        findings = _lint(text)
        assert _ids(findings) == ["DM006"]
        assert "names no tools" in findings[0].message

    def test_no_phases(self, memo_text: str) -> None:
        start = memo_text.index("| Phase |")
        end = memo_text.index("## Decision Summary")
        text = memo_text[:start] + "Later.\n\n" + memo_text[end:]
        findings = _lint(text)
        assert _ids(findings) == ["DM006"]
        assert findings[0].message == "Implementation plan lists no phases"


# ---------------------------------------------------------------------------
# DM007 / DM008
# ---------------------------------------------------------------------------

class TestQuestionsAndReferences:
    def test_statement_instead_of_question(self, memo_text: str) -> None:
        text = memo_text.replace("inside the agent?", "inside the agent.")
        findings = _lint(text)
        assert _ids(findings) == ["DM007"]
        assert "Should scoring run inside the agent." in findings[0].message

    def test_emphasised_question_is_accepted(self, memo_text: str) -> None:
        text = memo_text.replace(
            "Should scoring run inside the agent?",
            "**Should scoring run inside the agent?**",
        )
        assert _lint(text) == []

    def test_unresolvable_reference(self, memo_text: str) -> None:
        text = memo_text.replace("- Internal repo: solution-qa-agents", "- Some blog post")
        findings = _lint(text)
        assert _ids(findings) == ["DM008"]
        assert "Some blog post" in findings[0].message

    def test_internal_markers_are_configurable(self, memo_text: str) -> None:
        config = LintConfig(internal_reference_markers=("monorepo",))
        findings = _lint(memo_text, config)
        assert _ids(findings) == ["DM008"]

    def test_internal_marker_must_be_a_whole_word(self, memo_text: str) -> None:
        text = memo_text.replace(
            "- Internal repo: solution-qa-agents", "- Internally tracked, link TBD",
        )
        findings = _lint(text)
        assert _ids(findings) == ["DM008"]
        assert "Internally tracked" in findings[0].message

    def test_marker_match_ignores_case(self, memo_text: str) -> None:
        text = memo_text.replace("Internal repo:", "INTERNAL repo:")
        assert _lint(text) == []


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class TestRunRules:
    def test_disabled_rule_is_skipped(self, memo_text: str) -> None:
        text = memo_text.replace("inside the agent?", "inside the agent.")
        config = LintConfig(disabled_rules=frozenset({"DM007"}))
        assert _lint(text, config) == []

    def test_severity_override(self, memo_text: str) -> None:
        text = memo_text.replace("inside the agent?", "inside the agent.")
        config = LintConfig(severity_overrides={"DM007": Severity.WARNING})
        findings = _lint(text, config)
        assert [f.severity for f in findings] == [Severity.WARNING]

    def test_findings_carry_source(self, memo_text: str) -> None:
        text = memo_text.replace("inside the agent?", "inside the agent.")
        assert _lint(text)[0].source == "memo.md"

    def test_crashing_rule_becomes_rule_error(
        self, memo_text: str, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def boom(document: DecisionDocument, config: LintConfig) -> list[Finding]:
            raise ZeroDivisionError("bad")

        monkeypatch.setitem(RULES, "DM007", replace(RULES["DM007"], check=boom))
        with pytest.raises(RuleError, match="DM007"):
            _lint(memo_text)
