"""Render lint reports as Rich tables, plain text or JSON.

Text output goes to stderr through the console proxy; JSON is returned
as a string for the caller to write to stdout.  Rich is optional here:
without it the text renderer falls back to aligned plain lines.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence

from adr_lint.cli.console import console, escape, rich_available
from adr_lint.core.models import LintReport, Severity
from adr_lint.core.rules import RULES

_SEVERITY_STYLE: dict[Severity, str] = {
    Severity.ERROR: "[red]error[/red]",
    Severity.WARNING: "[yellow]warning[/yellow]",
}


def summarize(reports: Sequence[LintReport]) -> dict[str, int]:
    """Return document, error and warning totals for *reports*."""
    return {
        "documents": len(reports),
        "failed": sum(1 for report in reports if not report.ok),
        "errors": sum(len(report.errors) for report in reports),
        "warnings": sum(len(report.warnings) for report in reports),
    }


def _summary_line(reports: Sequence[LintReport]) -> str:
    totals = summarize(reports)
    return (
        f"{totals['documents']} document(s) checked: "
        f"{totals['errors']} error(s), {totals['warnings']} warning(s)"
    )


def _line_label(line: int | None) -> str:
    return str(line) if line is not None else "-"


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def _render_plain(reports: Sequence[LintReport]) -> None:
    for report in reports:
        for finding in report.findings:
            print(
                f"{report.source}:{_line_label(finding.line)}: "
                f"{finding.rule_id} {finding.severity.value}: {finding.message}",
                file=sys.stderr,
            )
    print(_summary_line(reports), file=sys.stderr)


def render_text(reports: Sequence[LintReport]) -> None:
    """Print one table per document with findings, then a summary."""
    if not rich_available():
        _render_plain(reports)
        return

    from rich.table import Table

    for report in reports:
        if not report.findings:
            console.print(f"[green]✔[/green] {escape(report.source)}")
            continue
        table = Table(
            title=escape(report.source),
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Line", justify="right", style="dim", min_width=4)
        table.add_column("Rule", style="bold", min_width=6)
        table.add_column("Severity", min_width=8)
        table.add_column("Message")
        for finding in report.findings:
            table.add_row(
                _line_label(finding.line),
                finding.rule_id,
                _SEVERITY_STYLE[finding.severity],
                escape(finding.message),
            )
        console.print(table)

    colour = "green" if all(report.ok for report in reports) else "red"
    console.print(f"[bold {colour}]{_summary_line(reports)}[/bold {colour}]")


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def render_json(reports: Sequence[LintReport]) -> str:
    """Return the machine-readable report consumed by CI tooling."""
    payload = {
        "documents": [
            {
                "source": report.source,
                "ok": report.ok,
                "findings": [finding.to_dict() for finding in report.findings],
            }
            for report in reports
        ],
        "summary": summarize(reports),
    }
    return json.dumps(payload, indent=2)


# ---------------------------------------------------------------------------
# Rule listing
# ---------------------------------------------------------------------------

def render_rules() -> None:
    """Print the registered rules."""
    if not rich_available():
        for entry in RULES.values():
            print(
                f"{entry.rule_id:<6} {entry.name:<20} {entry.severity.value:<8} "
                f"{entry.description}",
                file=sys.stderr,
            )
        return

    from rich.table import Table

    table = Table(
        title="adr-lint rules",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Description")
    for entry in RULES.values():
        table.add_row(
            entry.rule_id,
            entry.name,
            _SEVERITY_STYLE[entry.severity],
            entry.description,
        )
    console.print(table)
