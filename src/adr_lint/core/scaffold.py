"""Render a decision-memo skeleton that satisfies the default rule set.

The skeleton carries every required section in order, one option block
per option name, a filled comparison matrix and one phase block per
phase name.  Placeholder text is italicised so authors can spot it.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

from adr_lint.core.config import DEFAULT_REQUIRED_SECTIONS, DEFAULT_STATUSES
from adr_lint.exceptions import ScaffoldError

DEFAULT_OPTIONS: tuple[str, ...] = ("Option A", "Option B", "Option C", "Option D")
DEFAULT_PHASES: tuple[str, ...] = ("Phase 1: Prototype", "Phase 2: Rollout")
DEFAULT_CRITERIA: tuple[str, ...] = ("Fit to requirements", "Effort", "Risk")


def placeholder_options(count: int) -> tuple[str, ...]:
    """Return *count* placeholder option names: ``Option A``, ``Option B``, ..."""
    letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    return tuple(
        f"Option {letters[index]}" if index < len(letters) else f"Option {index + 1}"
        for index in range(count)
    )


@dataclass(frozen=True, slots=True)
class ScaffoldRequest:
    """Inputs for :func:`render_scaffold`."""

    title: str
    author: str
    status: str = "Proposed"
    date: datetime.date = field(default_factory=datetime.date.today)
    options: tuple[str, ...] = DEFAULT_OPTIONS
    phases: tuple[str, ...] = DEFAULT_PHASES

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ScaffoldError("Title must not be empty.")
        if not self.author.strip():
            raise ScaffoldError("Author must not be empty.")
        if self.status not in DEFAULT_STATUSES:
            raise ScaffoldError(
                f"Unknown status: {self.status}",
                hint="Choose one of: " + ", ".join(DEFAULT_STATUSES),
            )
        if not self.options:
            raise ScaffoldError("At least one option name is required.")
        if len({name.strip().lower() for name in self.options}) != len(self.options):
            raise ScaffoldError("Option names must be unique.")
        if not self.phases:
            raise ScaffoldError("At least one phase name is required.")


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _placeholder(text: str) -> str:
    return f"_{text}_"


def _section_body(name: str, request: ScaffoldRequest) -> list[str]:
    if name == "Options Evaluated":
        lines: list[str] = []
        for option in request.options:
            lines += [
                f"### {option}",
                "",
                _placeholder("One-paragraph description of this approach."),
                "",
                "**Pros:**",
                f"- {_placeholder('Main advantage')}",
                "",
                "**Cons:**",
                f"- {_placeholder('Main drawback')}",
                "",
            ]
        return lines
    if name == "Comparison Matrix":
        header = ["Criterion", *(_escape_cell(o) for o in request.options)]
        lines = [
            "| " + " | ".join(header) + " |",
            "|" + "|".join("---" for _ in header) + "|",
        ]
        for criterion in DEFAULT_CRITERIA:
            cells = [criterion, *("TBD" for _ in request.options)]
            lines.append("| " + " | ".join(cells) + " |")
        return [*lines, ""]
    if name == "Recommended Architecture":
        return [
            "```text",
            "[ component ] --> [ component ]",
            "```",
            "",
        ]
    if name == "Implementation Plan":
        lines = []
        for phase in request.phases:
            lines += [
                f"### {phase}",
                "",
                "**Tools:** `tool_name`",
                f"**Purpose:** {_placeholder('What this phase delivers.')}",
                "",
            ]
        return lines
    if name == "Open Questions":
        return [f"- {_placeholder('What remains undecided?')}", ""]
    if name == "References":
        return [f"- Internal repository: {_placeholder('repository name')}", ""]
    if name == "Requirements":
        return [f"- {_placeholder('Requirement the decision must satisfy.')}", ""]
    return [_placeholder(f"Write the {name.lower()} here."), ""]


def render_scaffold(request: ScaffoldRequest) -> str:
    """Return Markdown for a new decision memo described by *request*."""
    lines = [
        f"# {request.title.strip()}",
        "",
        f"**Date:** {request.date.isoformat()}",
        f"**Status:** {request.status}",
        f"**Author:** {request.author.strip()}",
        "",
    ]
    for name in DEFAULT_REQUIRED_SECTIONS:
        lines += [f"## {name}", ""]
        lines += _section_body(name, request)
    return "\n".join(lines).rstrip() + "\n"
