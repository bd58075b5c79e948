"""Collect a :class:`ScaffoldRequest` for ``adr-lint new``.

Values given as flags are used as-is.  Anything missing is asked for
with questionary unless ``--no-input`` was passed, in which case title
and author must come from flags and the rest falls back to defaults.
"""

from __future__ import annotations

import argparse
from typing import Any

from adr_lint.core.config import DEFAULT_STATUSES
from adr_lint.core.scaffold import (
    DEFAULT_OPTIONS,
    DEFAULT_PHASES,
    ScaffoldRequest,
    placeholder_options,
)
from adr_lint.exceptions import EnvironmentError, ScaffoldError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass --no-input with --title and --author.",
        ) from exc
    return questionary


def split_names(raw: str) -> tuple[str, ...]:
    """Split a comma-separated answer into trimmed, non-empty names."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _ask(question: Any) -> Any:
    """Run a questionary prompt; ``None`` means the user cancelled."""
    answer = question.ask()
    if answer is None:
        raise ScaffoldError("Scaffold cancelled.", hint="Nothing was written.")
    return answer


def _non_empty(value: str) -> bool | str:
    return bool(value.strip()) or "A value is required."


def _check_option_count(options: tuple[str, ...], expected: int) -> None:
    if options and len(options) != expected:
        raise ScaffoldError(
            f"{len(options)} option(s) given but the lint config expects {expected}.",
            hint=f"Pass --option {expected} time(s) or set expected_option_count "
            "in .adr-lint.yaml.",
        )


def prompt_scaffold_request(
    args: argparse.Namespace,
    expected_option_count: int = len(DEFAULT_OPTIONS),
) -> ScaffoldRequest:
    """Build the request from parsed ``new`` arguments and prompts.

    Options must match *expected_option_count* so the skeleton passes
    the option-count rule; placeholders fill in when none are given.

    Raises
    ------
    ScaffoldError
        If required values are missing under ``--no-input``, the user
        cancels a prompt, the option count is wrong, or the values are
        invalid.
    EnvironmentError
        If prompting is needed but questionary is not installed.
    """
    title: str | None = args.title
    author: str | None = args.author
    status: str | None = args.status
    options = tuple(args.option or ())
    phases = tuple(args.phase or ())
    _check_option_count(options, expected_option_count)

    if args.no_input:
        if not title or not author:
            raise ScaffoldError(
                "--title and --author are required with --no-input.",
            )
        return ScaffoldRequest(
            title=title,
            author=author,
            status=status or "Proposed",
            options=options or placeholder_options(expected_option_count),
            phases=phases or DEFAULT_PHASES,
        )

    questionary = _import_questionary()
    if not title:
        title = _ask(questionary.text("Decision title:", validate=_non_empty))
    if not author:
        author = _ask(questionary.text("Author:", validate=_non_empty))
    if not status:
        status = _ask(
            questionary.select(
                "Status:",
                choices=list(DEFAULT_STATUSES),
                default="Proposed",
                use_arrow_keys=True,
            )
        )
    if not options:
        options = split_names(
            _ask(
                questionary.text(
                    "Options to evaluate (comma-separated):",
                    default=", ".join(placeholder_options(expected_option_count)),
                )
            )
        )
        _check_option_count(options, expected_option_count)
    if not phases:
        phases = split_names(
            _ask(
                questionary.text(
                    "Implementation phases (comma-separated):",
                    default=", ".join(DEFAULT_PHASES),
                )
            )
        )

    return ScaffoldRequest(
        title=title,
        author=author,
        status=status,
        options=options,
        phases=phases,
    )
