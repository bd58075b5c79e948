"""CLI application entry point and command routing for adr-lint.

This module is the **sole error boundary** for the entire application.
It catches :class:`~adr_lint.exceptions.AdrLintError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is confined to the CLI layer; JSON reports are the only
  output written to stdout.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from adr_lint.cli import exit_codes
from adr_lint.cli.console import configure_logging, console, escape
from adr_lint.core.config import DEFAULT_STATUSES
from adr_lint.core.models import LintReport
from adr_lint.exceptions import AdrLintError
from adr_lint.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``adr-lint check PATH...`` — lint decision memos
    * ``adr-lint rules``         — list the rule set
    * ``adr-lint new OUTPUT``    — write a memo skeleton
    * ``adr-lint doctor``        — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="adr-lint",
        description="Structural linter for Markdown architecture-decision memos.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = commands.add_parser("check", help="Lint one or more decision memos.")
    check.add_argument("paths", nargs="+", type=Path, metavar="PATH")
    check.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text).",
    )
    check.add_argument(
        "--strict",
        action="store_true",
        help="Fail on warnings as well as errors.",
    )
    check.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file (default: ./.adr-lint.yaml if present).",
    )

    commands.add_parser("rules", help="List the available lint rules.")

    new = commands.add_parser("new", help="Write a new decision-memo skeleton.")
    new.add_argument("output", type=Path, metavar="OUTPUT")
    new.add_argument("--title", default=None)
    new.add_argument("--author", default=None)
    new.add_argument("--status", choices=DEFAULT_STATUSES, default=None)
    new.add_argument(
        "--option",
        action="append",
        metavar="NAME",
        help="Option to evaluate (repeatable).",
    )
    new.add_argument(
        "--phase",
        action="append",
        metavar="NAME",
        help="Implementation phase (repeatable).",
    )
    new.add_argument(
        "--no-input",
        action="store_true",
        help="Do not prompt; take values from flags and defaults.",
    )
    new.add_argument(
        "--force",
        action="store_true",
        help="Overwrite OUTPUT if it already exists.",
    )
    new.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config whose expected_option_count the skeleton follows.",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _lint_failed(reports: Sequence[LintReport], *, strict: bool) -> bool:
    if any(report.errors for report in reports):
        return True
    return strict and any(report.warnings for report in reports)


def _handle_check(args: argparse.Namespace) -> int:
    """Lint the given paths and render the report."""
    from adr_lint.cli.report import render_json, render_text
    from adr_lint.core.lint_service import LintService
    from adr_lint.infra.config_loader import load_config
    from adr_lint.infra.document_store import FileDocumentSource

    config = load_config(args.config)
    service = LintService(FileDocumentSource(), config)
    reports = service.lint_paths(args.paths)

    if args.format == "json":
        sys.stdout.write(render_json(reports) + "\n")
    else:
        render_text(reports)

    if _lint_failed(reports, strict=args.strict):
        return exit_codes.LINT_FAILURE
    return exit_codes.SUCCESS


def _handle_rules() -> int:
    from adr_lint.cli.report import render_rules

    render_rules()
    return exit_codes.SUCCESS


def _handle_new(args: argparse.Namespace) -> int:
    """Collect scaffold inputs, render the skeleton and write it."""
    from adr_lint.cli.new_prompt import prompt_scaffold_request
    from adr_lint.core.scaffold import render_scaffold
    from adr_lint.infra.config_loader import load_config
    from adr_lint.infra.document_store import FileDocumentSource

    config = load_config(args.config)
    request = prompt_scaffold_request(args, config.expected_option_count)
    FileDocumentSource().write_text(
        args.output,
        render_scaffold(request),
        overwrite=args.force,
    )
    console.print(f"[bold green]Created[/bold green] {escape(args.output)}")
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from adr_lint.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the adr-lint CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    logger.debug("Running command %s", args.command)

    if args.command == "check":
        return _handle_check(args)
    if args.command == "rules":
        return _handle_rules()
    if args.command == "new":
        return _handle_new(args)
    return _handle_doctor()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AdrLintError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
