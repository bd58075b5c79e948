"""``adr-lint doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies adr-lint's requirements.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys
from importlib import metadata
from pathlib import Path

from adr_lint.cli import exit_codes
from adr_lint.cli.console import console, escape
from adr_lint.exceptions import AdrLintError
from adr_lint.infra.config_loader import find_config, load_config
from adr_lint.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _package_check(label: str, module: str, distribution: str, *, required: bool) -> Check:
    """Return (label, value, status) for an importable dependency.

    Missing optional packages are a warning; missing required ones fail.
    """
    try:
        importlib.import_module(module)
    except ImportError:
        missing = "[red]FAIL[/red]" if required else "[yellow]WARN[/yellow]"
        return label, "NOT INSTALLED", missing
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        version = "unknown"
    return label, version, "[green]OK[/green]"


def _rich_check() -> Check:
    return _package_check("rich", "rich", "rich", required=False)


def _questionary_check() -> Check:
    return _package_check("questionary", "questionary", "questionary", required=False)


def _yaml_check() -> Check:
    return _package_check("PyYAML", "yaml", "PyYAML", required=True)


def _config_check(cwd: Path | None = None) -> Check:
    """Return (label, value, status) for the working-directory config."""
    path = find_config(cwd)
    if path is None:
        return "Config", "defaults", "[green]OK[/green]"
    try:
        load_config(path)
    except AdrLintError as exc:
        return "Config", f"{path.name}: {exc}", "[red]FAIL[/red]"
    return "Config", str(path), "[green]OK[/green]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _adrlint_version_check() -> Check:
    return "adr-lint", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nadr-lint doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _adrlint_version_check(),
        _python_version_check(),
        _rich_check(),
        _questionary_check(),
        _yaml_check(),
        _config_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        message = "Some checks failed." if has_failure else "All checks passed."
        print(message, file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="adr-lint doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
