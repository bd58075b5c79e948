"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands and machine-readable output are
resilient when optional UI packages are missing, and that interactive
paths fail cleanly only when they are actually exercised.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from adr_lint.cli import exit_codes
from adr_lint.cli.app import main
from adr_lint.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


@pytest.fixture(autouse=True)
def _cwd(isolated_cwd: Path) -> Path:
    return isolated_cwd


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_json_check_works_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    memo_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["check", "--format", "json", str(memo_path)])
    assert code == exit_codes.SUCCESS
    assert json.loads(capsys.readouterr().out)["summary"]["errors"] == 0


def test_text_check_falls_back_to_plain_output(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    path = tmp_path / "bad.md"
    path.write_text("# Empty\n", encoding="utf-8")

    code = main(["check", str(path)])
    err = capsys.readouterr().err
    assert code == exit_codes.LINT_FAILURE
    assert f"{path}:1: DM001 error: Missing front-matter line 'Date:'" in err
    assert "1 document(s) checked" in err


def test_rules_work_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["rules"]) == exit_codes.SUCCESS
    assert "DM004" in capsys.readouterr().err


def test_new_without_input_works_without_questionary(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)
    output = tmp_path / "memo.md"

    code = main(["new", str(output), "--title", "T", "--author", "A", "--no-input"])
    assert code == exit_codes.SUCCESS
    assert output.exists()


def test_interactive_new_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["new", str(tmp_path / "memo.md")])
