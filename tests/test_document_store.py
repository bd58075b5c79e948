"""Tests for the filesystem document source (infra/document_store.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from adr_lint.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentReadError,
)
from adr_lint.infra.document_store import FileDocumentSource


@pytest.fixture()
def store() -> FileDocumentSource:
    return FileDocumentSource()


class TestReadText:
    def test_reads_utf8(self, store: FileDocumentSource, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("# Décision\n", encoding="utf-8")
        assert store.read_text(path) == "# Décision\n"

    def test_missing(self, store: FileDocumentSource, tmp_path: Path) -> None:
        with pytest.raises(DocumentNotFoundError, match="not found"):
            store.read_text(tmp_path / "nope.md")

    def test_not_utf8(self, store: FileDocumentSource, tmp_path: Path) -> None:
        path = tmp_path / "latin1.md"
        path.write_bytes(b"caf\xe9\n")
        with pytest.raises(DocumentReadError, match="not valid utf-8"):
            store.read_text(path)

    def test_directory(self, store: FileDocumentSource, tmp_path: Path) -> None:
        with pytest.raises(DocumentReadError):
            store.read_text(tmp_path)


class TestExpand:
    def test_files_keep_order(self, store: FileDocumentSource, tmp_path: Path) -> None:
        b = tmp_path / "b.md"
        a = tmp_path / "a.txt"
        b.write_text("", encoding="utf-8")
        a.write_text("", encoding="utf-8")
        assert store.expand([b, a]) == [b, a]

    def test_directory_is_recursive_and_sorted(
        self, store: FileDocumentSource, tmp_path: Path,
    ) -> None:
        (tmp_path / "sub").mkdir()
        for name in ("z.md", "a.md", "sub/m.md", "notes.txt"):
            (tmp_path / name).write_text("", encoding="utf-8")
        assert store.expand([tmp_path]) == [
            tmp_path / "a.md",
            tmp_path / "sub" / "m.md",
            tmp_path / "z.md",
        ]

    def test_missing_path(self, store: FileDocumentSource, tmp_path: Path) -> None:
        with pytest.raises(DocumentNotFoundError):
            store.expand([tmp_path / "missing.md"])

    def test_empty_directory(self, store: FileDocumentSource, tmp_path: Path) -> None:
        with pytest.raises(DocumentNotFoundError, match="No Markdown documents"):
            store.expand([tmp_path])


class TestWriteText:
    def test_creates_parents(self, store: FileDocumentSource, tmp_path: Path) -> None:
        path = tmp_path / "docs" / "adr" / "001.md"
        store.write_text(path, "# New\n")
        assert path.read_text(encoding="utf-8") == "# New\n"

    def test_refuses_to_overwrite(self, store: FileDocumentSource, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("keep", encoding="utf-8")
        with pytest.raises(DocumentExistsError) as exc_info:
            store.write_text(path, "replace")
        assert exc_info.value.hint == "Pass --force to overwrite it."
        assert path.read_text(encoding="utf-8") == "keep"

    def test_overwrite(self, store: FileDocumentSource, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("old", encoding="utf-8")
        store.write_text(path, "new", overwrite=True)
        assert path.read_text(encoding="utf-8") == "new"
