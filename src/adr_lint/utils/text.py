"""Pure text helpers for Markdown line handling."""

from __future__ import annotations

import re

_NUMBERING_RE = re.compile(r"^\s*(?:\d+[.)]|[ivxlc]+\.)\s+", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(r"^(?P<indent>\s*)(?:[-*+]|\d+[.)])\s+(?P<text>.*)$")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_decoration(text: str) -> str:
    """Remove Markdown emphasis, heading hashes and trailing colons.

    ``"**Pros:**"`` → ``"Pros"``, ``"#### Cons"`` → ``"Cons"``.
    """
    stripped = text.strip().lstrip("#").strip()
    stripped = stripped.replace("**", "").replace("__", "").strip("*_ ")
    return stripped.rstrip(":").strip()


def normalize_heading(text: str) -> str:
    """Normalise a heading title for order-insensitive comparison.

    Lowercases, drops leading numbering (``1.``, ``3)``, ``iv.``), strips
    decoration and collapses internal whitespace.
    """
    stripped = strip_decoration(text)
    stripped = _NUMBERING_RE.sub("", stripped)
    return _WHITESPACE_RE.sub(" ", stripped).strip().lower()


def split_list_item(line: str) -> tuple[int, str] | None:
    """Return ``(indent, text)`` for a Markdown list item, else ``None``.

    Bullet (``-``, ``*``, ``+``) and ordered (``1.``, ``2)``) markers are
    recognised.  A lone ``---`` thematic break is not a list item.
    """
    if line.strip() in {"---", "***", "___"}:
        return None
    match = _LIST_ITEM_RE.match(line)
    if match is None:
        return None
    indent = len(match.group("indent").expandtabs(4))
    return indent, match.group("text").strip()
