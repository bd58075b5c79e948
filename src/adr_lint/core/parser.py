"""Pure Markdown → :class:`DecisionDocument` parser.

The parser is deliberately forgiving: it never raises on content.
Anything it cannot recognise is simply left out of the model, and the
rules in :mod:`adr_lint.core.rules` report the gap with a line number.

Pipeline order (enforced by :func:`parse_document`):

1. **Scan** — number lines and drop fenced code blocks.
2. **Split** — title, front matter, level-two sections.
3. **Extract** — options, matrix, phases, questions, references from
   their owning sections.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from adr_lint.core.models import (
    ComparisonMatrix,
    DecisionDocument,
    EvaluatedOption,
    FrontMatter,
    MatrixRow,
    OpenQuestion,
    Phase,
    Reference,
    Section,
)
from adr_lint.utils.text import normalize_heading, split_list_item, strip_decoration

logger = logging.getLogger(__name__)

Line = tuple[int, str]

OPTIONS_SECTION = "options evaluated"
MATRIX_SECTION = "comparison matrix"
PLAN_SECTION = "implementation plan"
QUESTIONS_SECTION = "open questions"
REFERENCES_SECTION = "references"

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_TITLE_RE = re.compile(r"^#(?!#)\s+(?P<title>.+?)\s*#*\s*$")
_H2_RE = re.compile(r"^##(?!#)\s+(?P<title>.+?)\s*#*\s*$")
_H3_RE = re.compile(r"^###(?!#)\s+(?P<title>.+?)\s*#*\s*$")
_FRONT_MATTER_RE = re.compile(
    r"^\s*(?:[-*+]\s+)?[*_]{0,2}(?P<key>date|status|author)[*_]{0,2}\s*:"
    r"\s*[*_]{0,2}\s*(?P<value>.*?)\s*$",
    re.IGNORECASE,
)
_LABEL_RE = re.compile(
    r"^[*_]{0,2}(?P<label>[A-Za-z][A-Za-z ]*?)[*_]{0,2}\s*:\s*[*_]{0,2}\s*(?P<rest>.*)$",
)
_URL_RE = re.compile(r"https?://[^\s)>\]]+")
_TABLE_SEPARATOR_RE = re.compile(r"^(?=.*-)\|?[\s:|-]+\|?$")

_OPTION_LABELS: dict[str, str] = {
    "pros": "pros",
    "advantages": "pros",
    "cons": "cons",
    "disadvantages": "cons",
}

_PHASE_LABELS: dict[str, str] = {
    "tools": "tools",
    "tool": "tools",
    "purpose": "purposes",
    "purposes": "purposes",
    "goal": "purposes",
    "goals": "purposes",
}


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse_document(text: str, source: str = "<string>") -> DecisionDocument:
    """Parse Markdown *text* into a :class:`DecisionDocument`.

    Parameters
    ----------
    text:
        Full document contents.
    source:
        Label carried through to findings (usually the file path).
    """
    lines = _scan(text)
    title = _extract_title(lines)
    front_matter = _extract_front_matter(lines)
    sections = _split_sections(lines)
    logger.debug("Parsed %d section(s) from %s", len(sections), source)

    def body(key: str) -> tuple[Line, ...]:
        section = next((s for s in sections if s.key == key), None)
        return section.body if section is not None else ()

    return DecisionDocument(
        source=source,
        title=title,
        front_matter=front_matter,
        sections=sections,
        options=_extract_options(body(OPTIONS_SECTION)),
        matrix=_extract_matrix(body(MATRIX_SECTION)),
        phases=_extract_phases(body(PLAN_SECTION)),
        open_questions=tuple(
            OpenQuestion(text=item, line=line)
            for line, item in _top_level_items(body(QUESTIONS_SECTION))
        ),
        references=tuple(
            _make_reference(line, item)
            for line, item in _top_level_items(body(REFERENCES_SECTION))
        ),
    )


# ---------------------------------------------------------------------------
# 1. Scan
# ---------------------------------------------------------------------------

def _scan(text: str) -> list[Line]:
    """Number lines from 1 and drop fenced code blocks, fences included."""
    result: list[Line] = []
    fence: str | None = None
    for number, raw in enumerate(text.splitlines(), start=1):
        match = _FENCE_RE.match(raw)
        if fence is not None:
            if match is not None and match.group(1) == fence:
                fence = None
            continue
        if match is not None:
            fence = match.group(1)
            continue
        result.append((number, raw.rstrip()))
    return result


# ---------------------------------------------------------------------------
# 2. Split
# ---------------------------------------------------------------------------

def _extract_title(lines: Sequence[Line]) -> str | None:
    for _, text in lines:
        match = _TITLE_RE.match(text)
        if match is not None:
            return strip_decoration(match.group("title"))
        if _H2_RE.match(text):
            break
    return None


def _extract_front_matter(lines: Sequence[Line]) -> FrontMatter:
    """Collect the first ``Date``/``Status``/``Author`` lines before any ``##``."""
    found: dict[str, str] = {}
    first_line: int | None = None
    for number, text in lines:
        if _H2_RE.match(text):
            break
        match = _FRONT_MATTER_RE.match(text)
        if match is None:
            continue
        key = match.group("key").lower()
        value = match.group("value").strip("*_ ").strip()
        if key in found or not value:
            continue
        found[key] = value
        if first_line is None:
            first_line = number
    return FrontMatter(
        date=found.get("date"),
        status=found.get("status"),
        author=found.get("author"),
        line=first_line,
    )


def _split_sections(lines: Sequence[Line]) -> tuple[Section, ...]:
    sections: list[Section] = []
    current: tuple[str, int] | None = None
    body: list[Line] = []

    def flush() -> None:
        if current is not None:
            title, line = current
            sections.append(
                Section(
                    title=title,
                    key=normalize_heading(title),
                    line=line,
                    body=tuple(body),
                )
            )

    for number, text in lines:
        match = _H2_RE.match(text)
        if match is not None:
            flush()
            current = (strip_decoration(match.group("title")), number)
            body = []
        elif current is not None:
            body.append((number, text))
    flush()
    return tuple(sections)


def _split_subsections(
    body: Sequence[Line],
) -> list[tuple[str, int, list[Line]]]:
    """Split a section body on ``###`` headings.

    Content before the first ``###`` heading is discarded.
    """
    blocks: list[tuple[str, int, list[Line]]] = []
    for number, text in body:
        match = _H3_RE.match(text)
        if match is not None:
            blocks.append((strip_decoration(match.group("title")), number, []))
        elif blocks:
            blocks[-1][2].append((number, text))
    return blocks


# ---------------------------------------------------------------------------
# 3. Extract
# ---------------------------------------------------------------------------

def _match_label(text: str, labels: dict[str, str]) -> tuple[str, str] | None:
    """Recognise ``Label:`` / ``**Label:** rest`` / ``#### Label`` lines.

    Returns ``(canonical_label, rest)`` or ``None``.
    """
    item = split_list_item(text)
    candidate = item[1] if item is not None else text.strip()
    candidate = candidate.lstrip("#").strip()

    bare = strip_decoration(candidate).lower()
    if bare in labels:
        return labels[bare], ""

    match = _LABEL_RE.match(candidate)
    if match is None:
        return None
    label = match.group("label").strip().lower()
    if label not in labels:
        return None
    return labels[label], match.group("rest").strip()


def _labelled_lists(
    lines: Iterable[Line],
    labels: dict[str, str],
    *,
    inline_separator: str,
) -> dict[str, list[str]]:
    """Group list items under the most recent label line."""
    groups: dict[str, list[str]] = {name: [] for name in set(labels.values())}
    current: str | None = None
    for _, text in lines:
        if not text.strip():
            continue
        labelled = _match_label(text, labels)
        if labelled is not None:
            current, rest = labelled
            groups[current].extend(
                part.strip()
                for part in rest.split(inline_separator)
                if part.strip()
            )
            continue
        item = split_list_item(text)
        if item is not None and current is not None:
            if item[1]:
                groups[current].append(item[1])
            continue
        if text.lstrip().startswith("#"):
            current = None
    return groups


def _extract_options(body: Sequence[Line]) -> tuple[EvaluatedOption, ...]:
    options: list[EvaluatedOption] = []
    for name, line, lines in _split_subsections(body):
        groups = _labelled_lists(lines, _OPTION_LABELS, inline_separator=";")
        options.append(
            EvaluatedOption(
                name=name,
                line=line,
                pros=tuple(groups["pros"]),
                cons=tuple(groups["cons"]),
            )
        )
    return tuple(options)


def _split_row(text: str) -> list[str]:
    stripped = text.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    cells = stripped.replace("\\|", "\x00").split("|")
    return [cell.replace("\x00", "|").strip() for cell in cells]


def _starts_table(body: Sequence[Line], index: int) -> bool:
    """A row opens a table if it has a leading pipe or a separator row follows."""
    text = body[index][1].strip()
    if text.startswith("|"):
        return True
    if "|" not in text or index + 1 >= len(body):
        return False
    following = body[index + 1][1].strip()
    return "|" in following and bool(_TABLE_SEPARATOR_RE.match(following))


def _first_table(body: Sequence[Line]) -> list[Line]:
    """Return the lines of the first pipe table in *body*, separator excluded.

    Rows without outer pipes are accepted once the header row is followed
    by a delimiter row, as GitHub-flavoured Markdown allows.
    """
    table: list[Line] = []
    for index, (number, text) in enumerate(body):
        if table:
            if "|" not in text or not text.strip():
                break
            table.append((number, text))
        elif _starts_table(body, index):
            table.append((number, text))
    if len(table) >= 2 and _TABLE_SEPARATOR_RE.match(table[1][1].strip()):
        del table[1]
    return table


def _extract_matrix(body: Sequence[Line]) -> ComparisonMatrix | None:
    table = _first_table(body)
    if not table:
        return None
    header_line, header_text = table[0]
    header = _split_row(header_text)
    columns = tuple(strip_decoration(cell) for cell in header[1:])

    rows: list[MatrixRow] = []
    for number, text in table[1:]:
        cells = _split_row(text)
        values = [strip_decoration(cell) for cell in cells[1:]]
        if len(values) < len(columns):
            values.extend([""] * (len(columns) - len(values)))
        rows.append(
            MatrixRow(
                criterion=strip_decoration(cells[0]) if cells else "",
                cells=tuple(values),
                line=number,
            )
        )
    return ComparisonMatrix(
        line=header_line,
        criterion_header=strip_decoration(header[0]) if header else "",
        option_columns=columns,
        rows=tuple(rows),
    )


def _split_tools(values: Iterable[str]) -> tuple[str, ...]:
    tools: list[str] = []
    for value in values:
        for part in value.split(","):
            cleaned = strip_decoration(part).strip("`").strip()
            if cleaned:
                tools.append(cleaned)
    return tuple(tools)


def _extract_phases(body: Sequence[Line]) -> tuple[Phase, ...]:
    subsections = _split_subsections(body)
    if subsections:
        phases: list[Phase] = []
        for name, line, lines in subsections:
            groups = _labelled_lists(lines, _PHASE_LABELS, inline_separator="\x00")
            phases.append(
                Phase(
                    name=name,
                    line=line,
                    tools=_split_tools(groups["tools"]),
                    purposes=tuple(groups["purposes"]),
                )
            )
        return tuple(phases)
    return _extract_phase_table(body)


def _extract_phase_table(body: Sequence[Line]) -> tuple[Phase, ...]:
    """Read phases from a ``| Phase | Tools | Purpose |`` style table."""
    table = _first_table(body)
    if not table:
        return ()
    header = [normalize_heading(cell) for cell in _split_row(table[0][1])]

    def column(*names: str) -> int | None:
        return next(
            (i for i, cell in enumerate(header) if any(n in cell for n in names)),
            None,
        )

    phase_col = column("phase")
    tools_col = column("tool")
    purpose_col = column("purpose", "goal")
    if phase_col is None or tools_col is None or purpose_col is None:
        return ()

    phases: list[Phase] = []
    for number, text in table[1:]:
        cells = _split_row(text)

        def cell(index: int) -> str:
            return strip_decoration(cells[index]) if index < len(cells) else ""

        purpose = cell(purpose_col)
        phases.append(
            Phase(
                name=cell(phase_col),
                line=number,
                tools=_split_tools([cells[tools_col]] if tools_col < len(cells) else []),
                purposes=(purpose,) if purpose else (),
            )
        )
    return tuple(phases)


def _top_level_items(body: Sequence[Line]) -> list[Line]:
    """Return list items at the shallowest indentation found in *body*."""
    items: list[tuple[int, int, str]] = []
    for number, text in body:
        item = split_list_item(text)
        if item is not None and item[1]:
            items.append((number, item[0], item[1]))
    if not items:
        return []
    shallowest = min(indent for _, indent, _ in items)
    return [(number, text) for number, indent, text in items if indent == shallowest]


def _make_reference(line: int, text: str) -> Reference:
    match = _URL_RE.search(text)
    return Reference(text=text, line=line, url=match.group(0) if match else None)
