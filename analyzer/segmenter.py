"""
analyzer/segmenter.py — segmentacja linii na klauzule albo sekcje.

Tryb klauzul (gdy w tekście jest choć jeden znacznik klauzuli):
  automat OutsideClause / InsideClause(bieżąca klauzula)
  - znacznik klauzuli zamyka poprzednią i otwiera nową (bez scalania numerów)
  - treść klauzuli = proza przed pierwszą podklauzulą; proza po pierwszej
    podklauzuli nie trafia do modelu
  - linie przed pierwszą klauzulą nie należą do żadnej klauzuli
  - powrót do trybu sekcji nie jest możliwy w obrębie dokumentu

Tryb sekcji (brak znaczników klauzul):
  liniowy skan; nagłówek zamyka bieżącą sekcję (jeśli ma treść) i otwiera
  nową; dla nagłówka uruchamiany jest ekstraktor key information.
"""

from __future__ import annotations

from collections.abc import Sequence

from data_model.common import LineKind
from data_model.documents import Clause, Section, Subclause
from analyzer.classifier import classify_line, match_clause_marker, take_clause_title
from analyzer.extractors import extract_heading_info

# Ile linii po nagłówku trafia do kontekstu ekstraktora key information.
_HEADING_CONTEXT_LINES = 2


def has_clause_markers(lines: Sequence[str]) -> bool:
    return any(match_clause_marker(line) for line in lines)


def find_title(lines: Sequence[str]) -> str | None:
    """
    Pierwsza linia sklasyfikowana jako nagłówek.

    Po pierwszym znaczniku klauzuli linie "1.1 ..." są podklauzulami,
    nie nagłówkami.
    """
    in_clause = False
    for line in lines:
        kind = classify_line(line, in_clause=in_clause).kind
        if kind is LineKind.HEADING:
            return line
        if kind is LineKind.CLAUSE_MARKER:
            in_clause = True
    return None


# ---------------------------------------------------------------------------
# Klauzule
# ---------------------------------------------------------------------------

def segment_clauses(lines: Sequence[str]) -> list[Clause]:
    clauses: list[Clause] = []
    current: Clause | None = None
    prose: list[str] = []
    content_closed = False  # True po pierwszej podklauzuli bieżącej klauzuli

    def _close_content() -> None:
        nonlocal content_closed
        if current is not None and not content_closed:
            current.content = "\n".join(prose).strip()
            content_closed = True

    def _flush() -> None:
        nonlocal current, prose, content_closed
        if current is None:
            return
        _close_content()
        clauses.append(current)
        current = None
        prose = []
        content_closed = False

    i = 0
    while i < len(lines):
        line = classify_line(lines[i], in_clause=current is not None)

        if line.kind is LineKind.CLAUSE_MARKER:
            _flush()
            title = line.title
            if title is None:
                title = take_clause_title(lines, i)
                if title is not None:
                    i += 1  # linia tytułu zużyta
            current = Clause(number=line.number or "", title=title, content="")

        elif current is None:
            pass  # preambuła przed pierwszą klauzulą

        elif line.kind is LineKind.SUBCLAUSE_MARKER:
            _close_content()
            current.subclauses.append(Subclause(number=line.number or "", content=line.title or ""))

        elif not content_closed:
            prose.append(line.text)

        i += 1

    _flush()
    return clauses


# ---------------------------------------------------------------------------
# Sekcje
# ---------------------------------------------------------------------------

def segment_sections(
    lines: Sequence[str],
    key_information: dict[str, str],
) -> list[Section]:
    sections: list[Section] = []

    heading: str | None = None
    level = 1
    body: list[str] = []

    def _flush() -> None:
        content = "\n".join(body).strip()
        if content:
            sections.append(Section(heading=heading, content=content, level=level))

    for i, text in enumerate(lines):
        line = classify_line(text)
        if line.kind is LineKind.HEADING:
            _flush()
            heading = text
            level = line.level if line.level is not None else 1
            body = []
            extract_heading_info(text, lines[i + 1:i + 1 + _HEADING_CONTEXT_LINES], key_information)
        else:
            body.append(text)

    _flush()
    return sections
