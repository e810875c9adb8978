"""
analyzer/classifier.py — klasyfikacja pojedynczych linii tekstu.

Każda reguła to osobna, testowalna funkcja. classify_line() stosuje je
w stałej kolejności (pierwsza pasująca wygrywa):

  CLAUSE_MARKER → SUBCLAUSE_MARKER (tylko wewnątrz klauzuli) → HEADING
  → DEFINITION → LEGAL_REFERENCE → SIGNATURE_TRIGGER → CONTENT

Klasyfikacja nigdy nie rzuca wyjątku — niedopasowana linia to CONTENT.
"""

from __future__ import annotations

from collections.abc import Sequence

from data_model.common import ClassifiedLine, LineKind
from analyzer.line_patterns import (
    ACT_REFERENCE_RE,
    CLAUSE_RE,
    CLAUSE_TITLE_DASH_RE,
    DEFAULT_HEADING_LEVEL,
    DEFINITION_RE,
    DOTTED_HEADING_RE,
    HEADING_CHARSET_RE,
    HEADING_LEVEL_RULES,
    HEADING_MAX_LEN,
    LEGAL_REFERENCE_MAX_LEN,
    LEGAL_REFERENCE_WORDS,
    LETTERED_HEADING_RE,
    NUMBERED_HEADING_RE,
    ROMAN_HEADING_RE,
    SIGNATURE_RE,
    SIGNATURE_RULE_RE,
    STARTS_WITH_DIGIT_RE,
    SUBCLAUSE_PATTERNS,
    USC_REFERENCE_RE,
)


# ---------------------------------------------------------------------------
# Reguły pojedyncze
# ---------------------------------------------------------------------------

def match_clause_marker(line: str) -> tuple[str, str | None] | None:
    """Zwraca (numer, tytuł | None) dla znacznika klauzuli albo None."""
    m = CLAUSE_RE.match(line)
    if not m:
        return None
    title = CLAUSE_TITLE_DASH_RE.sub("", m.group(2)).strip()
    return m.group(1), title or None


def match_subclause_marker(line: str) -> tuple[str, str] | None:
    """Zwraca (numer, treść) dla znacznika podklauzuli albo None."""
    for regex in SUBCLAUSE_PATTERNS:
        m = regex.match(line)
        if m:
            return m.group(1), m.group(2).strip()
    return None


def is_heading(line: str) -> bool:
    if len(line) >= HEADING_MAX_LEN:
        return False
    return bool(
        line.isupper()
        or HEADING_CHARSET_RE.match(line)
        or NUMBERED_HEADING_RE.match(line)
        or ROMAN_HEADING_RE.match(line)
        or DOTTED_HEADING_RE.match(line)
        or LETTERED_HEADING_RE.match(line)
    )


def heading_level(line: str) -> int:
    """Poziom nagłówka wg HEADING_LEVEL_RULES; domyślnie 2."""
    for rule in HEADING_LEVEL_RULES:
        if rule.test(line):
            return rule.level
    return DEFAULT_HEADING_LEVEL


def match_definition(line: str) -> tuple[str, str] | None:
    """Zwraca (termin, definicja) dla '"X" means Y' albo None."""
    m = DEFINITION_RE.match(line)
    if not m:
        return None
    term = m.group("term").strip()
    definition = m.group("definition").strip()
    if not term or not definition:
        return None
    return term, definition


def truncate_reference(text: str, limit: int = LEGAL_REFERENCE_MAX_LEN) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def match_legal_reference(line: str) -> str | None:
    """
    Zwraca odwołanie prawne z linii (przycięte do 150 znaków + "...") albo None.

    Priorytet: "Section N of the X Act" → "N U.S.C. § M" → cała linia
    zawierająca "Section" / "Article".
    """
    m = ACT_REFERENCE_RE.search(line) or USC_REFERENCE_RE.search(line)
    if m:
        return truncate_reference(m.group(0).strip())
    if any(word in line for word in LEGAL_REFERENCE_WORDS):
        return truncate_reference(line)
    return None


def is_signature_trigger(line: str) -> bool:
    return bool(SIGNATURE_RE.search(line) or SIGNATURE_RULE_RE.search(line))


# ---------------------------------------------------------------------------
# Klasyfikacja z priorytetem
# ---------------------------------------------------------------------------

def classify_line(line: str, *, in_clause: bool = False) -> ClassifiedLine:
    """Klasyfikuje przyciętą, niepustą linię."""
    clause = match_clause_marker(line)
    if clause:
        number, title = clause
        return ClassifiedLine(LineKind.CLAUSE_MARKER, line, number=number, title=title)

    if in_clause:
        sub = match_subclause_marker(line)
        if sub:
            number, content = sub
            return ClassifiedLine(LineKind.SUBCLAUSE_MARKER, line, number=number, title=content)

    if is_heading(line):
        return ClassifiedLine(LineKind.HEADING, line, level=heading_level(line))

    if match_definition(line):
        return ClassifiedLine(LineKind.DEFINITION, line)

    if match_legal_reference(line):
        return ClassifiedLine(LineKind.LEGAL_REFERENCE, line)

    if is_signature_trigger(line):
        return ClassifiedLine(LineKind.SIGNATURE_TRIGGER, line)

    return ClassifiedLine(LineKind.CONTENT, line)


def take_clause_title(lines: Sequence[str], index: int) -> str | None:
    """
    Podgląd jednej linii do przodu dla klauzuli bez tytułu.

    Linia lines[index + 1] staje się tytułem, jeśli istnieje, nie zaczyna
    się cyfrą i sama nie jest znacznikiem klauzuli. Wywołujący przesuwa
    kursor o 1, gdy tytuł został pobrany.
    """
    nxt = index + 1
    if nxt >= len(lines):
        return None
    candidate = lines[nxt]
    if STARTS_WITH_DIGIT_RE.match(candidate) or match_clause_marker(candidate):
        return None
    return candidate
