"""
analyzer/line_patterns.py — wzorce regex do klasyfikacji linii tekstu po OCR.

Zawiera:
  - CLAUSE_RE            : znacznik klauzuli "CLAUSE|Article|Section <nr> [.:] [tytuł]"
  - SUBCLAUSE_PATTERNS   : znaczniki podklauzul "1.1", "(a)", "2)"
  - HEADING_LEVEL_RULES  : reguły poziomu nagłówka (pierwsza pasująca wygrywa)
  - DEFINITION_RE        : '"termin" means definicja'
  - ACT_REFERENCE_RE,
    USC_REFERENCE_RE     : odwołania do przepisów
  - SIGNATURE_RE,
    SIGNATURE_RULE_RE    : wyzwalacze bloku podpisu
  - TABLE_COLUMN_GAP_RE  : wiersz tabeli z kolumnami rozdzielonymi spacjami
  - DATE_SHAPE_RE        : token wyglądający na datę
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


def _p(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags | re.UNICODE)


# ---------------------------------------------------------------------------
# Klauzule i podklauzule
# ---------------------------------------------------------------------------

# Numer klauzuli: cyfry arabskie albo rzymskie WIELKIMI literami
# (reszta wzorca bez rozróżniania wielkości liter).
CLAUSE_RE = _p(
    r"^(?:CLAUSE|Article|Section)\s+(\d+|(?-i:[IVXLCDM]+))\b\s*[.:]?\s*(.*)$",
    re.IGNORECASE,
)

# Separator po numerze, który nie należy do tytułu: "Article IV - Payment"
CLAUSE_TITLE_DASH_RE = _p(r"^[-–—]\s*")

SUBCLAUSE_PATTERNS: list[re.Pattern[str]] = [
    _p(r"^(\d+\.\d+)\.?\s+(\S.*)$"),        # 1.1 Treść
    _p(r"^(\([a-z]\))\s*(\S.*)$"),          # (a) Treść
    _p(r"^(\d+\)[a-z]?)\s+(\S.*)$"),        # 2) Treść, 2)a Treść
]

# Linia zaczynająca się cyfrą nie jest pobierana jako tytuł klauzuli.
STARTS_WITH_DIGIT_RE = _p(r"^\d")


# ---------------------------------------------------------------------------
# Nagłówki
# ---------------------------------------------------------------------------

HEADING_MAX_LEN = 100

HEADING_CHARSET_RE = _p(r"^[A-Z0-9\s.]{3,}$")
NUMBERED_HEADING_RE = _p(r"^\d+\.\s+[A-Z]")
ROMAN_HEADING_RE = _p(r"^[IVXLCDM]+\.\s+[A-Z]")
DOTTED_HEADING_RE = _p(r"^\d+\.\d+\.?\s+[A-Z]")
LETTERED_HEADING_RE = _p(r"^[a-z]\)\s+[A-Z]")


@dataclass(frozen=True, slots=True)
class HeadingLevelRule:
    name: str
    test: Callable[[str], bool]
    level: int


def _rx(pattern: str, flags: int = 0) -> Callable[[str], bool]:
    regex = _p(pattern, flags)
    return lambda line: regex.match(line) is not None


def _short_caps(line: str) -> bool:
    return len(line) < 20 and line.isupper()


HEADING_LEVEL_RULES: list[HeadingLevelRule] = [
    HeadingLevelRule("roman",      _rx(r"^[IVXLCDM]+\.\s"), 1),
    HeadingLevelRule("dotted",     _rx(r"^\d+\.\d+(?:\.\d+)*\.?(?:\s|$)"), 3),
    HeadingLevelRule("numbered",   _rx(r"^\d+\.(?:\s|$)"), 2),
    HeadingLevelRule("lettered",   _rx(r"^[a-z]\)", re.IGNORECASE), 4),
    HeadingLevelRule("short_caps", _short_caps, 1),
]

DEFAULT_HEADING_LEVEL = 2


# ---------------------------------------------------------------------------
# Definicje
# ---------------------------------------------------------------------------

DEFINITION_RE = _p(
    r"^[\"“”']?(?P<term>[^\"“”']{1,80}?)[\"“”']?\s+"
    r"(?:means|shall\s+mean|is\s+defined\s+as)\s+(?P<definition>\S.*)$",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Odwołania prawne
# ---------------------------------------------------------------------------

LEGAL_REFERENCE_MAX_LEN = 150

# "Section 65B of the Indian Evidence Act, 1872", "Article IV of the Code"
ACT_REFERENCE_RE = _p(
    r"\b(?:Section|Article)\s+(?:[IVXLCDM]+|\d+[A-Za-z]*(?:\(\d+\))?)\s+of\s+the\s+"
    r"(?:[A-Z][\w'&-]*,?\s+)*?(?:Act|Code|Regulations?|Statute)\b(?:,?\s*\d{4})?"
)

# "42 U.S.C. § 1983"
USC_REFERENCE_RE = _p(r"\b\d+\s+U\.S\.C\.\s*§+\s*\d+[\w.()-]*")

LEGAL_REFERENCE_WORDS = ("Section", "Article")


# ---------------------------------------------------------------------------
# Podpisy
# ---------------------------------------------------------------------------

SIGNATURE_RE = _p(r"signature|signed\s+by", re.IGNORECASE)
SIGNATURE_RULE_RE = _p(r"[_X]{10,}")
SIGNED_BY_RE = _p(r"signed\s+by[:\s]+(?P<name>[^_\n]{2,60}?)\s*$", re.IGNORECASE)

NAME_LABEL_RE = _p(r"^name\s*[:.]\s*(?P<value>.*)$", re.IGNORECASE)
POSITION_LABEL_RE = _p(
    r"^(?:title|position|designation|role|capacity)\s*[:.]\s*(?P<value>.*)$",
    re.IGNORECASE,
)
DATE_LABEL_RE = _p(r"^dated?\b\s*[:.]?\s*(?P<value>.*)$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Tabele i daty
# ---------------------------------------------------------------------------

TABLE_COLUMN_GAP_RE = _p(r"\S(?: {3,}|\t+)\S")
TABLE_CAPTION_RE = _p(r"table|schedule", re.IGNORECASE)

_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)

DATE_SHAPE_RE = _p(
    r"\b\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}\b"
    r"|\b\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2}\b"
    rf"|\b\d{{1,2}}(?:st|nd|rd|th)?\s+(?:day\s+of\s+)?{_MONTHS},?\s+\d{{4}}\b"
    rf"|\b{_MONTHS}\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b",
    re.IGNORECASE,
)
