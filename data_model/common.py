"""
Typy klasyfikacji linii używane przez analizator.

LineKind to znacznik wariantu; ClassifiedLine niesie dane specyficzne dla
rodzaju (poziom nagłówka, numer i tytuł klauzuli, numer podklauzuli).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LineKind(StrEnum):
    """Rodzaj linii. Kolejność członków = kolejność reguł klasyfikatora."""
    CLAUSE_MARKER     = "clause_marker"
    SUBCLAUSE_MARKER  = "subclause_marker"
    HEADING           = "heading"
    DEFINITION        = "definition"
    LEGAL_REFERENCE   = "legal_reference"
    SIGNATURE_TRIGGER = "signature_trigger"
    CONTENT           = "content"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """
    Sklasyfikowana linia.

    - kind:   rodzaj linii
    - text:   przycięty tekst linii
    - level:  poziom nagłówka (tylko HEADING)
    - number: numer klauzuli / podklauzuli (CLAUSE_MARKER, SUBCLAUSE_MARKER)
    - title:  tytuł z tej samej linii (CLAUSE_MARKER) lub treść (SUBCLAUSE_MARKER)
    """
    kind: LineKind
    text: str
    level: int | None = None
    number: str | None = None
    title: str | None = None
