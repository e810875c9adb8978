"""
pdf/text_cleaner.py — oczyszczanie tekstu PDF przed analizą struktury.

Co usuwamy:
  - Nagłówki/stopki stron (tekst blisko krawędzi, powtarzający się)
  - Numery stron ("7", "- 7 -", "Page 7", "Page 7 of 12")
  - Artefakty łamania wyrazów z myślnikami ("agree-\nment" → "agreement")
  - Podwójne spacje w środku linii

Co zachowujemy:
  - Podwójne \n\n między akapitami (bloki z dużą przerwą pionową)
  - Pojedyncze \n wewnątrz bloku
  - Odstępy 3+ spacji i tabulatory (separatory kolumn tabel)
  - Linie podkreśleń pod podpisami ("__________")

Format wyjściowy: plain text z \n i \n\n.
"""

from __future__ import annotations

import re
from collections import defaultdict

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

# Próg odległości od krawędzi strony (pt); blok bliżej krawędzi to
# potencjalny nagłówek/stopka.
_MARGIN_THRESHOLD_PT = 50.0

# Minimalna liczba stron z tym samym tekstem przy krawędzi.
_REPEAT_MIN_PAGES = 2

# Przerwa pionowa (pt), powyżej której bloki rozdziela pusta linia.
_PARAGRAPH_GAP_PT = 12.0

_PAGE_NUMBER_RE = re.compile(
    r"^\s*(?:-\s*\d{1,4}\s*-|(?:page\s+)?\d{1,4}(?:\s+of\s+\d{1,4})?)\s*$",
    re.IGNORECASE,
)

_HYPHEN_BREAK_RE = re.compile(r"(\w)-\n(\w)")

# Dokładnie dwie spacje między znakami; dłuższe odstępy to kolumny tabeli.
_DOUBLE_SPACE_RE = re.compile(r"(?<=\S) {2}(?=\S)")


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def collect_repeated_texts(pages_blocks: list[list[dict]]) -> set[str]:
    """
    Teksty bloków przy krawędzi strony powtarzające się na co najmniej
    _REPEAT_MIN_PAGES stronach (nagłówki/stopki do usunięcia).

    pages_blocks: lista stron; każda strona to lista bloków PyMuPDF
                  (dict z kluczami 'type', 'bbox', 'lines', 'page_height').
    """
    text_page_count: dict[str, int] = defaultdict(int)

    for page_blocks in pages_blocks:
        page_height = page_blocks[0].get("page_height", 0) if page_blocks else 0
        seen_on_page: set[str] = set()
        for block in page_blocks:
            if block.get("type") != 0:
                continue
            y0, y1 = block["bbox"][1], block["bbox"][3]
            if not (y0 < _MARGIN_THRESHOLD_PT or y1 > page_height - _MARGIN_THRESHOLD_PT):
                continue
            text = block_text(block).strip()
            if text and text not in seen_on_page:
                seen_on_page.add(text)
                text_page_count[text] += 1

    return {t for t, c in text_page_count.items() if c >= _REPEAT_MIN_PAGES}


def clean_block_text(block: dict, repeated_texts: set[str]) -> str | None:
    """
    Oczyszcza pojedynczy blok tekstowy.

    Zwraca None, jeśli blok należy pominąć (obraz, nagłówek/stopka,
    numer strony, pusty blok).
    """
    if block.get("type") != 0:
        return None

    raw = block_text(block).strip()
    if not raw or raw in repeated_texts or _PAGE_NUMBER_RE.match(raw):
        return None

    text = _HYPHEN_BREAK_RE.sub(r"\1\2", raw)
    text = _DOUBLE_SPACE_RE.sub(" ", text)
    return "\n".join(line.rstrip() for line in text.splitlines()).strip()


def join_blocks(cleaned_blocks: list[str], gaps: list[float]) -> str:
    """
    Scala oczyszczone bloki w jeden tekst.

    gaps[i] = przerwa pionowa (pt) między blokiem i a i+1;
    duża przerwa → \n\n, mała → \n.
    """
    if not cleaned_blocks:
        return ""

    parts: list[str] = [cleaned_blocks[0]]
    for i, text in enumerate(cleaned_blocks[1:]):
        gap = gaps[i] if i < len(gaps) else 0.0
        parts.append("\n\n" if gap > _PARAGRAPH_GAP_PT else "\n")
        parts.append(text)

    return re.sub(r"\n{3,}", "\n\n", "".join(parts)).strip()


def block_text(block: dict) -> str:
    """Tekst bloku PyMuPDF (lines → spans)."""
    return "\n".join(
        "".join(span.get("text", "") for span in line.get("spans", []))
        for line in block.get("lines", [])
    )
