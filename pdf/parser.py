"""
pdf/parser.py — tekst z warstwy tekstowej PDF jako wejście analizatora.

Architektura:
  pdf_path → detect_pdf_issues() → fitz.open() → strony → bloki PyMuPDF (dict)
  → collect_repeated_texts() → nagłówki/stopki do pominięcia
  → clean_block_text() per blok → join_blocks() per strona
  → OcrResult(text, confidence=1.0, page_count)

Kluczowe funkcje publiczne:
  extract_pdf_text(path) -> OcrResult
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import fitz  # PyMuPDF

from pdf.issues import PdfExtractionError, detect_pdf_issues
from pdf.text_cleaner import clean_block_text, collect_repeated_texts, join_blocks

log = logging.getLogger(__name__)

# Warstwa tekstowa PDF nie jest rozpoznawana, więc pewność jest pełna.
TEXT_LAYER_CONFIDENCE = 1.0


@dataclass(frozen=True, slots=True)
class OcrResult:
    text: str
    confidence: float
    page_count: int = 1


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def extract_pdf_text(path: str | Path) -> OcrResult:
    """
    Zwraca oczyszczony tekst PDF; strony rozdzielone pustą linią.

    Rzuca PdfExtractionError, gdy plik nie jest PDF, jest zaszyfrowany
    albo nie ma warstwy tekstowej.
    """
    check = detect_pdf_issues(path)
    if not check.is_valid:
        raise PdfExtractionError(check)

    doc = fitz.open(str(path))
    try:
        pages_raw = _extract_pages(doc)
    finally:
        doc.close()

    text = pages_to_text(pages_raw)
    log.debug("extract_pdf_text(%s): %d stron, %d znaków", path, len(pages_raw), len(text))
    return OcrResult(text=text, confidence=TEXT_LAYER_CONFIDENCE, page_count=max(1, len(pages_raw)))


def pages_to_text(pages_raw: list[list[dict]]) -> str:
    """Składa tekst dokumentu z bloków wszystkich stron (bez I/O)."""
    repeated = collect_repeated_texts(pages_raw)
    page_texts: list[str] = []
    for page_blocks in pages_raw:
        cleaned: list[str] = []
        gaps: list[float] = []
        prev_bottom: float | None = None
        for block in page_blocks:
            text = clean_block_text(block, repeated)
            if text is None:
                continue
            if prev_bottom is not None:
                gaps.append(block["bbox"][1] - prev_bottom)
            prev_bottom = block["bbox"][3]
            cleaned.append(text)
        page_text = join_blocks(cleaned, gaps)
        if page_text:
            page_texts.append(page_text)
    return "\n\n".join(page_texts)


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _extract_pages(doc: fitz.Document) -> list[list[dict]]:
    """Lista stron; każda strona to lista bloków PyMuPDF (dict)."""
    pages: list[list[dict]] = []
    for page in doc:
        page_dict = page.get_text("dict", flags=fitz.TEXT_PRESERVE_WHITESPACE)
        height = page.rect.height
        blocks: list[dict] = []
        for block in page_dict.get("blocks", []):
            block["page_height"] = height
            block["page_number"] = page.number + 1  # 1-based
            blocks.append(block)
        pages.append(blocks)
    return pages
