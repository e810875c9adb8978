"""
pdf/issues.py — wykrywanie problemów uniemożliwiających ekstrakcję tekstu z PDF.

  INVALID_FORMAT  — brak sygnatury %PDF- w nagłówku pliku
  ENCRYPTED       — PDF chroniony hasłem / zaszyfrowany
  SCANNED_ONLY    — same obrazy, brak warstwy tekstowej (potrzebny OCR)
  ANALYSIS_ERROR  — PyMuPDF nie potrafi otworzyć pliku
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import fitz  # PyMuPDF

log = logging.getLogger(__name__)

_HEADER_BYTES = 1024


class PdfIssue(StrEnum):
    INVALID_FORMAT = "INVALID_FORMAT"
    ENCRYPTED      = "ENCRYPTED"
    SCANNED_ONLY   = "SCANNED_ONLY"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"


_MESSAGES: dict[PdfIssue, str] = {
    PdfIssue.INVALID_FORMAT: "The file does not appear to be a valid PDF document.",
    PdfIssue.ENCRYPTED:      "The PDF is password-protected or encrypted.",
    PdfIssue.SCANNED_ONLY:   "The PDF contains only scanned images without embedded text.",
    PdfIssue.ANALYSIS_ERROR: "Failed to analyze the PDF structure.",
}


@dataclass(frozen=True, slots=True)
class PdfCheck:
    is_valid: bool
    issue: PdfIssue | None = None

    @property
    def error_message(self) -> str | None:
        return _MESSAGES[self.issue] if self.issue else None

    @property
    def is_encrypted(self) -> bool:
        return self.issue == PdfIssue.ENCRYPTED

    @property
    def is_scanned_only(self) -> bool:
        return self.issue == PdfIssue.SCANNED_ONLY

    @property
    def is_corrupted(self) -> bool:
        return self.issue in (PdfIssue.INVALID_FORMAT, PdfIssue.ANALYSIS_ERROR)

    @property
    def needs_ocr(self) -> bool:
        return self.is_scanned_only


class PdfExtractionError(Exception):
    """Ekstrakcja tekstu niemożliwa; check opisuje przyczynę."""

    def __init__(self, check: PdfCheck) -> None:
        super().__init__(pdf_error_message(check))
        self.check = check


def detect_pdf_issues(path: str | Path) -> PdfCheck:
    path = Path(path)
    with path.open("rb") as fh:
        header = fh.read(_HEADER_BYTES)
    if b"%PDF-" not in header:
        return PdfCheck(False, PdfIssue.INVALID_FORMAT)

    try:
        doc = fitz.open(str(path))
    except Exception as e:
        log.warning("PyMuPDF nie otworzył %s: %s", path, e)
        return PdfCheck(False, PdfIssue.ANALYSIS_ERROR)

    try:
        if doc.needs_pass or doc.is_encrypted:
            return PdfCheck(False, PdfIssue.ENCRYPTED)
        has_text = any(page.get_text("text").strip() for page in doc)
        has_images = any(page.get_images() for page in doc)
        if has_images and not has_text:
            return PdfCheck(False, PdfIssue.SCANNED_ONLY)
    finally:
        doc.close()

    return PdfCheck(True)


def pdf_error_message(check: PdfCheck) -> str:
    """Komunikat dla użytkownika opisujący, dlaczego tekst nie został wyekstrahowany."""
    if check.is_encrypted:
        return ("Unable to extract text: The PDF is password-protected or encrypted. "
                "Please provide an unprotected version of the document.")
    if check.is_scanned_only:
        return ("Unable to extract text: The PDF contains only scanned images without "
                "embedded text. Advanced OCR processing will be attempted.")
    if check.is_corrupted:
        return "Unable to extract text: The PDF file appears to be corrupted or invalid."
    return ("Unable to extract text: Invalid PDF structure. This may be due to the PDF "
            "being password-protected, corrupted, or containing only scanned images without OCR.")
