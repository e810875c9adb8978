"""
analyzer/parser.py — analiza struktury tekstu po OCR.

Architektura:
  raw_text → split_lines() → linie niepuste z numerami
  → ekstraktory pełnotekstowe (typ dokumentu, strony, data) → key_information
  → detect_tables() → wiersze tabel wyłączone z dalszej segmentacji
  → segment_clauses() ALBO segment_sections()
  → odwołania prawne / definicje / podpisy z każdej linii
  → StructuredContent

Kluczowe funkcje publiczne:
  analyze(raw_text, file_name_hint)                      -> StructuredContent
  extract_metadata(raw_text, file_name_hint, confidence) -> OCRMetadata
  analyze_document(raw, confidence)                      -> ExtractedDocument

Analizator jest czystą funkcją wejścia: brak stanu między wywołaniami,
brak I/O, brak znaczników czasu w wyniku.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from data_model.documents import (
    ExtractedDocument,
    OCRMetadata,
    RawDocument,
    StructuredContent,
)
from analyzer.blocks import detect_signatures, detect_tables, split_lines
from analyzer.classifier import match_definition, match_legal_reference
from analyzer.extractors import (
    classify_document_type,
    count_words,
    determine_confidentiality,
    estimate_page_count,
    extract_date_info,
    extract_dates,
    extract_document_type_info,
    extract_keywords,
    extract_parties,
    extract_party_info,
    find_legal_terms,
    recognition_quality,
)
from analyzer.segmenter import (
    find_title,
    has_clause_markers,
    segment_clauses,
    segment_sections,
)

log = logging.getLogger(__name__)


def _require_text(raw_text: object) -> str:
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text musi być str, otrzymano {type(raw_text).__name__}")
    return raw_text


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def analyze(raw_text: str, file_name_hint: str = "") -> StructuredContent:
    """
    Buduje StructuredContent z surowego tekstu.

    Nigdy nie rzuca dla wejścia typu str (także pustego). TypeError
    dla None / innego typu to błąd programisty po stronie wywołującego.
    """
    text = _require_text(raw_text)
    result = StructuredContent()
    key_info = result.key_information

    # Krok 1: ekstraktory pełnotekstowe (stała kolejność, pierwszy zapis wygrywa)
    extract_document_type_info(text, file_name_hint or "", key_info)
    extract_party_info(text, key_info)
    extract_date_info(text, key_info)

    # Krok 2: linie niepuste + tabele
    source_lines = split_lines(text)
    result.tables, consumed = detect_tables(source_lines)
    body = [line.text for idx, line in enumerate(source_lines) if idx not in consumed]

    # Krok 3: tytuł i segmentacja (klauzule albo sekcje)
    result.title = find_title(body)
    if has_clause_markers(body):
        result.clauses = segment_clauses(body)
    else:
        result.sections = segment_sections(body, key_info)

    # Krok 4: cechy liniowe niezależne od granic sekcji
    all_lines = [line.text for line in source_lines]
    _collect_line_features(all_lines, result)
    result.signatures = detect_signatures(all_lines)

    log.debug(
        "analyze(%s): %d linii, %d sekcji, %d klauzul, %d tabel, %d podpisów",
        file_name_hint or "-", len(source_lines), len(result.sections),
        len(result.clauses), len(result.tables), len(result.signatures),
    )
    return result


def extract_metadata(
    raw_text: str,
    file_name_hint: str = "",
    confidence: float = 1.0,
    mime_type_hint: str = "",
) -> OCRMetadata:
    """Metadane OCR wyliczane jednorazowo dla tekstu; confidence przekazywane bez zmian."""
    text = _require_text(raw_text)
    parties = extract_parties(text)
    return OCRMetadata(
        confidence=confidence,
        page_count=estimate_page_count(text),
        parties=parties,
        dates=extract_dates(text),
        keywords=extract_keywords(text),
        legal_terms=find_legal_terms(text),
        document_type=classify_document_type(text, file_name_hint or ""),
        confidentiality_level=determine_confidentiality(text),
        total_words=count_words(text),
        total_chars=len(text),
        file_name=file_name_hint or None,
        mime_type=mime_type_hint or None,
        author=parties[0] if parties else "Unknown",
        recognition_quality=recognition_quality(confidence),
    )


def analyze_document(raw: RawDocument, confidence: float = 1.0) -> ExtractedDocument:
    """Struktura + metadane dla jednego dokumentu."""
    return ExtractedDocument(
        text=raw.text,
        confidence=confidence,
        metadata=extract_metadata(raw.text, raw.file_name_hint, confidence, raw.mime_type_hint),
        structured=analyze(raw.text, raw.file_name_hint),
    )


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _collect_line_features(lines: Sequence[str], result: StructuredContent) -> None:
    """Odwołania prawne (bez duplikatów) i definicje (ostatni zapis wygrywa)."""
    seen = set(result.legal_references)
    for line in lines:
        reference = match_legal_reference(line)
        if reference and reference not in seen:
            seen.add(reference)
            result.legal_references.append(reference)

        definition = match_definition(line)
        if definition:
            term, text = definition
            result.definitions[term] = text
