"""
analyzer — analizator struktury dokumentów prawnych (tekst po OCR).

Publiczne API:
  analyze(raw_text, file_name_hint)                           -> StructuredContent
  extract_metadata(raw_text, file_name_hint, confidence, ...) -> OCRMetadata
  analyze_document(raw, confidence)                           -> ExtractedDocument
  classify_line(line, in_clause)                              -> ClassifiedLine
  classify_document_type(text, file_name_hint)                -> str
  find_legal_terms(text)                                      -> list[str]
"""

from .parser import analyze, analyze_document, extract_metadata
from .classifier import classify_line, heading_level, is_heading, take_clause_title
from .extractors import classify_document_type, find_legal_terms

__all__ = [
    "analyze",
    "analyze_document",
    "extract_metadata",
    "classify_line",
    "heading_level",
    "is_heading",
    "take_clause_title",
    "classify_document_type",
    "find_legal_terms",
]
