"""
data_model/documents.py — model struktury dokumentu prawnego.

RawDocument to wejście analizatora (tekst po OCR + wskazówki z pliku).
StructuredContent to wynik: tytuł, sekcje ALBO klauzule, tabele, podpisy,
odwołania prawne, definicje i "key information".
OCRMetadata powstaje obok StructuredContent, raz na wywołanie ekstrakcji.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RawDocument:
    text: str                 # tekst po OCR (już zdekodowany Unicode)
    file_name_hint: str = ""
    mime_type_hint: str = ""


# ---------------------------------------------------------------------------
# Elementy struktury
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Section:
    heading: str | None
    content: str
    level: int                # >= 0; 1 = najwyższy


@dataclass(slots=True)
class Subclause:
    number: str               # np. "1.1", "(a)", "2)"
    content: str


@dataclass(slots=True)
class Clause:
    number: str               # np. "1", "IV"
    title: str | None
    content: str
    subclauses: list[Subclause] = field(default_factory=list)


@dataclass(slots=True)
class TableRef:
    """Wskaźnik na tabelę — treść tabeli nie jest parsowana."""
    description: str
    location: str             # 1-based numer linii pierwszego wiersza


@dataclass(slots=True)
class SignatureBlock:
    name: str | None = None
    position: str | None = None
    date: str | None = None


@dataclass(slots=True)
class StructuredContent:
    """
    Wynik analizy struktury.

    - sections i clauses wykluczają się: jeśli clauses jest niepuste,
      sections jest puste (i odwrotnie)
    - legal_references: bez duplikatów, w kolejności pierwszego wystąpienia
    - definitions: ostatni zapis wygrywa
    - key_information: pierwszy zapis wygrywa, nigdy pusty string
    """
    title: str | None = None
    sections: list[Section] = field(default_factory=list)
    clauses: list[Clause] = field(default_factory=list)
    tables: list[TableRef] = field(default_factory=list)
    signatures: list[SignatureBlock] = field(default_factory=list)
    legal_references: list[str] = field(default_factory=list)
    definitions: dict[str, str] = field(default_factory=dict)
    key_information: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Metadane OCR
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class OCRMetadata:
    confidence: float                         # 0..1, przekazywane bez zmian
    page_count: int = 1
    parties: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    legal_terms: list[str] = field(default_factory=list)
    document_type: str = "Legal Document"
    confidentiality_level: str = "Standard"
    total_words: int = 0
    total_chars: int = 0
    file_name: str | None = None
    mime_type: str | None = None
    author: str = "Unknown"
    recognition_quality: str = "high"         # high | medium | low
    creation_date: str | None = None          # ustawiane poza analizatorem
    processing_errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ExtractedDocument:
    """Tekst + metadane + struktura — to, co trafia do repozytorium."""
    text: str
    confidence: float
    metadata: OCRMetadata
    structured: StructuredContent
