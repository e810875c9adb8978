"""
data_model — struktury danych DocuLegalize.

Użycie:
  from data_model import StructuredContent, Clause, OCRMetadata, Document, ...

Moduły:
  documents — RawDocument, Section, Clause, Subclause, TableRef, SignatureBlock,
              StructuredContent, OCRMetadata, ExtractedDocument
  common    — LineKind, ClassifiedLine (wynik klasyfikatora linii)
  records   — Document, Certificate, CertificateStatus (encje repozytorium)
"""

from .common import (
    LineKind,
    ClassifiedLine,
)
from .documents import (
    RawDocument,
    Section,
    Subclause,
    Clause,
    TableRef,
    SignatureBlock,
    StructuredContent,
    OCRMetadata,
    ExtractedDocument,
)
from .records import (
    Document,
    Certificate,
    CertificateStatus,
)

__all__ = [
    # common
    "LineKind",
    "ClassifiedLine",
    # documents
    "RawDocument",
    "Section",
    "Subclause",
    "Clause",
    "TableRef",
    "SignatureBlock",
    "StructuredContent",
    "OCRMetadata",
    "ExtractedDocument",
    # records
    "Document",
    "Certificate",
    "CertificateStatus",
]
