"""
Encje trwałe: dokument i certyfikat Section 65B.

Document odpowiada rekordowi w repozytorium dokumentów; pola metadata
i structured przechowują słownikowe zrzuty OCRMetadata / StructuredContent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


@dataclass(slots=True)
class Document:
    """
    Dokument w repozytorium.

    - id:         identyfikator (klucz repozytorium)
    - name:       nazwa pliku źródłowego
    - type:       "pdf" | "image" | "text" | "html"
    - size:       rozmiar czytelny dla człowieka, np. "2.4 MB"
    - date:       data dodania (ISO, tylko dzień)
    - verified:   czy wystawiono ważny certyfikat
    - content:    wyekstrahowany tekst
    - metadata:   zrzut OCRMetadata (asdict)
    - structured: zrzut StructuredContent (asdict)
    """
    id: str
    name: str
    type: str
    size: str
    date: str
    verified: bool = False
    content: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    structured: dict[str, Any] | None = None


class CertificateStatus(StrEnum):
    VALID   = "valid"
    EXPIRED = "expired"
    REVOKED = "revoked"


@dataclass(slots=True)
class Certificate:
    """Certyfikat dopuszczalności dowodu elektronicznego (Section 65B)."""
    id: str                      # "CERT-" + 6 znaków
    document_id: str
    issued_at: str               # ISO 8601
    expires_at: str              # ISO 8601
    issuer_name: str
    issuer_designation: str
    issuer_organization: str
    document_hash: str           # "<algorytm>-<hex>", np. "sha256-<hex>"
    status: CertificateStatus = CertificateStatus.VALID
