"""
certificates/section65b.py — certyfikaty Section 65B (Indian Evidence Act, 1872).

Certyfikat wiąże dokument z osobą poświadczającą i skrótem treści:
  generate_certificate()    — nowy rekord Certificate (ważny 5 lat)
  verify_certificate()      — status / termin / zgodność skrótu z bieżącą treścią
  render_certificate_text() — tekst certyfikatu do pobrania

Znacznik czasu jest zawsze przekazywany przez wywołującego (now=...).
"""

from __future__ import annotations

import hashlib
import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeAlias

from data_model.records import Certificate, CertificateStatus, Document

log = logging.getLogger(__name__)

VALIDITY_YEARS = 5
CERTIFICATE_ID_PREFIX = "CERT-"
_ID_ALPHABET = string.ascii_uppercase + string.digits

VALID_MESSAGE = "Certificate is valid and conforms to Section 65B requirements"


@dataclass(frozen=True, slots=True)
class Issuer:
    name: str
    designation: str = ""
    organization: str = ""


@dataclass(frozen=True, slots=True)
class VerificationResult:
    is_valid: bool
    message: str


Digest: TypeAlias = Callable[[bytes], Any]


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def new_certificate_id() -> str:
    return CERTIFICATE_ID_PREFIX + "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))


def document_hash(document: Document, digest: Digest = hashlib.sha256) -> str:
    """Skrót treści dokumentu w formacie "<algorytm>-<hex>", np. "sha256-..."."""
    payload = (document.content or "").encode("utf-8")
    h = digest(payload)
    return f"{h.name}-{h.hexdigest()}"


def _add_years(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        # 29 lutego → 28 lutego
        return moment.replace(year=moment.year + years, day=28)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def generate_certificate(
    document: Document,
    issuer: Issuer,
    *,
    now: datetime,
    digest: Digest = hashlib.sha256,
) -> Certificate:
    if not issuer.name.strip():
        raise ValueError("Certyfikat wymaga nazwy osoby poświadczającej")

    cert = Certificate(
        id=new_certificate_id(),
        document_id=document.id,
        issued_at=now.isoformat(),
        expires_at=_add_years(now, VALIDITY_YEARS).isoformat(),
        issuer_name=issuer.name,
        issuer_designation=issuer.designation,
        issuer_organization=issuer.organization,
        document_hash=document_hash(document, digest),
    )
    log.debug("Wystawiono %s dla dokumentu %s", cert.id, document.id)
    return cert


def verify_certificate(
    certificate: Certificate,
    document: Document,
    *,
    now: datetime,
    digest: Digest = hashlib.sha256,
) -> VerificationResult:
    if certificate.document_id != document.id:
        return VerificationResult(False, "Certificate was issued for a different document.")
    if certificate.status == CertificateStatus.REVOKED:
        return VerificationResult(False, "Certificate has been revoked.")
    if certificate.status == CertificateStatus.EXPIRED or now >= datetime.fromisoformat(certificate.expires_at):
        return VerificationResult(False, "Certificate has expired. Please regenerate the certificate.")
    if document_hash(document, digest) != certificate.document_hash:
        return VerificationResult(
            False,
            "Certificate validation failed: the document has changed since it was certified. "
            "Please regenerate the certificate.",
        )
    return VerificationResult(True, VALID_MESSAGE)


_BODY = """\
This is to certify that this electronic record is generated by a computer system in the ordinary course of activities of DocuLegalize.

The computer output containing this information is produced by the computer in the ordinary course of the activities of the owner.

The information contained in this electronic record is derived from the computer system during the period over which the computer was used regularly to store or process information for the purpose of any activities regularly carried on over that period by the person having lawful control over the use of the computer.

During said period of time, information of the kind contained in the electronic record was regularly fed into the computer in the ordinary course of the said activities.

The computer was operating properly and the accuracy of the information is not disputed."""


def render_certificate_text(certificate: Certificate, document: Document) -> str:
    """Tekst certyfikatu; strony, daty i typ dokumentu dołączane, gdy są w metadanych."""
    lines = [
        "SECTION 65B CERTIFICATE",
        "",
        f"Document: {document.name}",
        f"Certificate ID: {certificate.id}",
        f"Issued Date: {certificate.issued_at}",
        f"Valid Until: {certificate.expires_at}",
        "",
        _BODY,
        "",
    ]

    meta = document.metadata or {}
    details = []
    if meta.get("document_type"):
        details.append(f"Document Type: {meta['document_type']}")
    if meta.get("parties"):
        details.append(f"Parties: {', '.join(meta['parties'])}")
    if meta.get("dates"):
        details.append(f"Dates: {', '.join(meta['dates'])}")
    if details:
        lines += ["Document Details:", *details, ""]

    lines += [
        "Certifier Information:",
        f"Name: {certificate.issuer_name}",
        f"Designation: {certificate.issuer_designation or '-'}",
        f"Organization: {certificate.issuer_organization or '-'}",
        "",
        f"SHA256 Hash: {certificate.document_hash}",
        "",
        f"I, {certificate.issuer_name}, hereby certify that the information contained in this "
        "certificate is true and correct to the best of my knowledge and belief.",
        "",
        "This certificate is issued in accordance with Section 65B of the Indian Evidence Act, 1872.",
    ]
    return "\n".join(lines) + "\n"
