"""
store/repository.py — repozytorium dokumentów i certyfikatów.

Implementacje:
  InMemoryDocumentRepository     — słowniki w pamięci (testy, jednorazowe użycie)
  JsonFileDocumentRepository     — jeden plik JSON na dysku (odpowiednik localStorage)
  PostgresDocumentRepository     — tabele document / certificate (db/schema.sql)

Wszystkie spełniają protokół DocumentRepository:
  get(id) rzuca DocumentNotFoundError dla nieznanego id,
  delete(id) dla nieznanego id zwraca False (brak efektu).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Protocol

from data_model.documents import ExtractedDocument
from data_model.records import Certificate, CertificateStatus, Document

log = logging.getLogger(__name__)


class DocumentNotFoundError(KeyError):
    def __init__(self, document_id: str) -> None:
        super().__init__(document_id)
        self.document_id = document_id

    def __str__(self) -> str:
        return f"Document not found: {self.document_id}"


class CertificateNotFoundError(KeyError):
    def __init__(self, certificate_id: str) -> None:
        super().__init__(certificate_id)
        self.certificate_id = certificate_id

    def __str__(self) -> str:
        return f"Certificate not found: {self.certificate_id}"


class DocumentRepository(Protocol):
    def get(self, document_id: str) -> Document: ...
    def list(self) -> list[Document]: ...
    def put(self, document: Document) -> None: ...
    def delete(self, document_id: str) -> bool: ...
    def put_certificate(self, certificate: Certificate) -> None: ...
    def get_certificate(self, certificate_id: str) -> Certificate: ...
    def list_certificates(self, document_id: str | None = None) -> list[Certificate]: ...


# ---------------------------------------------------------------------------
# Konwersje słownikowe
# ---------------------------------------------------------------------------

def document_to_dict(document: Document) -> dict[str, Any]:
    return asdict(document)


def document_from_dict(data: dict[str, Any]) -> Document:
    return Document(
        id=str(data["id"]),
        name=data["name"],
        type=data["type"],
        size=data["size"],
        date=data["date"],
        verified=bool(data.get("verified", False)),
        content=data.get("content"),
        metadata=dict(data.get("metadata") or {}),
        structured=data.get("structured"),
    )


def certificate_to_dict(certificate: Certificate) -> dict[str, Any]:
    data = asdict(certificate)
    data["status"] = str(certificate.status)
    return data


def certificate_from_dict(data: dict[str, Any]) -> Certificate:
    return Certificate(
        id=data["id"],
        document_id=str(data["document_id"]),
        issued_at=data["issued_at"],
        expires_at=data["expires_at"],
        issuer_name=data["issuer_name"],
        issuer_designation=data.get("issuer_designation", ""),
        issuer_organization=data.get("issuer_organization", ""),
        document_hash=data["document_hash"],
        status=CertificateStatus(data.get("status", CertificateStatus.VALID)),
    )


# ---------------------------------------------------------------------------
# W pamięci
# ---------------------------------------------------------------------------

class InMemoryDocumentRepository:
    def __init__(self, documents: list[Document] | None = None) -> None:
        self._documents: dict[str, Document] = {}
        self._certificates: dict[str, Certificate] = {}
        for doc in documents or []:
            self.put(doc)

    def get(self, document_id: str) -> Document:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def list(self) -> list[Document]:
        return list(self._documents.values())

    def put(self, document: Document) -> None:
        self._documents[document.id] = document

    def delete(self, document_id: str) -> bool:
        if self._documents.pop(document_id, None) is None:
            return False
        # certyfikaty usuniętego dokumentu tracą sens
        for cert_id in [c.id for c in self._certificates.values() if c.document_id == document_id]:
            del self._certificates[cert_id]
        return True

    def put_certificate(self, certificate: Certificate) -> None:
        self._certificates[certificate.id] = certificate

    def get_certificate(self, certificate_id: str) -> Certificate:
        try:
            return self._certificates[certificate_id]
        except KeyError:
            raise CertificateNotFoundError(certificate_id) from None

    def list_certificates(self, document_id: str | None = None) -> list[Certificate]:
        return [
            c for c in self._certificates.values()
            if document_id is None or c.document_id == document_id
        ]


# ---------------------------------------------------------------------------
# Plik JSON
# ---------------------------------------------------------------------------

class JsonFileDocumentRepository(InMemoryDocumentRepository):
    """
    Repozytorium w jednym pliku JSON:
      {"documents": [...], "certificates": [...]}

    Plik jest czytany przy tworzeniu i zapisywany w całości po każdej zmianie.
    Brak pliku = puste repozytorium.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Uszkodzony plik repozytorium {self.path}: {e}") from e
        for item in data.get("documents", []):
            doc = document_from_dict(item)
            self._documents[doc.id] = doc
        for item in data.get("certificates", []):
            cert = certificate_from_dict(item)
            self._certificates[cert.id] = cert
        log.debug("Wczytano %d dokumentów z %s", len(self._documents), self.path)

    def _save(self) -> None:
        data = {
            "documents": [document_to_dict(d) for d in self._documents.values()],
            "certificates": [certificate_to_dict(c) for c in self._certificates.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def put(self, document: Document) -> None:
        super().put(document)
        self._save()

    def delete(self, document_id: str) -> bool:
        removed = super().delete(document_id)
        if removed:
            self._save()
        return removed

    def put_certificate(self, certificate: Certificate) -> None:
        super().put_certificate(certificate)
        self._save()


# ---------------------------------------------------------------------------
# PostgreSQL
# ---------------------------------------------------------------------------

_DOCUMENT_COLUMNS = "id, name, type, size, date, verified, content, metadata, structured"

_UPSERT_DOCUMENT_SQL = """
    INSERT INTO document
        (id, name, type, size, date, verified, content, metadata, structured)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
    ON CONFLICT (id) DO UPDATE SET
        name       = EXCLUDED.name,
        type       = EXCLUDED.type,
        size       = EXCLUDED.size,
        date       = EXCLUDED.date,
        verified   = EXCLUDED.verified,
        content    = EXCLUDED.content,
        metadata   = EXCLUDED.metadata,
        structured = EXCLUDED.structured
"""

_CERTIFICATE_COLUMNS = (
    "id, document_id, issued_at, expires_at, issuer_name, "
    "issuer_designation, issuer_organization, document_hash, status"
)

_UPSERT_CERTIFICATE_SQL = """
    INSERT INTO certificate
        (id, document_id, issued_at, expires_at, issuer_name,
         issuer_designation, issuer_organization, document_hash, status)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
    ON CONFLICT (id) DO UPDATE SET
        status = EXCLUDED.status
"""


class PostgresDocumentRepository:
    """
    Repozytorium na tabelach document / certificate.

    conn_factory zwraca nowe połączenie psycopg2 (np. dlz._db.get_connection);
    każda operacja działa we własnej transakcji.
    """

    def __init__(self, conn_factory: Callable[[], Any]) -> None:
        self._conn_factory = conn_factory

    def _fetch(self, sql: str, params: tuple = ()) -> list[tuple]:
        conn = self._conn_factory()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return list(cur.fetchall())
        finally:
            conn.close()

    def _execute(self, sql: str, params: tuple) -> int:
        conn = self._conn_factory()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.rowcount
        finally:
            conn.close()

    # -- dokumenty --

    @staticmethod
    def _row_to_document(row: tuple) -> Document:
        keys = [c.strip() for c in _DOCUMENT_COLUMNS.split(",")]
        data = dict(zip(keys, row))
        data["date"] = str(data["date"])
        return document_from_dict(data)

    def get(self, document_id: str) -> Document:
        rows = self._fetch(
            f"SELECT {_DOCUMENT_COLUMNS} FROM document WHERE id = %s", (document_id,)
        )
        if not rows:
            raise DocumentNotFoundError(document_id)
        return self._row_to_document(rows[0])

    def list(self) -> list[Document]:
        rows = self._fetch(f"SELECT {_DOCUMENT_COLUMNS} FROM document ORDER BY date, id")
        return [self._row_to_document(r) for r in rows]

    def put(self, document: Document) -> None:
        from psycopg2.extras import Json

        self._execute(_UPSERT_DOCUMENT_SQL, (
            document.id,
            document.name,
            document.type,
            document.size,
            document.date,
            document.verified,
            document.content,
            Json(document.metadata),
            Json(document.structured) if document.structured is not None else None,
        ))

    def delete(self, document_id: str) -> bool:
        # certificate.document_id ma ON DELETE CASCADE
        return self._execute("DELETE FROM document WHERE id = %s", (document_id,)) > 0

    # -- certyfikaty --

    @staticmethod
    def _row_to_certificate(row: tuple) -> Certificate:
        keys = [c.strip() for c in _CERTIFICATE_COLUMNS.split(",")]
        data = dict(zip(keys, row))
        for key in ("issued_at", "expires_at"):
            value = data[key]
            data[key] = value.isoformat() if hasattr(value, "isoformat") else str(value)
        return certificate_from_dict(data)

    def put_certificate(self, certificate: Certificate) -> None:
        self._execute(_UPSERT_CERTIFICATE_SQL, (
            certificate.id,
            certificate.document_id,
            certificate.issued_at,
            certificate.expires_at,
            certificate.issuer_name,
            certificate.issuer_designation,
            certificate.issuer_organization,
            certificate.document_hash,
            str(certificate.status),
        ))

    def get_certificate(self, certificate_id: str) -> Certificate:
        rows = self._fetch(
            f"SELECT {_CERTIFICATE_COLUMNS} FROM certificate WHERE id = %s", (certificate_id,)
        )
        if not rows:
            raise CertificateNotFoundError(certificate_id)
        return self._row_to_certificate(rows[0])

    def list_certificates(self, document_id: str | None = None) -> list[Certificate]:
        if document_id is None:
            rows = self._fetch(f"SELECT {_CERTIFICATE_COLUMNS} FROM certificate ORDER BY issued_at")
        else:
            rows = self._fetch(
                f"SELECT {_CERTIFICATE_COLUMNS} FROM certificate "
                "WHERE document_id = %s ORDER BY issued_at",
                (document_id,),
            )
        return [self._row_to_certificate(r) for r in rows]


# ---------------------------------------------------------------------------
# Operacje na repozytorium
# ---------------------------------------------------------------------------

def save_extracted_text(
    repo: DocumentRepository,
    document_id: str,
    extracted: ExtractedDocument,
) -> Document:
    """
    Zapisuje wynik ekstrakcji w istniejącym dokumencie.

    Nadpisuje content, metadata i structured; pozostałe pola bez zmian.
    Rzuca DocumentNotFoundError, jeśli dokument nie istnieje.
    """
    current = repo.get(document_id)
    updated = replace(
        current,
        content=extracted.text,
        metadata=asdict(extracted.metadata),
        structured=asdict(extracted.structured),
    )
    repo.put(updated)
    log.debug("Zapisano tekst dokumentu %s (%d znaków)", document_id, len(extracted.text))
    return updated
