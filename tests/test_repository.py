"""
Tests for store.repository — in-memory, JSON-file and PostgreSQL repositories.
"""

import datetime as dt
import json

import pytest

from analyzer import analyze_document
from data_model.documents import RawDocument
from data_model.records import Certificate, CertificateStatus, Document
from store.repository import (
    CertificateNotFoundError,
    DocumentNotFoundError,
    InMemoryDocumentRepository,
    JsonFileDocumentRepository,
    PostgresDocumentRepository,
    certificate_from_dict,
    certificate_to_dict,
    save_extracted_text,
)


def _doc(doc_id: str = "doc-1", **kwargs) -> Document:
    values = dict(name=f"{doc_id}.txt", type="text", size="0.1 MB", date="2024-01-15")
    values.update(kwargs)
    return Document(id=doc_id, **values)


def _cert(cert_id: str = "CERT-ABC123", document_id: str = "doc-1", **kwargs) -> Certificate:
    values = dict(
        issued_at="2024-01-15T10:00:00+00:00",
        expires_at="2029-01-15T10:00:00+00:00",
        issuer_name="Asha Rao",
        issuer_designation="Records Officer",
        issuer_organization="DocuLegalize",
        document_hash="sha256-abc",
    )
    values.update(kwargs)
    return Certificate(id=cert_id, document_id=document_id, **values)


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryDocumentRepository()
    return JsonFileDocumentRepository(tmp_path / "store.json")


# ── Shared contract ──────────────────────────────────────────────────

class TestRepositoryContract:

    def test_put_get_list(self, repo):
        repo.put(_doc("a"))
        repo.put(_doc("b"))
        assert repo.get("a").name == "a.txt"
        assert [d.id for d in repo.list()] == ["a", "b"]

    def test_put_replaces(self, repo):
        repo.put(_doc("a"))
        repo.put(_doc("a", verified=True))
        assert repo.get("a").verified is True
        assert len(repo.list()) == 1

    def test_get_unknown(self, repo):
        with pytest.raises(DocumentNotFoundError) as exc_info:
            repo.get("missing")
        assert exc_info.value.document_id == "missing"
        assert str(exc_info.value) == "Document not found: missing"

    def test_delete(self, repo):
        repo.put(_doc("a"))
        assert repo.delete("a") is True
        assert repo.list() == []

    def test_delete_unknown_is_noop(self, repo):
        repo.put(_doc("a"))
        assert repo.delete("missing") is False
        assert [d.id for d in repo.list()] == ["a"]

    def test_certificates(self, repo):
        repo.put(_doc("doc-1"))
        repo.put(_doc("doc-2"))
        repo.put_certificate(_cert("CERT-AAAAAA", "doc-1"))
        repo.put_certificate(_cert("CERT-BBBBBB", "doc-2"))
        assert repo.get_certificate("CERT-AAAAAA").document_id == "doc-1"
        assert [c.id for c in repo.list_certificates("doc-2")] == ["CERT-BBBBBB"]
        assert len(repo.list_certificates()) == 2

    def test_unknown_certificate(self, repo):
        with pytest.raises(CertificateNotFoundError):
            repo.get_certificate("CERT-NOPE00")

    def test_delete_removes_certificates(self, repo):
        repo.put(_doc("doc-1"))
        repo.put_certificate(_cert("CERT-AAAAAA", "doc-1"))
        repo.delete("doc-1")
        assert repo.list_certificates() == []

    def test_save_extracted_text(self, repo, service_agreement):
        repo.put(_doc("doc-1"))
        extracted = analyze_document(RawDocument(service_agreement, "doc-1.txt"), 0.8)
        updated = save_extracted_text(repo, "doc-1", extracted)

        stored = repo.get("doc-1")
        assert stored == updated
        assert stored.content == service_agreement
        assert stored.metadata["document_type"] == "Agreement"
        assert stored.metadata["confidence"] == 0.8
        assert stored.structured["title"] == "SERVICE AGREEMENT"
        assert stored.name == "doc-1.txt"

    def test_save_extracted_text_unknown_document(self, repo):
        extracted = analyze_document(RawDocument("text"))
        with pytest.raises(DocumentNotFoundError):
            save_extracted_text(repo, "missing", extracted)


# ── JSON file specifics ──────────────────────────────────────────────

class TestJsonFile:

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        first = JsonFileDocumentRepository(path)
        first.put(_doc("a", content="hello", metadata={"dates": ["01/01/2024"]}))
        first.put_certificate(_cert("CERT-AAAAAA", "a", status=CertificateStatus.REVOKED))

        second = JsonFileDocumentRepository(path)
        assert second.get("a") == first.get("a")
        assert second.get_certificate("CERT-AAAAAA").status is CertificateStatus.REVOKED

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["certificates"][0]["status"] == "revoked"

    def test_missing_file_is_empty(self, tmp_path):
        repo = JsonFileDocumentRepository(tmp_path / "none.json")
        assert repo.list() == []
        assert not (tmp_path / "none.json").exists()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(ValueError, match="Uszkodzony"):
            JsonFileDocumentRepository(path)


def test_certificate_dict_round_trip():
    cert = _cert(status=CertificateStatus.EXPIRED)
    data = certificate_to_dict(cert)
    assert data["status"] == "expired"
    assert certificate_from_dict(data) == cert


# ── PostgreSQL (fake connection) ─────────────────────────────────────

class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=()):
        self.conn.executed.append((" ".join(sql.split()), params))
        self.rowcount = self.conn.rowcount

    def fetchall(self):
        return self.conn.rows


class FakeConnection:
    def __init__(self, rows=None, rowcount=1):
        self.rows = rows or []
        self.rowcount = rowcount
        self.executed: list[tuple[str, tuple]] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


class TestPostgres:

    def test_get_maps_row(self):
        row = ("doc-1", "a.pdf", "pdf", "1.0 MB", dt.date(2024, 1, 15), True, "text",
               {"document_type": "Invoice"}, None)
        conn = FakeConnection(rows=[row])
        doc = PostgresDocumentRepository(lambda: conn).get("doc-1")

        assert doc == Document(
            id="doc-1", name="a.pdf", type="pdf", size="1.0 MB", date="2024-01-15",
            verified=True, content="text", metadata={"document_type": "Invoice"}, structured=None,
        )
        sql, params = conn.executed[0]
        assert sql.startswith("SELECT id, name, type")
        assert params == ("doc-1",)
        assert conn.closed

    def test_get_unknown(self):
        repo = PostgresDocumentRepository(lambda: FakeConnection(rows=[]))
        with pytest.raises(DocumentNotFoundError):
            repo.get("missing")

    def test_put_wraps_json_columns(self):
        conn = FakeConnection()
        doc = _doc("doc-1", metadata={"k": "v"}, structured={"title": None})
        PostgresDocumentRepository(lambda: conn).put(doc)

        sql, params = conn.executed[0]
        assert sql.startswith("INSERT INTO document")
        assert "ON CONFLICT (id) DO UPDATE" in sql
        assert params[0] == "doc-1"
        assert params[7].adapted == {"k": "v"}
        assert params[8].adapted == {"title": None}

    def test_put_without_structure(self):
        conn = FakeConnection()
        PostgresDocumentRepository(lambda: conn).put(_doc("doc-1"))
        assert conn.executed[0][1][8] is None

    def test_delete_uses_rowcount(self):
        assert PostgresDocumentRepository(lambda: FakeConnection(rowcount=1)).delete("a") is True
        assert PostgresDocumentRepository(lambda: FakeConnection(rowcount=0)).delete("a") is False

    def test_certificate_row_timestamps(self):
        issued = dt.datetime(2024, 1, 15, 10, 0, tzinfo=dt.timezone.utc)
        expires = dt.datetime(2029, 1, 15, 10, 0, tzinfo=dt.timezone.utc)
        row = ("CERT-ABC123", "doc-1", issued, expires, "Asha Rao", "Records Officer",
               "DocuLegalize", "sha256-abc", "valid")
        conn = FakeConnection(rows=[row])
        cert = PostgresDocumentRepository(lambda: conn).get_certificate("CERT-ABC123")
        assert cert == _cert()

    def test_list_certificates_filter(self):
        conn = FakeConnection(rows=[])
        PostgresDocumentRepository(lambda: conn).list_certificates("doc-1")
        sql, params = conn.executed[0]
        assert "WHERE document_id = %s" in sql
        assert params == ("doc-1",)

    def test_put_certificate_status_as_text(self):
        conn = FakeConnection()
        PostgresDocumentRepository(lambda: conn).put_certificate(_cert(status=CertificateStatus.REVOKED))
        assert conn.executed[0][1][-1] == "revoked"
