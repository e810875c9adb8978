"""
Tests for the dlz command line — commands run end to end against a JSON store.
"""

import json
from dataclasses import replace

import pytest

from dlz.cli import build_parser, main
from dlz.commands.apply_schema import SCHEMA_PATH, split_statements, statement_label
from dlz._sources import doc_id_from_url, human_size
from store.repository import JsonFileDocumentRepository


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, restore_root_logger):
    for name in ("DLZ_STORE", "DLZ_STORE_PATH", "DLZ_ISSUER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def agreement_file(tmp_path, service_agreement):
    path = tmp_path / "agreement.txt"
    path.write_text(service_agreement, encoding="utf-8")
    return path


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store.json"


def _ingest(agreement_file, store_path):
    main(["ingest", str(agreement_file), "--store-path", str(store_path)])


# ── analyze ──────────────────────────────────────────────────────────

class TestAnalyze:

    def test_json_to_file(self, agreement_file, tmp_path):
        out = tmp_path / "out.json"
        main(["analyze", str(agreement_file), "--format", "json", "--out", str(out)])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["key_information"]["Document Type"] == "Agreement"
        assert data["metadata"]["parties"] == ["ABC Corp", "XYZ Limited"]

    def test_structured_to_stdout(self, agreement_file, capsys):
        main(["analyze", str(agreement_file)])
        out = capsys.readouterr().out
        assert "KEY INFORMATION:" in out
        assert "Schedule 1 - Fees at line 10" in out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["analyze", str(tmp_path / "nope.txt")])
        assert exc_info.value.code == 1

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "scan.docx"
        path.write_bytes(b"PK")
        with pytest.raises(SystemExit) as exc_info:
            main(["analyze", str(path)])
        assert exc_info.value.code == 1

    def test_html_input(self, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<body><h1>NOTICE</h1><p>Dated: 01/02/2024</p></body>", encoding="utf-8")
        out = tmp_path / "page.json"
        main(["analyze", str(page), "--format", "json", "--out", str(out)])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["title"] == "NOTICE"
        assert data["key_information"]["Document Date"] == "01/02/2024"


# ── Repository commands ──────────────────────────────────────────────

class TestRepositoryCommands:

    def test_ingest_stores_document(self, agreement_file, store_path):
        _ingest(agreement_file, store_path)
        doc = JsonFileDocumentRepository(store_path).get("agreement")
        assert doc.name == "agreement.txt"
        assert doc.type == "text"
        assert doc.metadata["document_type"] == "Agreement"
        assert doc.structured["tables"] == [{"description": "Schedule 1 - Fees", "location": "10"}]

    def test_ingest_with_doc_id(self, agreement_file, store_path):
        main(["ingest", str(agreement_file), "--doc-id", "umowa_2024", "--store-path", str(store_path)])
        assert [d.id for d in JsonFileDocumentRepository(store_path).list()] == ["umowa_2024"]

    def test_documents_listing(self, agreement_file, store_path, capsys):
        _ingest(agreement_file, store_path)
        capsys.readouterr()
        main(["documents", "--store-path", str(store_path)])
        assert "agreement" in capsys.readouterr().out

    def test_documents_empty(self, store_path, capsys):
        main(["documents", "--store-path", str(store_path)])
        assert "Brak dokumentów" in capsys.readouterr().out

    def test_export_plain(self, agreement_file, store_path, tmp_path):
        _ingest(agreement_file, store_path)
        out = tmp_path / "agreement.txt.out"
        main(["export", "agreement", "--format", "plain", "--out", str(out), "--store-path", str(store_path)])
        text = out.read_text(encoding="utf-8")
        assert "# SERVICE AGREEMENT" in text
        assert "- John Smith | Managing Director | 15/01/2024" in text
        assert "OCR CONFIDENCE: 100%" in text

    def test_export_unknown_document(self, store_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["export", "missing", "--store-path", str(store_path)])
        assert exc_info.value.code == 1

    def test_delete(self, agreement_file, store_path, capsys):
        _ingest(agreement_file, store_path)
        main(["delete", "agreement", "--store-path", str(store_path)])
        assert JsonFileDocumentRepository(store_path).list() == []
        # second delete is a no-op, not an error
        main(["delete", "agreement", "--store-path", str(store_path)])
        assert "nie istnieje" in capsys.readouterr().out


# ── Certificates ─────────────────────────────────────────────────────

class TestCertificateCommands:

    def test_issue_and_verify(self, agreement_file, store_path, tmp_path):
        _ingest(agreement_file, store_path)
        cert_out = tmp_path / "cert.txt"
        main([
            "certificate", "agreement",
            "--issuer", "Asha Rao",
            "--designation", "Records Officer",
            "--out", str(cert_out),
            "--store-path", str(store_path),
        ])

        repo = JsonFileDocumentRepository(store_path)
        [cert] = repo.list_certificates("agreement")
        assert cert.issuer_name == "Asha Rao"
        assert repo.get("agreement").verified is True
        assert "I, Asha Rao, hereby certify" in cert_out.read_text(encoding="utf-8")

        main(["verify-certificate", cert.id, "--store-path", str(store_path)])

    def test_verify_fails_after_change(self, agreement_file, store_path):
        _ingest(agreement_file, store_path)
        main(["certificate", "agreement", "--store-path", str(store_path)])

        repo = JsonFileDocumentRepository(store_path)
        [cert] = repo.list_certificates()
        assert cert.issuer_name == "DocuLegalize"
        doc = repo.get("agreement")
        repo.put(replace(doc, content=doc.content + "\nAmended."))

        with pytest.raises(SystemExit) as exc_info:
            main(["verify-certificate", cert.id, "--store-path", str(store_path)])
        assert exc_info.value.code == 1

    def test_verify_unknown_certificate(self, store_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["verify-certificate", "CERT-000000", "--store-path", str(store_path)])
        assert exc_info.value.code == 1

    def test_certificate_for_unknown_document(self, store_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["certificate", "missing", "--store-path", str(store_path)])
        assert exc_info.value.code == 1


# ── Parser and helpers ───────────────────────────────────────────────

def test_parser_lists_all_commands():
    parser = build_parser()
    args = parser.parse_args(["export", "doc-1", "--format", "json", "--store", "db"])
    assert args.command == "export"
    assert args.format == "json"
    assert args.store == "db"

    with pytest.raises(SystemExit):
        parser.parse_args(["export", "doc-1", "--format", "xml"])


def test_split_statements_on_schema():
    stmts = split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))
    assert len(stmts) == 5
    assert stmts[0].startswith("DO $$ BEGIN")
    assert stmts[0].endswith("END $$;")
    assert stmts[1].startswith("CREATE TABLE IF NOT EXISTS document")


def test_split_statements_keeps_semicolons_inside_dollar_blocks():
    sql = "-- comment\nDO $$\nBEGIN\n  PERFORM 1;\nEND $$;\nSELECT 1;\n"
    assert split_statements(sql) == ["DO $$\nBEGIN\n  PERFORM 1;\nEND $$;", "SELECT 1;"]


def test_doc_id_from_url():
    assert doc_id_from_url("https://example.com/legal/terms.html") == "example-com-legal-terms-html"
    assert doc_id_from_url("https://example.com/") == "example-com"


def test_human_size():
    assert human_size(2_516_582) == "2.4 MB"


def test_statement_label():
    stmts = split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))
    assert statement_label(stmts[1]) == "CREATE TABLE IF NOT EXISTS document"
    assert statement_label("SELECT 1;") == "SELECT 1"


def test_apply_schema_dry_run(capsys):
    main(["apply-schema", "--dry-run"])
    out = capsys.readouterr().out
    assert "CREATE TABLE IF NOT EXISTS certificate" in out


def test_apply_schema_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["apply-schema", "--schema", str(tmp_path / "none.sql")])
    assert exc_info.value.code == 1


def test_ingest_url(monkeypatch, store_path):
    import html_parser.parser as html_parser_mod

    monkeypatch.setattr(
        html_parser_mod, "fetch_html_text",
        lambda url: "TERMS OF SERVICE\nThis contract governs use of the site.",
    )
    main(["ingest-url", "https://example.com/terms", "--store-path", str(store_path)])

    doc = JsonFileDocumentRepository(store_path).get("example-com-terms")
    assert doc.type == "html"
    assert doc.name == "https://example.com/terms"
    assert doc.metadata["document_type"] == "Contract"
    assert doc.structured["title"] == "TERMS OF SERVICE"
