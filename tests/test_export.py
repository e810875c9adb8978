"""
Tests for export.formats — plain, JSON and structured renderings.
"""

import json

import pytest

from analyzer import analyze, extract_metadata
from data_model.documents import StructuredContent
from export.formats import (
    ExportFormatError,
    from_json,
    metadata_from_dict,
    render,
    to_json,
    to_plain_text,
    to_structured_text,
)


@pytest.fixture
def agreement(service_agreement) -> StructuredContent:
    return analyze(service_agreement, "service-agreement.txt")


@pytest.fixture
def agreement_meta(service_agreement):
    return extract_metadata(service_agreement, "service-agreement.txt", 0.92)


# ── JSON ─────────────────────────────────────────────────────────────

class TestJson:

    def test_round_trip(self, agreement, clause_contract):
        assert from_json(to_json(agreement)) == agreement
        clauses = analyze(clause_contract)
        assert from_json(to_json(clauses)) == clauses

    def test_round_trip_ignores_metadata_block(self, agreement, agreement_meta):
        dumped = to_json(agreement, agreement_meta)
        assert json.loads(dumped)["metadata"]["document_type"] == "Agreement"
        assert from_json(dumped) == agreement

    def test_empty_structure(self):
        assert from_json(to_json(StructuredContent())) == StructuredContent()

    def test_invalid_json(self):
        with pytest.raises(ExportFormatError):
            from_json("{not json")

    def test_schema_errors_are_reported(self):
        data = json.loads(to_json(StructuredContent()))
        data["key_information"] = {"Invoice Number": ""}
        del data["tables"]
        with pytest.raises(ExportFormatError) as exc_info:
            from_json(json.dumps(data))
        errors = exc_info.value.errors
        assert len(errors) == 2
        assert any(e.startswith("/key_information/Invoice Number:") for e in errors)
        assert any(e.startswith("/:") and "tables" in e for e in errors)

    def test_duplicate_references_rejected(self):
        data = json.loads(to_json(StructuredContent()))
        data["legal_references"] = ["Section 1", "Section 1"]
        with pytest.raises(ExportFormatError):
            from_json(json.dumps(data))

    def test_metadata_from_dict(self, agreement_meta):
        data = json.loads(to_json(StructuredContent(), agreement_meta))["metadata"]
        data["unexpected"] = "ignored"
        assert metadata_from_dict(data) == agreement_meta

    def test_metadata_default_confidence(self):
        assert metadata_from_dict({}).confidence == 1.0


# ── Plain text ───────────────────────────────────────────────────────

class TestPlainText:

    def test_sections_with_heading_markers(self, agreement, agreement_meta):
        text = to_plain_text(agreement, agreement_meta)
        assert text.startswith("SERVICE AGREEMENT\n")
        assert "# SERVICE AGREEMENT\n" in text
        assert "- Section 65B of the Indian Evidence Act, 1872" in text
        assert "- Schedule 1 - Fees (line 10)" in text
        assert "- John Smith | Managing Director | 15/01/2024" in text
        assert '- "Services" means the consulting services described in Schedule 1.' in text
        assert "- Party A: ABC Corp" in text
        assert text.endswith("OCR CONFIDENCE: 92%\n")

    def test_clauses(self, clause_contract):
        text = to_plain_text(analyze(clause_contract))
        assert "CLAUSE 1: Term\nThis is term text.\n  1.1 First sub.\n  1.2 Second sub.\n" in text
        assert "CLAUSE 2: Payment\nPayment text." in text
        assert "OCR CONFIDENCE" not in text

    def test_missing_signature_fields(self):
        structured = analyze("Signature: ______________")
        assert "- - | - | -" in to_plain_text(structured)

    def test_empty(self):
        assert to_plain_text(StructuredContent()) == "\n"


# ── Structured report ────────────────────────────────────────────────

class TestStructuredText:

    def test_report(self, agreement, agreement_meta):
        text = to_structured_text(agreement, agreement_meta)
        assert text.startswith("SERVICE AGREEMENT\n" + "=" * 17 + "\n")
        assert "DOCUMENT TYPE: Agreement" in text
        assert "DATE: 15/01/2024" in text
        assert "PARTIES: ABC Corp, XYZ Limited" in text
        assert "KEY INFORMATION:\n  - Document Type: Agreement\n" in text
        assert "  - Schedule 1 - Fees at line 10" in text
        assert "  - John Smith (Managing Director) - Date: 15/01/2024" in text
        assert "Legal References:\n  - Section 65B of the Indian Evidence Act, 1872" in text
        assert text.endswith("OCR CONFIDENCE: 92%\n")

    def test_clause_headers(self, clause_contract):
        text = to_structured_text(analyze(clause_contract))
        assert "CLAUSE 1 — Term" in text
        assert "    1.1  First sub." in text


# ── Dispatch ─────────────────────────────────────────────────────────

def test_render_dispatches_by_name(agreement, agreement_meta):
    assert render("json", agreement) == to_json(agreement)
    assert render("plain", agreement, agreement_meta) == to_plain_text(agreement, agreement_meta)
    assert render("structured", agreement) == to_structured_text(agreement)


def test_render_unknown_format(agreement):
    with pytest.raises(ExportFormatError, match="xml"):
        render("xml", agreement)
