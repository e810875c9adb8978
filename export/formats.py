"""
export/formats.py — serializacja StructuredContent do trzech formatów.

  to_plain_text(structured, metadata)      — tekst z markerami nagłówków "#"
  to_json(structured, metadata)            — bezpośredni zrzut struktury
  from_json(text)                          — odwrotność to_json (walidacja JSON Schema)
  to_structured_text(structured, metadata) — czytelny raport jak zakładka "Structured"

Wszystkie formaty zawierają dosłownie tabele, podpisy i odwołania prawne.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any

import jsonschema

from data_model.documents import (
    Clause,
    OCRMetadata,
    Section,
    SignatureBlock,
    StructuredContent,
    Subclause,
    TableRef,
)
from export.schema import STRUCTURED_CONTENT_SCHEMA


class ExportFormatError(ValueError):
    """Zrzut JSON nie odpowiada schematowi StructuredContent."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def to_json(
    structured: StructuredContent,
    metadata: OCRMetadata | None = None,
    indent: int | None = 2,
) -> str:
    data: dict[str, Any] = asdict(structured)
    if metadata is not None:
        data["metadata"] = asdict(metadata)
    return json.dumps(data, ensure_ascii=False, indent=indent)


def from_json(text: str) -> StructuredContent:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExportFormatError(f"Niepoprawny JSON: {e}") from e
    return structured_from_dict(data)


def structured_from_dict(data: Any) -> StructuredContent:
    """Odbudowuje StructuredContent ze słownika (po walidacji schematem)."""
    validator = jsonschema.Draft202012Validator(STRUCTURED_CONTENT_SCHEMA)
    errors = [
        ("/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else "/")
        + f": {e.message}"
        for e in validator.iter_errors(data)
    ]
    if errors:
        raise ExportFormatError(
            f"Zrzut nie pasuje do schematu StructuredContent ({len(errors)} błędów)",
            errors,
        )

    return StructuredContent(
        title=data.get("title"),
        sections=[
            Section(heading=s.get("heading"), content=s["content"], level=s["level"])
            for s in data["sections"]
        ],
        clauses=[
            Clause(
                number=c["number"],
                title=c.get("title"),
                content=c["content"],
                subclauses=[
                    Subclause(number=sc["number"], content=sc["content"])
                    for sc in c.get("subclauses", [])
                ],
            )
            for c in data["clauses"]
        ],
        tables=[TableRef(description=t["description"], location=t["location"]) for t in data["tables"]],
        signatures=[
            SignatureBlock(name=s.get("name"), position=s.get("position"), date=s.get("date"))
            for s in data["signatures"]
        ],
        legal_references=list(data["legal_references"]),
        definitions=dict(data["definitions"]),
        key_information=dict(data["key_information"]),
    )


def metadata_from_dict(data: dict[str, Any]) -> OCRMetadata:
    """Odbudowuje OCRMetadata; nieznane klucze są pomijane."""
    known = {f.name for f in fields(OCRMetadata)}
    values = {k: v for k, v in data.items() if k in known}
    values.setdefault("confidence", 1.0)
    return OCRMetadata(**values)


# ---------------------------------------------------------------------------
# Tekst zwykły
# ---------------------------------------------------------------------------

def to_plain_text(
    structured: StructuredContent,
    metadata: OCRMetadata | None = None,
) -> str:
    parts: list[str] = []

    if structured.title:
        parts.append(structured.title)
        parts.append("")

    for section in structured.sections:
        if section.heading:
            parts.append(f"{'#' * max(1, section.level)} {section.heading}")
        parts.append(section.content)
        parts.append("")

    for clause in structured.clauses:
        header = f"CLAUSE {clause.number}"
        if clause.title:
            header += f": {clause.title}"
        parts.append(header)
        if clause.content:
            parts.append(clause.content)
        for sub in clause.subclauses:
            parts.append(f"  {sub.number} {sub.content}")
        parts.append("")

    _append_block(parts, "KEY INFORMATION",
                  [f"{k}: {v}" for k, v in structured.key_information.items()])
    _append_block(parts, "DEFINITIONS",
                  [f'"{term}" means {text}' for term, text in structured.definitions.items()])
    _append_block(parts, "LEGAL REFERENCES", structured.legal_references)
    _append_block(parts, "TABLES",
                  [f"{t.description} (line {t.location})" for t in structured.tables])
    _append_block(parts, "SIGNATURES",
                  [_signature_plain(s) for s in structured.signatures])

    if metadata is not None:
        parts.append(f"OCR CONFIDENCE: {round(metadata.confidence * 100)}%")

    return "\n".join(parts).rstrip() + "\n"


def _signature_plain(sig: SignatureBlock) -> str:
    return " | ".join(v or "-" for v in (sig.name, sig.position, sig.date))


def _append_block(parts: list[str], header: str, items: list[str]) -> None:
    if not items:
        return
    parts.append(header)
    parts.extend(f"- {item}" for item in items)
    parts.append("")


# ---------------------------------------------------------------------------
# Raport "structured"
# ---------------------------------------------------------------------------

def to_structured_text(
    structured: StructuredContent,
    metadata: OCRMetadata | None = None,
) -> str:
    parts: list[str] = []

    if structured.title:
        parts += [structured.title, "=" * len(structured.title), ""]

    if metadata is not None:
        parts.append(f"DOCUMENT TYPE: {metadata.document_type}")
        if metadata.dates:
            parts.append(f"DATE: {metadata.dates[0]}")
        if metadata.parties:
            parts.append(f"PARTIES: {', '.join(metadata.parties)}")
        parts.append("")

    if structured.key_information:
        parts.append("KEY INFORMATION:")
        parts.extend(f"  - {k}: {v}" for k, v in structured.key_information.items())
        parts.append("")

    for section in structured.sections:
        if section.heading:
            parts.append(section.heading.upper() if section.level == 1 else section.heading)
        parts.append(section.content)
        parts.append("")

    for clause in structured.clauses:
        parts.append(f"CLAUSE {clause.number}" + (f" — {clause.title}" if clause.title else ""))
        if clause.content:
            parts.append(clause.content)
        parts.extend(f"    {sub.number}  {sub.content}" for sub in clause.subclauses)
        parts.append("")

    if structured.definitions:
        parts.append("Definitions:")
        parts.extend(f"  - {term}: {text}" for term, text in structured.definitions.items())
        parts.append("")

    if structured.legal_references:
        parts.append("Legal References:")
        parts.extend(f"  - {ref}" for ref in structured.legal_references)
        parts.append("")

    if structured.tables:
        parts.append("Tables Detected:")
        parts.extend(f"  - {t.description} at line {t.location}" for t in structured.tables)
        parts.append("")

    if structured.signatures:
        parts.append("Signatures:")
        parts.extend(f"  - {_signature_structured(s)}" for s in structured.signatures)
        parts.append("")

    if metadata is not None:
        parts.append(f"OCR CONFIDENCE: {round(metadata.confidence * 100)}%")

    return "\n".join(parts).rstrip() + "\n"


def _signature_structured(sig: SignatureBlock) -> str:
    text = sig.name or "(unnamed)"
    if sig.position:
        text += f" ({sig.position})"
    if sig.date:
        text += f" - Date: {sig.date}"
    return text


FORMATS = {
    "plain": to_plain_text,
    "json": to_json,
    "structured": to_structured_text,
}


def render(fmt: str, structured: StructuredContent, metadata: OCRMetadata | None = None) -> str:
    try:
        renderer = FORMATS[fmt]
    except KeyError:
        raise ExportFormatError(f"Nieznany format eksportu: {fmt!r}") from None
    return renderer(structured, metadata)
