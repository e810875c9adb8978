"""Wczytywanie plików wejściowych dlz: tekst, HTML lub PDF (warstwa tekstowa)."""

from __future__ import annotations

import mimetypes
import re
import unicodedata
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from urllib.parse import urlparse

from rich.console import Console

from data_model.documents import RawDocument
from data_model.records import Document

console = Console()

TEXT_SUFFIXES = {".txt", ".md", ".text"}
HTML_SUFFIXES = {".html", ".htm"}
PDF_SUFFIXES  = {".pdf"}


@dataclass(frozen=True, slots=True)
class LoadedSource:
    raw: RawDocument
    confidence: float
    kind: str          # "text" | "html" | "pdf"
    size_bytes: int


def load_file(path: Path) -> LoadedSource:
    """Tekst pliku jako RawDocument; błąd użytkownika → czerwony komunikat + SystemExit(1)."""
    if not path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)

    suffix = path.suffix.lower()
    mime = mimetypes.guess_type(path.name)[0] or ""
    size = path.stat().st_size

    if suffix in PDF_SUFFIXES:
        from pdf.issues import PdfExtractionError
        from pdf.parser import extract_pdf_text
        try:
            result = extract_pdf_text(path)
        except PdfExtractionError as e:
            console.print(f"[red]{e}[/red]")
            raise SystemExit(1)
        return LoadedSource(RawDocument(result.text, path.name, mime or "application/pdf"),
                            result.confidence, "pdf", size)

    if suffix in HTML_SUFFIXES:
        from html_parser.parser import html_to_text
        text = html_to_text(path.read_text(encoding="utf-8", errors="replace"))
        return LoadedSource(RawDocument(text, path.name, mime or "text/html"), 1.0, "html", size)

    if suffix in TEXT_SUFFIXES:
        text = path.read_text(encoding="utf-8", errors="replace")
        return LoadedSource(RawDocument(text, path.name, mime or "text/plain"), 1.0, "text", size)

    console.print(
        f"[red]Nieobsługiwany typ pliku:[/red] {path.suffix or '(brak)'} "
        "(oczekiwano .txt, .md, .html lub .pdf)"
    )
    raise SystemExit(1)


def doc_id_from_url(url: str) -> str:
    """Domyślny id dokumentu z URL (host + path jako slug ASCII)."""
    parsed = urlparse(url)
    host = parsed.netloc.replace(".", "-").replace(":", "-")
    path = parsed.path.strip("/").replace("/", "-")
    raw = f"{host}-{path}" if path else host
    raw = unicodedata.normalize("NFKD", raw).encode("ascii", "ignore").decode("ascii")
    raw = re.sub(r"[^\w-]", "-", raw).strip("-")
    raw = re.sub(r"-{2,}", "-", raw)
    return raw[:80] or "url-doc"


def human_size(n_bytes: int) -> str:
    return f"{n_bytes / (1024 * 1024):.1f} MB"


def new_document(doc_id: str, name: str, kind: str, size_bytes: int, today: date | None = None) -> Document:
    return Document(
        id=doc_id,
        name=name,
        type=kind,
        size=human_size(size_bytes),
        date=(today or date.today()).isoformat(),
    )
