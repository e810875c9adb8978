"""Komenda: dlz ingest — analiza pliku i zapis dokumentu w repozytorium."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from analyzer import analyze_document
from data_model.documents import RawDocument
from data_model.records import Document
from dlz._sources import load_file, new_document
from dlz._store import add_store_arguments, repository_from_args
from dlz.commands.analyze import show_summary
from store.repository import DocumentRepository, save_extracted_text

console = Console()


def store_document(
    repo: DocumentRepository,
    document: Document,
    raw: RawDocument,
    confidence: float,
    show: bool = False,
) -> Document:
    """Analizuje tekst, zapisuje dokument (upsert) i wynik ekstrakcji."""
    extracted = analyze_document(raw, confidence)
    try:
        repo.put(document)
        saved = save_extracted_text(repo, document.id, extracted)
    except Exception as e:
        console.print(f"[red]Błąd zapisu do repozytorium:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"[green]Zapisano dokument[/green] [cyan]{saved.id}[/cyan] "
        f"({extracted.metadata.document_type}, {extracted.metadata.total_words} słów)"
    )
    if show:
        show_summary(extracted)
    return saved


def run(args: argparse.Namespace) -> None:
    path = Path(args.file)
    source = load_file(path)
    doc_id: str = args.doc_id or path.stem

    console.print(f"Analiza [bold]{path}[/bold] (doc_id=[cyan]{doc_id}[/cyan]) …")

    repo = repository_from_args(args)
    document = new_document(doc_id, path.name, source.kind, source.size_bytes)
    store_document(repo, document, source.raw, source.confidence, args.show)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "ingest",
        help="Analizuje plik i zapisuje dokument w repozytorium.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje plik (.txt, .md, .html, .pdf), analizuje jego strukturę i zapisuje
dokument wraz z wynikiem ekstrakcji (tekst, metadane, struktura).

Przykłady:
  dlz ingest umowa.pdf --show
  dlz ingest umowa.txt --doc-id umowa_2024
  dlz ingest umowa.txt --store db
        """,
    )
    p.add_argument("file", metavar="PLIK", help="Ścieżka do pliku wejściowego.")
    p.add_argument(
        "--doc-id",
        metavar="ID",
        default=None,
        help="Identyfikator dokumentu (domyślnie: nazwa pliku bez rozszerzenia).",
    )
    add_store_arguments(p)
    p.add_argument("--show", action="store_true", help="Wyświetl podsumowanie analizy.")
    p.set_defaults(func=run)
