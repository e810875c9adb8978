"""Komenda: dlz ingest-url — pobiera stronę HTML, analizuje i zapisuje dokument."""

from __future__ import annotations

import argparse

from rich.console import Console

from data_model.documents import RawDocument
from dlz._sources import doc_id_from_url, new_document
from dlz._store import add_store_arguments, repository_from_args
from dlz.commands.ingest import store_document

console = Console()


def run(args: argparse.Namespace) -> None:
    url: str = args.url
    doc_id: str = args.doc_id or doc_id_from_url(url)

    console.print(f"Pobieranie [bold]{url}[/bold] (doc_id=[cyan]{doc_id}[/cyan]) …")

    try:
        from html_parser.parser import fetch_html_text
        text = fetch_html_text(url)
    except Exception as e:
        console.print(f"[red]Błąd pobierania/parsowania:[/red] {e}")
        raise SystemExit(1)

    repo = repository_from_args(args)
    document = new_document(doc_id, url, "html", len(text.encode("utf-8")))
    store_document(repo, document, RawDocument(text, url, "text/html"), 1.0, args.show)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "ingest-url",
        help="Pobiera stronę HTML z URL, analizuje i zapisuje dokument.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pobiera stronę HTML, zamienia ją na tekst (nagłówki w osobnych liniach,
wiersze tabel jako "| a | b |") i zapisuje dokument w repozytorium.

Przykłady:
  dlz ingest-url https://example.com/terms --show
  dlz ingest-url https://example.com/terms --doc-id terms_2024 --store db
        """,
    )
    p.add_argument("url", metavar="URL", help="Adres strony HTML.")
    p.add_argument(
        "--doc-id",
        metavar="ID",
        default=None,
        help="Identyfikator dokumentu (domyślnie: slug z hosta i ścieżki URL).",
    )
    add_store_arguments(p)
    p.add_argument("--show", action="store_true", help="Wyświetl podsumowanie analizy.")
    p.set_defaults(func=run)
