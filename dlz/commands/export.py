"""Komenda: dlz export — eksport zapisanego dokumentu (plain | json | structured)."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from analyzer import analyze, extract_metadata
from dlz._store import add_store_arguments, get_document_or_exit, repository_from_args
from export.formats import FORMATS, ExportFormatError, metadata_from_dict, render, structured_from_dict

console = Console()


def run(args: argparse.Namespace) -> None:
    repo = repository_from_args(args)
    doc = get_document_or_exit(repo, args.doc_id)

    if doc.structured is None:
        if not doc.content:
            console.print(f"[red]Dokument nie ma wyekstrahowanego tekstu:[/red] {doc.id}")
            raise SystemExit(1)
        # dokument zapisany bez analizy: liczymy strukturę z treści
        structured = analyze(doc.content, doc.name)
        metadata = extract_metadata(doc.content, doc.name)
    else:
        try:
            structured = structured_from_dict(doc.structured)
        except ExportFormatError as e:
            console.print(f"[red]Uszkodzona struktura dokumentu {doc.id}:[/red] {e}")
            for err in e.errors:
                console.print(f"  [dim]{err}[/dim]")
            raise SystemExit(1)
        metadata = metadata_from_dict(doc.metadata) if doc.metadata else None

    output = render(args.format, structured, metadata)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(output, encoding="utf-8")
        console.print(f"[green]Zapisano:[/green] {out_path} ({args.format})")
    else:
        console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "export",
        help="Eksportuje strukturę zapisanego dokumentu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Eksportuje wynik analizy dokumentu z repozytorium w wybranym formacie.

Przykłady:
  dlz export umowa_2024
  dlz export umowa_2024 --format json --out umowa.json
  dlz export umowa_2024 --format plain
        """,
    )
    p.add_argument("doc_id", metavar="DOC_ID", help="Identyfikator dokumentu.")
    p.add_argument(
        "--format",
        choices=sorted(FORMATS),
        default="structured",
        help="Format: plain, json lub structured (domyślnie: structured).",
    )
    p.add_argument("--out", metavar="PLIK", default=None, help="Zapisz wynik do pliku.")
    add_store_arguments(p)
    p.set_defaults(func=run)
