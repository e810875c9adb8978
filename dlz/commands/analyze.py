"""Komenda: dlz analyze — analiza struktury pliku bez zapisu do repozytorium."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from analyzer import analyze_document
from data_model.documents import ExtractedDocument
from dlz._sources import load_file
from export.formats import FORMATS, render

console = Console()


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def show_summary(extracted: ExtractedDocument) -> None:
    structured = extracted.structured
    meta = extracted.metadata

    info = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white", expand=False)
    info.add_column("POLE", no_wrap=True, style="bold cyan")
    info.add_column("WARTOŚĆ", no_wrap=False, max_width=70)
    info.add_row("Title", structured.title or "-")
    info.add_row("Document Type", meta.document_type)
    info.add_row("Confidentiality", meta.confidentiality_level)
    info.add_row("Parties", ", ".join(meta.parties) or "-")
    info.add_row("Dates", ", ".join(meta.dates) or "-")
    for key, value in structured.key_information.items():
        info.add_row(f"[dim]key:[/dim] {key}", value)

    console.print()
    console.print(info)

    outline = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    outline.add_column("LVL", justify="right", no_wrap=True, style="dim")
    outline.add_column("NR", no_wrap=True, style="bold cyan")
    outline.add_column("TYTUŁ", no_wrap=False, max_width=50)
    outline.add_column("LEN", justify="right", no_wrap=True)

    for clause in structured.clauses:
        outline.add_row("1", clause.number, clause.title or "", str(len(clause.content)))
        for sub in clause.subclauses:
            outline.add_row("2", "  " + sub.number, sub.content[:80], str(len(sub.content)))
    for section in structured.sections:
        indent = "  " * max(0, section.level - 1)
        outline.add_row(str(section.level), "", indent + (section.heading or "(bez nagłówka)"),
                        str(len(section.content)))

    console.print(outline)
    console.print(
        f"  [dim]{len(structured.clauses)} klauzul, {len(structured.sections)} sekcji, "
        f"{len(structured.tables)} tabel, {len(structured.signatures)} podpisów, "
        f"{len(structured.legal_references)} odwołań[/dim]\n"
    )


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    source = load_file(Path(args.file))
    extracted = analyze_document(source.raw, source.confidence)

    output = render(args.format, extracted.structured, extracted.metadata)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(output, encoding="utf-8")
        console.print(f"[green]Zapisano:[/green] {out_path} ({args.format})")
    elif not args.show:
        console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")

    if args.show:
        show_summary(extracted)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "analyze",
        help="Analizuje strukturę pliku (.txt, .md, .html, .pdf) i wypisuje wynik.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyodrębnia strukturę dokumentu prawnego: klauzule lub sekcje, tabele,
podpisy, odwołania prawne, definicje i kluczowe informacje.

Przykłady:
  dlz analyze umowa.txt
  dlz analyze umowa.pdf --format json --out umowa.json
  dlz analyze faktura.txt --show
        """,
    )
    p.add_argument("file", metavar="PLIK", help="Ścieżka do pliku wejściowego.")
    p.add_argument(
        "--format",
        choices=sorted(FORMATS),
        default="structured",
        help="Format wyniku: plain, json lub structured (domyślnie: structured).",
    )
    p.add_argument("--out", metavar="PLIK", default=None, help="Zapisz wynik do pliku.")
    p.add_argument("--show", action="store_true", help="Wyświetl podsumowanie w tabelach.")
    p.set_defaults(func=run)
