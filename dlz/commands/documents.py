"""Komenda: dlz documents — lista dokumentów w repozytorium."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from dlz._store import add_store_arguments, repository_from_args

console = Console()


def run(args: argparse.Namespace) -> None:
    repo = repository_from_args(args)
    try:
        documents = repo.list()
    except Exception as e:
        console.print(f"[red]Błąd odczytu repozytorium:[/red] {e}")
        raise SystemExit(1)

    if not documents:
        console.print("[yellow]Brak dokumentów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID", no_wrap=True, style="bold cyan")
    table.add_column("NAZWA", no_wrap=False, max_width=40)
    table.add_column("TYP", no_wrap=True)
    table.add_column("ROZMIAR", justify="right", no_wrap=True)
    table.add_column("DATA", no_wrap=True)
    table.add_column("RODZAJ", no_wrap=True)
    table.add_column("CERT", justify="center", no_wrap=True)

    for doc in documents:
        table.add_row(
            doc.id,
            doc.name,
            doc.type,
            doc.size,
            doc.date,
            doc.metadata.get("document_type", "-"),
            "[green]✓[/green]" if doc.verified else "-",
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(documents)} dokumentów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "documents",
        help="Listuje dokumenty w repozytorium.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla dokumenty zapisane w repozytorium (id, nazwa, typ, rozmiar,
data dodania, rodzaj dokumentu, status certyfikatu).

Przykłady:
  dlz documents
  dlz documents --store db
        """,
    )
    add_store_arguments(p)
    p.set_defaults(func=run)
