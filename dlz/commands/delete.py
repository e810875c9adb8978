"""Komenda: dlz delete — usuwa dokument (i jego certyfikaty) z repozytorium."""

from __future__ import annotations

import argparse

from rich.console import Console

from dlz._store import add_store_arguments, repository_from_args

console = Console()


def run(args: argparse.Namespace) -> None:
    repo = repository_from_args(args)
    try:
        removed = repo.delete(args.doc_id)
    except Exception as e:
        console.print(f"[red]Błąd repozytorium:[/red] {e}")
        raise SystemExit(1)

    if removed:
        console.print(f"[green]Usunięto dokument[/green] [cyan]{args.doc_id}[/cyan]")
    else:
        console.print(f"[yellow]Dokument [bold]{args.doc_id}[/bold] nie istnieje — pominięto.[/yellow]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "delete",
        help="Usuwa dokument z repozytorium (bez potwierdzenia).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Usuwa dokument wraz z jego certyfikatami. Nieznany identyfikator nie jest błędem.

Przykład:
  dlz delete umowa_2024
        """,
    )
    p.add_argument("doc_id", metavar="DOC_ID", help="Identyfikator dokumentu.")
    add_store_arguments(p)
    p.set_defaults(func=run)
