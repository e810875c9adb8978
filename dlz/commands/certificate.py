"""Komenda: dlz certificate — wystawia certyfikat Section 65B dla dokumentu."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from certificates.section65b import Issuer, generate_certificate, render_certificate_text
from dlz import _config
from dlz._store import add_store_arguments, get_document_or_exit, repository_from_args

console = Console()


def run(args: argparse.Namespace) -> None:
    repo = repository_from_args(args)
    doc = get_document_or_exit(repo, args.doc_id)

    if not doc.content:
        console.print(f"[red]Dokument nie ma wyekstrahowanego tekstu:[/red] {doc.id}")
        raise SystemExit(1)

    issuer = Issuer(
        name=args.issuer or _config.default_issuer(),
        designation=args.designation or "",
        organization=args.organization or "",
    )
    cert = generate_certificate(doc, issuer, now=datetime.now(timezone.utc))

    try:
        repo.put_certificate(cert)
        repo.put(replace(doc, verified=True))
    except Exception as e:
        console.print(f"[red]Błąd zapisu do repozytorium:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"[green]Wystawiono certyfikat[/green] [bold]{cert.id}[/bold] "
        f"dla [cyan]{doc.id}[/cyan] (ważny do {cert.expires_at[:10]})"
    )
    console.print(f"  [dim]{cert.document_hash}[/dim]")

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(render_certificate_text(cert, doc), encoding="utf-8")
        console.print(f"[green]Zapisano:[/green] {out_path}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "certificate",
        help="Wystawia certyfikat Section 65B dla dokumentu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wystawia certyfikat dopuszczalności dowodu elektronicznego (Section 65B,
Indian Evidence Act 1872) dla zapisanego dokumentu. Certyfikat zawiera skrót
SHA-256 treści, jest ważny 5 lat, a dokument zostaje oznaczony jako zweryfikowany.

Przykłady:
  dlz certificate umowa_2024 --issuer "Jan Kowalski"
  dlz certificate umowa_2024 --issuer "Jan Kowalski" --designation "Notary" \\
      --organization "ABC Legal" --out cert.txt
        """,
    )
    p.add_argument("doc_id", metavar="DOC_ID", help="Identyfikator dokumentu.")
    p.add_argument("--issuer", metavar="NAZWA", default=None,
                   help="Osoba poświadczająca (domyślnie: $DLZ_ISSUER).")
    p.add_argument("--designation", metavar="STANOWISKO", default=None, help="Stanowisko osoby poświadczającej.")
    p.add_argument("--organization", metavar="ORGANIZACJA", default=None, help="Organizacja.")
    p.add_argument("--out", metavar="PLIK", default=None, help="Zapisz tekst certyfikatu do pliku.")
    add_store_arguments(p)
    p.set_defaults(func=run)
