"""Komenda: dlz verify-certificate — weryfikuje certyfikat względem bieżącej treści dokumentu."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone

from rich.console import Console

from certificates.section65b import verify_certificate
from dlz._store import add_store_arguments, get_document_or_exit, repository_from_args
from store.repository import CertificateNotFoundError

console = Console()


def run(args: argparse.Namespace) -> None:
    repo = repository_from_args(args)
    try:
        cert = repo.get_certificate(args.cert_id)
    except CertificateNotFoundError:
        console.print(f"[red]Brak certyfikatu:[/red] {args.cert_id}")
        raise SystemExit(1)
    except Exception as e:
        console.print(f"[red]Błąd odczytu repozytorium:[/red] {e}")
        raise SystemExit(1)

    doc = get_document_or_exit(repo, cert.document_id)
    result = verify_certificate(cert, doc, now=datetime.now(timezone.utc))

    if result.is_valid:
        console.print(f"[green]{cert.id}: {result.message}[/green]")
    else:
        console.print(f"[red]{cert.id}: {result.message}[/red]")
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "verify-certificate",
        help="Weryfikuje certyfikat Section 65B.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Sprawdza status i termin ważności certyfikatu oraz zgodność skrótu SHA-256
z bieżącą treścią dokumentu. Kod wyjścia 1, gdy certyfikat jest nieważny.

Przykład:
  dlz verify-certificate CERT-AB1234
        """,
    )
    p.add_argument("cert_id", metavar="CERT_ID", help="Identyfikator certyfikatu.")
    add_store_arguments(p)
    p.set_defaults(func=run)
